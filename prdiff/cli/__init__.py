"""Command-line interface for prdiff."""
