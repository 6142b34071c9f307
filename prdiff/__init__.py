"""prdiff - unified diff hunk parsing and content reconstruction."""

__version__ = "0.1.0"
