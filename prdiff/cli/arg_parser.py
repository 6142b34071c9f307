"""Argument parsing for the prdiff CLI."""

import argparse
from pathlib import Path


def add_config_args(parser: argparse.ArgumentParser) -> None:
    """Add --config and --verbose arguments to a parser."""
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file path (default: ~/.prdiff/config.json merged with ./.prdiff/config.json)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="prdiff",
        description="Parse unified diff hunks and reconstruct changed files",
    )
    add_config_args(parser)

    subparsers = parser.add_subparsers(dest="command")

    # prdiff hunks - Show parsed hunks of a patch file
    hunks_parser = subparsers.add_parser(
        "hunks",
        help="Show the hunks of a patch with line numbers and positions",
    )
    hunks_parser.add_argument("patch_file", type=Path, help="Patch file ('-' for stdin)")
    hunks_parser.add_argument(
        "--json",
        action="store_true",
        help="Print hunks as JSON instead of tables",
    )

    # prdiff apply - Reconstruct new content from original + patch
    apply_parser = subparsers.add_parser(
        "apply",
        help="Reconstruct a file's new content from its original and a patch",
    )
    apply_parser.add_argument("original", type=Path, help="Original file")
    apply_parser.add_argument("patch_file", type=Path, help="Patch file ('-' for stdin)")
    apply_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Write the result here instead of stdout",
    )
    apply_parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on out-of-order or overlapping hunks (overrides config)",
    )

    # prdiff pr - Summarize a GitHub pull request's file changes
    pr_parser = subparsers.add_parser(
        "pr",
        help="Summarize the file changes of a GitHub pull request",
    )
    pr_parser.add_argument("number", type=int, help="Pull request number")
    pr_parser.add_argument(
        "--repo",
        help="Repository as owner/name (default: github.repository from config)",
    )
    pr_parser.add_argument(
        "--base",
        help="Base commit SHA (default: the pull request's base SHA)",
    )
    pr_parser.add_argument(
        "--show",
        metavar="PATH",
        help="Print the reconstructed new content of PATH instead of the summary",
    )

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)
