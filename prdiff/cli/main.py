"""Entry point for the prdiff CLI."""

import asyncio
import logging
import sys

from dotenv import load_dotenv
from rich.markup import escape

from prdiff.cli.arg_parser import build_parser
from prdiff.config.loader import load_config
from prdiff.core.errors import PrdiffError
from prdiff.display.console import get_console

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Send prdiff.* log records to stderr at the given level.

    Replaces any handlers from a previous call and stops propagation to the
    root logger.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))

    prdiff_logger = logging.getLogger("prdiff")
    prdiff_logger.setLevel(level)
    prdiff_logger.handlers.clear()
    prdiff_logger.addHandler(handler)
    prdiff_logger.propagate = False


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    load_dotenv()
    console = get_console()

    try:
        config = load_config(args.config)
        configure_logging("DEBUG" if args.verbose else config.logging.level)

        if args.command == "hunks":
            from prdiff.cli.commands import cmd_hunks

            return cmd_hunks(args.patch_file, config, as_json=args.json)
        if args.command == "apply":
            from prdiff.cli.commands import cmd_apply

            return cmd_apply(
                args.original,
                args.patch_file,
                config,
                output=args.output,
                strict=args.strict,
            )
        if args.command == "pr":
            from prdiff.cli.commands import cmd_pr

            return asyncio.run(cmd_pr(
                args.number, config, repository=args.repo, base=args.base, show=args.show,
            ))
    except PrdiffError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        return 1

    parser.print_help()
    return 1


def run() -> None:
    """Console script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
