"""next-affected CLI — next-affected init / next-affected run.

Entry point for the ``next-affected`` command-line interface.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

_RUN_EXAMPLES = """\
Examples:
  $ next-affected run src/components/Button.tsx
  $ next-affected run --base main
  $ next-affected run --base commit1 --head commit2
  $ next-affected run --uncommitted
  $ next-affected run --only-uncommitted
"""


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the next-affected CLI."""
    parser = argparse.ArgumentParser(
        prog="next-affected",
        description="List Next.js pages affected by changes.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # next-affected init
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize next-affected configuration",
    )
    init_parser.add_argument(
        "--project", "-p", default=".", help="Directory to write the config file into",
    )

    # next-affected run
    run_parser = subparsers.add_parser(
        "run",
        help="List Next.js pages affected by changes",
        epilog=_RUN_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    run_parser.add_argument(
        "component", nargs="?", default=None, help="Changed file to analyze",
    )
    run_parser.add_argument("--project", "-p", default=".", help="Path to the Next.js project")
    run_parser.add_argument("--base", "-b", default=None, help="Base commit or branch")
    run_parser.add_argument("--head", "-H", default="HEAD", help="Head commit or branch")
    run_parser.add_argument(
        "--depth", "-d", type=int, default=None, help="Max depth for dependency traversal",
    )
    run_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging",
    )
    run_parser.add_argument(
        "--uncommitted", "-u", action="store_true", help="Include uncommitted changes",
    )
    run_parser.add_argument(
        "--only-uncommitted", "-o", action="store_true", help="Only include uncommitted changes",
    )
    run_parser.add_argument(
        "--graph", default=None, help="Use a dependency graph exported with 'madge --json'",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from next_affected import __version__

    return __version__


def _init(args: argparse.Namespace) -> int:
    from next_affected.config_loader import init_config

    path, created = init_config(Path(args.project))
    if created:
        print(f"Created {path.name} with default settings.")
    else:
        print(f"{path.name} already exists.")
    return 0


def _run(args: argparse.Namespace) -> int:
    from next_affected.observability import EventLog, RunCollector, print_run_summary
    from next_affected.report import print_affected_pages
    from next_affected.run import RunOptions, run_next_affected

    if args.depth is not None and args.depth < 0:
        print("Error: --depth must be a non-negative integer.", file=sys.stderr)
        return 1

    options = RunOptions(
        project=Path(args.project),
        base=args.base,
        head=args.head,
        depth=args.depth,
        verbose=args.verbose,
        uncommitted=args.uncommitted,
        only_uncommitted=args.only_uncommitted,
        graph_file=Path(args.graph) if args.graph else None,
    )
    collector = RunCollector(EventLog())
    result = asyncio.run(run_next_affected(args.component, options, collector=collector))

    if result.mode == "changes" and not result.changed_files:
        print("No changes detected between the specified commits or branches.")
        return 0

    print_affected_pages(result.routes)
    if options.verbose:
        print_run_summary(collector.log)
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    from next_affected._errors import NextAffectedError

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "init":
            code = _init(args)
        else:
            code = _run(args)
    except NextAffectedError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
