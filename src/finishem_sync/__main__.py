"""CLI entry point — ``python -m finishem_sync``."""

from __future__ import annotations

import argparse

from dotenv import load_dotenv

load_dotenv()

from finishem_sync.engine import SyncEngine
from finishem_sync.registry import list_registered


def _print_modules() -> None:
    """Print all registered extractors, selectors, and dispatchers."""
    modules = list_registered()
    for category, entries in modules.items():
        print(f"\n{category.upper()}")
        print("-" * len(category))
        if not entries:
            print("  (none)")
        for key, class_name in entries.items():
            print(f"  {key:30s} {class_name}")
    print()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="finishem-sync",
        description=(
            "Send unchecked checklist items from a note to Finish-Em and "
            "mark them done in the note."
        ),
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to the sync YAML config file.",
    )
    parser.add_argument(
        "-d", "--document",
        help="Document to sync, relative to the vault root (overrides the config).",
    )
    parser.add_argument(
        "-a", "--accept",
        action="append",
        metavar="TEXT",
        help=(
            "Accept the item with exactly this text instead of asking. "
            "May be given several times."
        ),
    )
    parser.add_argument(
        "-s", "--status",
        action="store_true",
        default=False,
        help="Print how many unchecked items the document has, then exit.",
    )
    parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        default=False,
        help="Show what would be sent without sending or rewriting anything.",
    )
    parser.add_argument(
        "-l", "--list-modules",
        action="store_true",
        default=False,
        help="List all registered extractors, selectors, and dispatchers, then exit.",
    )

    args = parser.parse_args(argv)

    if args.list_modules:
        _print_modules()
        return

    if args.config is None:
        parser.error("the following argument is required: -c/--config")

    engine = SyncEngine(args.config)

    if args.status:
        count = engine.status(document=args.document)
        if count is None:
            print("No active file open.")
        else:
            print(f"Found {count} todos")
        return

    result = engine.run(
        document=args.document,
        accepted=args.accept,
        dry_run=args.dry_run,
    )
    print(
        f"Found {result.found} todos, accepted {result.accepted}, "
        f"sent {result.dispatched}, failed {result.failed}"
        + (", note updated" if result.updated else "")
    )


if __name__ == "__main__":
    main()
