from __future__ import annotations

import argparse
import json

from .config import load_config
from .logging_utils import configure_logging
from .walker import run_walk


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="timing-archive", description="Mirror the live timing static archive locally")
    commands = parser.add_subparsers(dest="command", required=True)
    catalog = commands.add_parser("catalog", help="cache every session stream of one season")
    catalog.add_argument("year", type=int, help="year to catalog")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()

    report = run_walk(args.year, load_config())
    if not report.found:
        print(f"No meetings found for {args.year}")
        return
    print(json.dumps({"status": "done", **report.summary()}, indent=2))


if __name__ == "__main__":
    main()
