from __future__ import annotations
import argparse
from ..core.logger import configure_logging
from .commands import render as cmd_render


def entrypoint():
    main()


def main() -> None:
    parser = argparse.ArgumentParser(description="Style Renderer CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    r = sub.add_parser("render", help="Compile a JSON style sheet to CSS")
    r.add_argument("sheet", type=str, help="Path to the sheet .json file")
    r.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output CSS file (defaults to stdout)",
    )
    r.add_argument(
        "--class-map",
        type=str,
        default=None,
        help="Write a JSON map of rule/keyframe names to class/animation names",
    )
    r.add_argument(
        "--prefix",
        action="append",
        default=None,
        help="Vendor prefix for @keyframes (repeatable, replaces the defaults)",
    )
    r.add_argument(
        "--units",
        action="store_true",
        help="Append px to bare numeric dimension values",
    )
    r.add_argument(
        "--no-cache",
        action="store_true",
        help="Always re-render instead of reusing cached output",
    )
    r.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args()
    configure_logging(verbose=args.verbose)

    if args.command == "render":
        cmd_render.run(args)


if __name__ == "__main__":
    main()
