"""Command-line interface for mind2mm."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import ConvertOptions
from .convert import convert
from .errors import ConversionError


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "t", "true", "yes", "on"):
        return True
    if lowered in ("0", "f", "false", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mind2mm",
        description="Convert between dotMind (.mind) and freemind (.mm) mind maps",
    )
    parser.add_argument("-in", dest="input", help="Name of the input freemind / dotMind file")
    parser.add_argument("-out", dest="output", help="Name of the output freemind / dotMind file")
    parser.add_argument(
        "-j2m", dest="j2m", type=_parse_bool, nargs="?", const=True, default=True,
        help="Mode: default .mind > .mm; -j2m=false converts .mm > .mind",
    )
    parser.add_argument("-d", dest="debug", action="store_true", help="Enable debug output")
    parser.add_argument(
        "-keep-manifest", dest="keep_manifest", action="store_true",
        help="Leave map.json in the current directory after building a .mind file",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Guard checks only report; they are not treated as failures
    if not args.input:
        print("Input filename is mandatory")
        return 0
    if not args.output:
        print("Output filename is mandatory")
        return 0
    if not Path(args.input).exists():
        print(f"The input file '{args.input}' does not exist")
        return 0
    if Path(args.output).exists():
        print(f"Output file '{args.output}' already exists - will not overwrite")
        return 0

    logging.basicConfig(
        level=logging.INFO if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    options = ConvertOptions(debug=args.debug, keep_manifest=args.keep_manifest)

    if args.j2m:
        print("Converting from json to xml")
    else:
        print("Converting from xml to json")

    try:
        convert(args.input, args.output, to_freemind=args.j2m, options=options)
    except ConversionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
