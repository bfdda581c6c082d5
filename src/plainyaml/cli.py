"""Command-line tool: ``plainyaml check|to-json|from-json``.

Also runnable as ``python -m plainyaml.cli``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import IO

from .codec import encode
from .errors import PlainYamlError
from .files import compile_file, parse_file
from .model import from_python, to_python
from .options import Options

LOGGER = logging.getLogger(__name__)

_EOLS = {"lf": "\n", "crlf": "\r\n"}


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _check(args: argparse.Namespace, options: Options, dest: IO[str]) -> int:
    value = parse_file(args.file, options)
    print(f"OK  {args.file}  ({type(value).__name__})", file=dest)
    return 0


def _to_json(args: argparse.Namespace, options: Options, dest: IO[str]) -> int:
    value = parse_file(args.file, options)
    print(json.dumps(to_python(value), indent=2, ensure_ascii=False), file=dest)
    return 0


def _from_json(args: argparse.Namespace, options: Options, dest: IO[str]) -> int:
    with open(args.file, encoding="utf-8") as fh:
        data = json.load(fh)
    value = from_python(data)
    if args.output:
        written = compile_file(value, args.output, options)
        print(f"wrote {written}", file=dest)
    else:
        dest.write(encode(value, options))
    return 0


_COMMANDS = {
    "check": _check,
    "to-json": _to_json,
    "from-json": _from_json,
}


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plainyaml",
        description="Read and write block-style YAML files.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="parse a YAML file and report errors")
    check.add_argument("file")
    _add_decode_flags(check)

    to_json = sub.add_parser("to-json", help="print a YAML file as JSON")
    to_json.add_argument("file")
    _add_decode_flags(to_json)

    from_json = sub.add_parser("from-json", help="convert a JSON file to YAML")
    from_json.add_argument("file")
    from_json.add_argument("-o", "--output", help="write to this .yaml/.yml file")
    from_json.add_argument("--indent", type=int, default=2, help="spaces per level (2-8)")
    from_json.add_argument("--eol", choices=sorted(_EOLS), default="lf")
    return parser


def _add_decode_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--eol", choices=sorted(_EOLS), default="lf")
    parser.add_argument("--no-bool", action="store_true", help="keep true/false as text")
    parser.add_argument("--no-null", action="store_true", help="keep ~ as text")
    parser.add_argument("--encoding", default=None, help="text encoding of the file")


def options_from_args(args: argparse.Namespace) -> Options:
    return Options(
        indent=getattr(args, "indent", 2),
        eol=_EOLS[args.eol],
        evaluate_booleans=not getattr(args, "no_bool", False),
        evaluate_nulls=not getattr(args, "no_null", False),
        encoding=getattr(args, "encoding", None),
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``plainyaml`` console script."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        options = options_from_args(args)
        return _COMMANDS[args.command](args, options, sys.stdout)
    except (PlainYamlError, OSError, json.JSONDecodeError) as exc:
        LOGGER.debug("command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
