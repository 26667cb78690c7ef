"""
Command-line front end.

    jsonhex -i <inputFile> -o <outputFile> -m <mappingFile>

Exit status is 0 when the document was rewritten and 1 on bad arguments,
unopenable files or any parse failure.
"""

import argparse
import contextlib
import logging
import sys
from collections.abc import Sequence
from typing import BinaryIO

from . import rewrite
from ._config import LOG_LEVEL
from ._errors import ParseError

logger = logging.getLogger(__name__)

USAGE = "Usage: jsonhex -i <inputFile> -o <outputFile> -m <mappingFile>"
EXPECTED_ARG_COUNT = 6


class UsageError(Exception):
    """Raised instead of argparse's own exit so the caller picks the status."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="jsonhex", usage=USAGE, add_help=False)
    parser.add_argument("-i", dest="input", required=True)
    parser.add_argument("-o", dest="output", required=True)
    parser.add_argument("-m", dest="mapping", required=True)
    return parser


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    """Parses exactly three flag/path pairs, in any order."""
    if len(argv) != EXPECTED_ARG_COUNT:
        raise UsageError(
            f"expected {EXPECTED_ARG_COUNT} arguments, got {len(argv)}"
        )
    return build_parser().parse_args(list(argv))


def _show_help() -> int:
    print("Missing input, output and/or mapping files", file=sys.stderr)
    print(USAGE, file=sys.stderr)
    return 1


def _open(
    stack: contextlib.ExitStack, path: str, mode: str, label: str
) -> BinaryIO | None:
    try:
        return stack.enter_context(open(path, mode))  # noqa: SIM115
    except OSError as exc:
        logger.debug("Opening %s file %s failed: %s", label, path, exc)
        print(f"Could not open {label} file", file=sys.stderr)
        return None


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s"
    )
    if argv is None:
        argv = sys.argv[1:]

    try:
        args = parse_args(argv)
    except UsageError as exc:
        logger.debug("Rejected arguments: %s", exc)
        return _show_help()

    with contextlib.ExitStack() as stack:
        source = _open(stack, args.input, "rb", "input")
        if source is None:
            return 1
        output = _open(stack, args.output, "wb", "output")
        if output is None:
            return 1
        mapping = _open(stack, args.mapping, "wb", "mapping")
        if mapping is None:
            return 1

        try:
            identifiers = rewrite(source, output, mapping)
        except ParseError as exc:
            logger.debug("Rewriting %s failed", args.input, exc_info=exc)
            print(exc, file=sys.stderr)
            print("Failed to parse the JSON file", file=sys.stderr)
            return 1

    logger.info(
        "Rewrote %s into %s with %d identifiers",
        args.input,
        args.output,
        len(identifiers),
    )
    print("Successfully parsed the JSON file")
    return 0


if __name__ == "__main__":
    sys.exit(main())
