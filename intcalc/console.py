import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from intcalc.runtime import render, run

logger = logging.getLogger(__name__)

PROMPT = "Enter program (blank line to execute):"


def read_program(lines: Iterable[str]) -> str:
    """Joins lines up to the first blank one, each terminated with a newline"""
    code: list[str] = []
    for line in lines:
        line = line.rstrip("\r\n")
        if not line:
            break
        code.append(line + "\n")
    return "".join(code)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intcalc",
        description="Runs a program of integer assignments and prints the resulting variables",
    )
    parser.add_argument("-f", "--file", type=Path, help="read the program from a file instead of the console")
    parser.add_argument("-v", "--verbose", action="store_true", help="log assignments and errors to stderr")
    parser.add_argument("-q", "--quiet", action="store_true", help="do not print the input prompt")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.file is not None:
        try:
            code = args.file.read_text()
        except OSError as e:
            arg_parser.error(f"can't read {args.file}: {e.strerror}")
    else:
        if not args.quiet:
            print(PROMPT, file=sys.stderr)
        code = read_program(sys.stdin)

    logger.debug("Running %d characters of code", len(code))
    execution = run(code)
    for line in render(execution):
        print(line)
    return 1 if execution.failed else 0
