"""Command-line driver: reads a program, one definition per line followed by
the expression to evaluate, then prints either the result or the error text.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from termcolor import colored

from exprlang.exceptions import ExprlangError, InvalidSyntaxError
from exprlang.interpreter import RECURSION_LIMIT, evaluate
from exprlang.parser import parse
from exprlang.printer import to_code

logger = logging.getLogger("exprlang")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERNAL = 2


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return number


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exprlang",
        description="Run a program written as function definitions, one per line, "
        "followed by the expression to evaluate.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        type=argparse.FileType("r", encoding="utf-8"),
        help="source file to run (reads standard input if omitted or '-')",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="print the parsed program back as source instead of running it",
    )
    parser.add_argument(
        "--recursion-limit",
        type=positive_int,
        metavar="N",
        help="minimum recursion limit while evaluating (default: %d)" % RECURSION_LIMIT,
    )
    parser.add_argument("--no-color", action="store_true", help="disable colored error output")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug information")
    return parser


def read_lines(stream: TextIO) -> List[str]:
    return [line.rstrip("\r\n") for line in stream]


def format_error(message: str, use_color: bool, internal: bool = False) -> str:
    prefix = "[internal] " if internal else ""
    if not use_color:
        return prefix + message
    return colored(prefix + message, "red", attrs=["bold"])


def main(argv: Optional[List[str]] = None) -> int:
    args = create_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    use_color = not args.no_color

    lines = read_lines(args.file)
    if args.file is not sys.stdin:
        args.file.close()
    logger.debug("read %d line(s) from %s", len(lines), getattr(args.file, "name", "-"))

    try:
        program = parse(lines)
        if args.dump:
            print(to_code(program))
            return EXIT_OK
        result = evaluate(program, args.recursion_limit)
    except InvalidSyntaxError as e:
        logger.debug("syntax error on line %s: %s", e.line, e.reason)
        print(format_error(e.message, use_color))
        return EXIT_ERROR
    except ExprlangError as e:
        print(format_error(e.message, use_color))
        return EXIT_ERROR
    except RecursionError:
        print(format_error("RUNTIME ERROR maximum recursion depth exceeded", use_color))
        return EXIT_ERROR
    except Exception as e:
        logger.debug("unexpected failure", exc_info=True)
        print(format_error(f"{type(e).__name__}: {e}", use_color, internal=True))
        return EXIT_INTERNAL

    print(result)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
