"""Command-line harness: evaluate Zest expressions and print their values.

    python -m zest '2 ** 10' 'let x = 3 in "x = ${x}"'
    echo '|"hello"|' | python -m zest
"""
from __future__ import annotations

import sys
from argparse import ArgumentParser
from typing import Optional

from zest import config
from zest.errors import ZestError
from zest.interpreter import Interpreter
from zest.types.values import to_text


def _arg_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="zest", description="Evaluate Zest expressions")
    parser.add_argument("expressions", nargs="*", help="expressions to evaluate (default: read lines from stdin)")
    parser.add_argument(
        "-d", "--define", action="append", default=[], metavar="NAME=EXPR",
        help="bind NAME to the value of EXPR for every expression",
    )
    parser.add_argument("--barewords", action="store_true", help="treat unknown words as strings")
    parser.add_argument("--log-level", default=None, help="log level for the zest logger")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = _arg_parser().parse_args(argv)
    config.configure_logging(args.log_level)

    interp = Interpreter(barewords=args.barewords or None)
    status = 0
    try:
        for definition in args.define:
            name, sep, expr = definition.partition("=")
            if not sep or not name.strip():
                print(f"error: bad definition {definition!r}, expected NAME=EXPR", file=sys.stderr)
                return 2
            interp = interp.with_bindings(**{name.strip(): interp.eval(expr)})
    except ZestError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    sources = args.expressions or (line for line in sys.stdin if line.strip())
    for source in sources:
        try:
            print(to_text(interp.eval(source)))
        except ZestError as e:
            print(f"error: {e}", file=sys.stderr)
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
