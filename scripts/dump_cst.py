#!/usr/bin/env python
"""Print the tokens, CST and value of a calculator expression."""

import argparse
import logging
import sys

from cstcalc.calculator import parse_result
from cstcalc.diagnostics import CstCalcError
from cstcalc.lexer import dump_tokens


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump calculator tokens, CST and value")
    parser.add_argument("text", help='Expression such as "one plus two times three"')
    parser.add_argument("--debug", action="store_true", help="Show library debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    try:
        result = parse_result(args.text)
    except CstCalcError as error:
        for diagnostic in error.diagnostics:
            print(
                f"{diagnostic.severity.upper()} {diagnostic.code} "
                f"range={diagnostic.range.as_tuple()} message={diagnostic.message}",
                file=sys.stderr,
            )
            if diagnostic.hint:
                print(f"  hint: {diagnostic.hint}", file=sys.stderr)
        return 1

    dump_tokens(result.tokens)
    print()
    print(result.dump())
    print()
    print(f"value = {result.value()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
