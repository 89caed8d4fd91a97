#! /bin/env python3

from Calculator import CalcDebug, evaluate
from CalcVis import CalcVis
from Errors import EvaluationError

import argparse
import sys


BANNER = """\
******************************************************************************
ARITHMETIC EXPRESSION CALCULATOR. EXPRESSIONS MAY CONTAIN ANY COMBINATION OF
NON-NEGATIVE INTEGERS AND PARENTHESES WITH BINARY ADDITION, SUBTRACTION,
MULTIPLICATION AND DIVISION. IF THERE IS A PROBLEM WITH AN EXPRESSION, AN
ERROR IS DISPLAYED AND YOU MAY TRY AGAIN.

ALLOWED CHARACTERS: ()+-/*0123456789 SPACES ARE OPTIONAL.

EXAMPLE VALID INPUT: (54 * (4 + 3*2 ) + 876) or 1000/4 + 3/5+(3+(7*2))
******************************************************************************
"""

PROMPT = "Enter an arithmetic expression or hit enter with no input to exit:"


def getArgs(argv=None):
    parser = argparse.ArgumentParser(description="Arithmetic calculator")
    parser.add_argument("-e", dest="expression", type=str,
                        help="evaluate one expression and exit")
    parser.add_argument("-d", dest="debug", type=str,
                        help="write the evaluation trace to this file")
    parser.add_argument("-g", dest="graph", type=str,
                        help="render the reduction tree to this dot file")
    parser.add_argument("-v", action="store_true",
                        dest="verbose", default=False, help="verbose mode")
    return parser.parse_args(argv)


def format_result(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def run(expression: str, args, out=None, err=None) -> bool:
    out = out if out else sys.stdout
    err = err if err else sys.stderr
    debug = None
    if args.debug or args.verbose or args.graph:
        # Graph-only runs keep the trace to themselves
        debug = CalcDebug(file=args.debug, out=out,
                          dump_on_error=bool(args.debug or args.verbose))

    try:
        result = evaluate(expression, debug=debug)
    except EvaluationError as e:
        print(f"ERROR: {e.source_loc()}", file=err)
        return False

    if debug:
        if args.debug:
            debug.dump()
        if args.verbose:
            out.write(debug.toStr())
        if args.graph:
            vis = CalcVis(filename=args.graph, debug=args.verbose)
            vis.tree(debug)
            vis.render()

    print(f"RESULT IS: {format_result(result)}", file=out)
    return True


def repl(args, inp=None, out=None, err=None) -> None:
    inp = inp if inp else sys.stdin
    out = out if out else sys.stdout
    print(BANNER, file=out)
    while True:
        print(PROMPT, file=out)
        line = inp.readline()
        # Stop on an empty line or at the end of input
        line = line.rstrip("\r\n")
        if not line:
            break
        run(line, args, out=out, err=err)


def main(argv=None) -> int:
    args = getArgs(argv)

    if args.expression is not None:
        return 0 if run(args.expression, args) else 1

    repl(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
