import argparse
import pathlib
import sys

from minilang.compiler import PHASES, CompileError, PrintTrace, SourceError, compile_source
from minilang.samples import DEFAULT_PROGRAM

LANGUAGE_SPEC = r'''
MiniLang language reference
===========================

Values     signed 64-bit integers; arithmetic wraps on overflow.
Comments   // to end of line.

Statements
  x = expr;                     assignment (defines x)
  print(expr);                  print the value followed by a newline
  if (expr) { ... } else { ... }  else part optional, braces required
  while (expr) { ... }
  { ... }                       nested block

Expressions, lowest to highest precedence (all left-associative)
  == !=
  < > <= >=
  + -
  * / %                         / truncates toward zero, % follows the dividend
  unary + -
  integer literal, variable, ( expr )

Comparisons yield 1 or 0; a condition is true when it is nonzero.

Rules
  A variable must be assigned before it is read. Assignments made inside an
  if branch or a while body are not visible after that statement.
  Division or modulo by zero stops the program with a runtime error.
'''


def load_source(path):
    try:
        return pathlib.Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"cannot open file: {path}") from e


def banner(title, out):
    print(f"\n--- {title} ---", file=out)


def run_source(source, verbose=False, debug=False, out=None):
    """Compile and run source, printing banners and TAC when verbose.

    Returns the result of compile_source.
    """
    out = out or sys.stdout
    trace = PrintTrace(out) if debug else None
    on_phase = None

    if verbose:
        print("=== MINILANG COMPILER EXECUTION ===", file=out)

        def on_phase(title, result):
            if title == PHASES[-1]:
                banner("THREE ADDRESS CODE", out)
                for line in result["tac"]:
                    print(line, file=out)
                print("--- END TAC ---", file=out)
            banner(title, out)
            if title == PHASES[-1]:
                print("Program Output:", file=out)
                print("---------------", file=out)

    result = compile_source(source, trace=trace, stream=out, on_phase=on_phase)
    if verbose and not result["errors"]:
        print("---------------", file=out)
        print("Execution completed!", file=out)
    return result


def build_parser():
    ap = argparse.ArgumentParser(prog='minilang', description='MiniLang compiler/interpreter')
    ap.add_argument('-v', dest='verbose', action='store_true', help='verbose mode (show TAC)')
    ap.add_argument('-d', dest='debug', action='store_true', help='debug mode (trace all phases)')
    ap.add_argument('--spec', '-spec', dest='spec', action='store_true',
                    help='show the language specification')
    ap.add_argument('file', nargs='?', help='MiniLang source file (default: built-in fibonacci)')
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.spec:
        print(LANGUAGE_SPEC)
        return 0
    try:
        source = load_source(args.file) if args.file else DEFAULT_PROGRAM
        result = run_source(source, verbose=args.verbose or args.debug, debug=args.debug)
    except CompileError as e:
        print(e, file=sys.stderr)
        return 1
    if result["errors"]:
        sys.stdout.flush()
        print(result["errors"][0], file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
