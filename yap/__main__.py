"""CLI entry point for the Yap interpreter.

Usage:
    python -m yap [-v|-vv|-vvv] <program_file>
    python -m yap [-v...] --emit-ast <program_file>
    python -m yap [-v...] --ast <ast_json_file>
    python -m yap --emit-js <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .yap file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --emit-js     Print the program translated to JavaScript

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .codegen import generate
from .errors import YapError
from .interpreter import Interpreter
from .parser import parse_program

DEBUG_FILE = 'debug.txt'


def configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        return
    logging.basicConfig(
        filename=DEBUG_FILE,
        filemode='w',
        level=logging.DEBUG,
        format='%(levelname)s %(name)s: %(message)s',
    )


def read_source(path_str: str) -> str:
    path = Path(path_str)
    try:
        return path.read_text(encoding='utf-8')
    except OSError as e:
        print(f"Error: cannot read {path}: {e.strerror or e}", file=sys.stderr)
        sys.exit(1)


def execute(program, verbosity: int) -> None:
    interpreter = Interpreter(debug_level=verbosity)
    try:
        interpreter.run(program)
    except YapError as e:
        sys.stdout.flush()
        print(str(e), file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='yap', description="Yap language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='YAP_FILE', help='emit AST JSON for the given .yap file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--emit-js', metavar='YAP_FILE', help='print the program as JavaScript')
    parser.add_argument('program', nargs='?', help='Yap program file (.yap) to execute')
    args = parser.parse_args(argv)
    configure_logging(args.v)
    # deeply recursive Yap programs need more than the default Python stack
    sys.setrecursionlimit(max(sys.getrecursionlimit(), 10000))

    try:
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            ast_program = parse_program(read_source(args.emit_ast))
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        if args.emit_js:
            print(generate(parse_program(read_source(args.emit_js))), end='')
            return

        if args.ast:
            try:
                ast_program = ast_from_obj(json.loads(read_source(args.ast)))
                if not isinstance(ast_program, Program):
                    raise ValueError("top-level node must be a Program")
            except ValueError as e:
                print(f"Error: invalid AST file {args.ast}: {e}", file=sys.stderr)
                sys.exit(1)
            execute(ast_program, args.v)
            return

        if not args.program:
            parser.error('missing program file; or use --emit-ast/--ast/--emit-js')
        execute(parse_program(read_source(args.program)), args.v)
    except YapError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
