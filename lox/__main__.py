"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [script]
    python -m lox [-v...] --emit-ast <script>
    python -m lox [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a script the interpreter starts an interactive prompt. Each line
is run against the same global scope; an empty line or end of input
quits. Faults in the prompt are reported and the prompt continues, while
a fault in a script stops the run with exit status 1.

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj, ast_from_obj
from .errors import LoxError, LoxRuntimeError
from .interpreter import parse_program, Interpreter


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def report(error: LoxError):
    if isinstance(error, LoxRuntimeError):
        print(f"Runtime error: {error}", file=sys.stderr)
    else:
        print(f"Syntax error: {error}", file=sys.stderr)


def run_statements(statements, debug_level: int) -> None:
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.interpret(statements)
    except LoxRuntimeError as e:
        report(e)
        sys.exit(1)
    finally:
        interpreter.close()


def repl(debug_level: int) -> None:
    interpreter = Interpreter(debug_level=debug_level)
    print("Lox repl, press Enter to quit")
    try:
        while True:
            try:
                line = input('> ')
            except EOFError:
                print()
                return
            if not line:
                return
            try:
                interpreter.interpret(parse_program(line))
            except LoxError as e:
                print(e)
    finally:
        interpreter.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('script', nargs='?', help='Lox script file (.lox) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            statements = parse_program(source)
        except LoxError as e:
            report(e)
            sys.exit(1)
        obj = ast_to_obj(statements)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        run_statements(ast_from_obj(data), args.v)
        return

    # No script: interactive prompt
    if not args.script:
        repl(args.v)
        return

    source = read_source(Path(args.script))
    try:
        statements = parse_program(source)
    except LoxError as e:
        report(e)
        sys.exit(1)
    run_statements(statements, args.v)


if __name__ == '__main__':
    main()
