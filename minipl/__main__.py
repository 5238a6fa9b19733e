"""CLI entry point for the Mini-PL interpreter.

Usage:
    python -m minipl [-v|-vv|-vvv] <program_file>
    python -m minipl [-v...] --check <program_file>
    python -m minipl [-v...] --emit-ast <program_file>
    python -m minipl [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --check       Lex, parse and type-check the program without running it
  --emit-ast    Parse the given .mpl file and emit an AST JSON file
  --ast         Type-check and execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit status is 0 on success, 1 for a missing file or any lexical, syntax
or static error, 2 for a runtime error and 3 for a failed assertion.
"""

import argparse
import json
import sys
from pathlib import Path
from .ast import Program
from .ast_json import ast_to_obj, load_as
from .checker import TypeChecker
from .errors import MiniPLError
from .interpreter import Interpreter
from .parser import parse_program


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def report(path: Path, err: MiniPLError) -> None:
    sys.stdout.flush()
    where = f"{path}:{err.position}" if err.position is not None else str(path)
    print(f"{where}: {err.kind}: {err.message}", file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Mini-PL language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--check', metavar='MPL_FILE', help='type-check the given .mpl file without running it')
    group.add_argument('--emit-ast', metavar='MPL_FILE', help='emit AST JSON for the given .mpl file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Mini-PL program file (.mpl) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            ast_program = parse_program(source)
        except MiniPLError as e:
            report(program_file, e)
            sys.exit(e.exit_code)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        try:
            text = json.dumps(ast_to_obj(ast_program), ensure_ascii=False, indent=2)
        except RecursionError:
            print(f"Error: {program_file}: program nested too deeply to serialize", file=sys.stderr)
            sys.exit(1)
        with open(out_path, 'w', encoding='utf-8') as out:
            out.write(text)
        print(str(out_path))
        return

    # Load the program, from AST JSON or from source
    if args.ast:
        program_file = Path(args.ast)
        if not program_file.exists():
            print(f"Error: file {program_file} not found", file=sys.stderr)
            sys.exit(1)
        try:
            with open(program_file, 'r', encoding='utf-8') as f:
                ast_program = load_as(json.load(f), Program)
        except (json.JSONDecodeError, KeyError, IndexError, TypeError, ValueError, RecursionError) as e:
            print(f"Error: {program_file}: invalid AST file: {e!r}", file=sys.stderr)
            sys.exit(1)
    else:
        target = args.check or args.program
        if not target:
            parser.error('missing program file; or use --check/--emit-ast/--ast')
        program_file = Path(target)
        source = read_source(program_file)
        try:
            ast_program = parse_program(source)
        except MiniPLError as e:
            report(program_file, e)
            sys.exit(e.exit_code)

    if args.check:
        try:
            TypeChecker().check(ast_program)
        except MiniPLError as e:
            report(program_file, e)
            sys.exit(e.exit_code)
        return

    # run() type-checks before executing anything
    interpreter = Interpreter(debug_level=args.v)
    try:
        interpreter.run(ast_program)
    except MiniPLError as e:
        report(program_file, e)
        sys.exit(e.exit_code)
    sys.stdout.flush()


if __name__ == '__main__':
    main()
