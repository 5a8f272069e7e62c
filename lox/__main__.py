"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv|-vvvv] [script]
    python -m lox [-v...] --emit-ast <script>
    python -m lox [-v...] --ast <ast_json_file>
    python -m lox --print-ast <script>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --print-ast   Print each top-level statement in prefix notation

With no script the interactive prompt starts. Debug information is written
to `debug.txt` in the current directory when verbosity is greater than zero.
Exit codes: 0 success, 64 usage error, 65 scan/parse/resolution error,
66 missing input file, 70 runtime error.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast_json import program_from_obj, program_to_obj
from .ast_printer import AstPrinter
from .session import ExitCode, Session
from .shell import Shell


def read_file(path: Path) -> Optional[str]:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        return None
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--print-ast', metavar='LOX_FILE', help='print the AST of the given .lox file')
    parser.add_argument('script', nargs='*', help='Lox script to execute (omit for the prompt)')
    args = parser.parse_args(argv)

    if len(args.script) > 1:
        print("Usage: lox [script]", file=sys.stderr)
        return ExitCode.USAGE

    with Session(debug_level=args.v) as session:
        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            source = read_file(program_file)
            if source is None:
                return ExitCode.NO_INPUT
            statements = session.parse(source)
            if session.errors.had_error:
                return ExitCode.STATIC_ERROR
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return ExitCode.OK

        if args.print_ast:
            source = read_file(Path(args.print_ast))
            if source is None:
                return ExitCode.NO_INPUT
            statements = session.parse(source)
            printer = AstPrinter()
            for stmt in statements:
                print(printer.print(stmt))
            return ExitCode.STATIC_ERROR if session.errors.had_error else ExitCode.OK

        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            source = read_file(ast_path)
            if source is None:
                return ExitCode.NO_INPUT
            statements = program_from_obj(json.loads(source))
            return session.execute(statements)

        if not args.script:
            Shell(session).cmdloop()
            return ExitCode.OK

        source = read_file(Path(args.script[0]))
        if source is None:
            return ExitCode.NO_INPUT
        return session.run_source(source)


if __name__ == '__main__':
    sys.exit(main())
