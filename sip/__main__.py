"""CLI entry point for the SIP interpreter.

Usage:
    python -m sip [-v|-vv|-vvv] [--grammar]                interactive `sip>` prompt
    python -m sip [-v...] [--grammar] <program_file>       run a program file
    python -m sip [-v...] [--grammar] -f <program_file>    same as above
    python -m sip [-v...] --calc                           bare expression `calc>` prompt
    python -m sip [-v...] --emit-ast <program_file>
    python -m sip [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --grammar     Parse with the Lark grammar instead of the recursive-descent parser
  --calc        Evaluate one arithmetic expression per input line
  --emit-ast    Parse and check the given file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

In interactive mode every line is wrapped as
`PROGRAM interactive; BEGIN <line> END.` before it is compiled. Errors
are printed and the prompt continues; in file mode they end the run
with exit status 1. Debug information is written to `debug.txt` in the
current directory when verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, TextIO

from .ast_json import ast_to_obj, ast_from_obj
from .errors import SipError
from .interpreter import compile_and_check, evaluate, evaluate_expression
from .types import format_memory, to_string

INTERACTIVE_TEMPLATE = 'PROGRAM interactive; BEGIN {} END.'


def print_memory(memory) -> None:
    for line in format_memory(memory):
        print(line)


def run_interactive(args, debug_fp: Optional[TextIO]) -> None:
    while True:
        try:
            line = input('sip> ')
        except (EOFError, KeyboardInterrupt):
            print()
            return
        try:
            tree = compile_and_check(INTERACTIVE_TEMPLATE.format(line), use_grammar=args.grammar,
                                     debug_level=args.v, debug_fp=debug_fp)
            print_memory(evaluate(tree, debug_level=args.v, debug_fp=debug_fp).memory)
        except SipError as e:
            print(f"Error: {e}")


def run_calculator(args, debug_fp: Optional[TextIO]) -> None:
    while True:
        try:
            line = input('calc> ')
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not line.strip():
            continue
        try:
            print(to_string(evaluate_expression(line, use_grammar=args.grammar,
                                                debug_level=args.v, debug_fp=debug_fp)))
        except SipError as e:
            print(f"Error: {e}")


def read_source(program_file: Path) -> str:
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def run(args, debug_fp: Optional[TextIO]) -> None:
    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            tree = compile_and_check(source, use_grammar=args.grammar, debug_level=args.v, debug_fp=debug_fp)
        except SipError as e:
            print(f"Compile error: {e}", file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(tree), out, ensure_ascii=False, indent=2)
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
        try:
            tree = ast_from_obj(data)
        except (TypeError, ValueError, KeyError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        try:
            print_memory(evaluate(tree, debug_level=args.v, debug_fp=debug_fp).memory)
        except SipError as e:
            print(f"Runtime error: {e}", file=sys.stderr)
            sys.exit(1)
        return

    if args.calc:
        run_calculator(args, debug_fp)
        return

    program = args.file or args.program
    if not program:
        run_interactive(args, debug_fp)
        return

    source = read_source(Path(program))
    try:
        tree = compile_and_check(source, use_grammar=args.grammar, debug_level=args.v, debug_fp=debug_fp)
        print_memory(evaluate(tree, debug_level=args.v, debug_fp=debug_fp).memory)
    except SipError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="SIP interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--grammar', action='store_true', help='parse with the Lark grammar front end')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('-f', '--file', metavar='PROGRAM_FILE', help='SIP program file to execute')
    group.add_argument('--calc', action='store_true', help='evaluate bare arithmetic expressions')
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='SIP program file to execute')
    args = parser.parse_args(argv)

    if args.v > 0:
        with open('debug.txt', 'w', encoding='utf-8') as debug_fp:
            run(args, debug_fp)
    else:
        run(args, None)


if __name__ == '__main__':
    main()
