import json
from pathlib import Path

import pytest

from sip.__main__ import main
from sip.ast_json import ast_from_obj
from sip.parser import parse_program

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / 'examples'


def feed_input(monkeypatch, lines):
    pending = list(lines)

    def fake_input(prompt=''):
        if not pending:
            raise EOFError
        return pending.pop(0)

    monkeypatch.setattr('builtins.input', fake_input)


def test_run_file_prints_memory(capsys):
    main([str(EXAMPLES_DIR / 'program_1.pas')])
    assert capsys.readouterr().out.strip() == 'x = 14'


def test_run_file_with_flag_and_grammar(capsys):
    main(['--grammar', '-f', str(EXAMPLES_DIR / 'program_2.pas')])
    assert capsys.readouterr().out.strip() == 'y = 2.5'


def test_file_mode_halts_on_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(EXAMPLES_DIR / 'program_3.pas')])
    assert excinfo.value.code == 1
    assert 'Undefined variable: z' in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main([str(tmp_path / 'absent.pas')])
    assert 'not found' in capsys.readouterr().err


def test_interactive_mode_continues_after_errors(monkeypatch, capsys):
    feed_input(monkeypatch, ['x := 1', 'a := (1', ''])
    main([])
    out = capsys.readouterr().out
    assert 'Error: Undefined variable: x' in out
    assert 'Error: Invalid syntax, expected RPAREN but END found' in out


def test_calculator_mode(monkeypatch, capsys):
    feed_input(monkeypatch, ['7 + 3 * 2', '7 DIV 2', '7 / 2', '1 / 0', '2 +'])
    main(['--calc'])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == '13'
    assert lines[1] == '3'
    assert lines[2] == '3.5'
    assert lines[3].startswith('Error: division by zero')
    assert lines[4].startswith('Error: Invalid syntax')


def test_calculator_survives_overflow(monkeypatch, capsys):
    feed_input(monkeypatch, ['1' + '0' * 400 + ' / 1', '1 + 1'])
    main(['--calc'])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith('Error: arithmetic overflow in /')
    assert lines[1] == '2'


def test_emit_and_run_ast(tmp_path, capsys):
    program_file = tmp_path / 'prog.pas'
    program_file.write_text((EXAMPLES_DIR / 'program_5.pas').read_text(encoding='utf-8'), encoding='utf-8')
    main(['--emit-ast', str(program_file)])
    out_path = capsys.readouterr().out.strip()
    assert out_path.endswith('prog.pas.ast.json')
    with open(out_path, 'r', encoding='utf-8') as f:
        assert ast_from_obj(json.load(f)) == parse_program(program_file.read_text(encoding='utf-8'))

    main(['--ast', out_path])
    lines = capsys.readouterr().out.splitlines()
    assert lines[:5] == ['number = 2', 'a = 2', 'b = 25', 'c = 27', 'x = 11']


def test_emit_ast_refuses_unchecked_program(tmp_path, capsys):
    program_file = tmp_path / 'bad.pas'
    program_file.write_text('PROGRAM p3; BEGIN z := 1 END.', encoding='utf-8')
    with pytest.raises(SystemExit):
        main(['--emit-ast', str(program_file)])
    assert 'Compile error' in capsys.readouterr().err


def test_verbose_writes_debug_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    main(['-vv', str(EXAMPLES_DIR / 'program_1.pas')])
    debug = (tmp_path / 'debug.txt').read_text(encoding='utf-8').splitlines()
    assert 'define <x:INTEGER>' in debug
    assert 'assign x: INTEGER = 14' in debug
    assert debug[-1] == 'run-time memory contents: x = 14'
