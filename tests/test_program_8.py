from pathlib import Path

from lox.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_scopes_and_truthiness(capsys):
    with open(EXAMPLES / 'program_8.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    statements = parse_program(source)
    interp = Interpreter()
    interp.interpret(statements)
    out = capsys.readouterr().out.strip().splitlines()
    # nil is truthy, so `or` returns it; 0 is truthy, so `and` moves on
    assert out == ['105', 'nil', 'zero is truthy', 'true']
