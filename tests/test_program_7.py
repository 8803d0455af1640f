from pathlib import Path

from lox.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_7_fibonacci(capsys):
    with open(EXAMPLES / 'program_7.lox', 'r', encoding='utf-8') as f:
        source = f.read()
    statements = parse_program(source)
    interp = Interpreter()
    interp.interpret(statements)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['0', '1', '1', '2', '3', '5', '8', '13', '21', '34', '55']
