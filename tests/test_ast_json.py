import io
import json

import pytest

from lox.ast import Literal, Print
from lox.ast_json import ast_from_obj, ast_to_obj
from lox.errors import FaultKind, LoxRuntimeError
from lox.interpreter import Interpreter, parse_program
from lox.types import NIL


def test_nodes_are_tagged_with_type():
    obj = ast_to_obj(parse_program('var a = 1; print a;'))
    assert [o["type"] for o in obj] == ["Var", "Print"]
    assert obj[0]["name"] == {"kind": "IDENTIFIER", "lexeme": "a", "literal": None, "line": 1}
    assert obj[0]["initializer"] == {"type": "Literal", "value": 1.0}


def test_nil_literal_is_not_null():
    obj = ast_to_obj(parse_program('var a = nil; var b;'))
    assert obj[0]["initializer"]["value"] == {"nil": True}
    assert obj[1]["initializer"] is None
    statements = ast_from_obj(obj)
    assert statements[0].initializer == Literal(NIL)
    assert statements[1].initializer is None


def test_reloaded_program_runs_the_same():
    source = 'var s = 0; for (var i = 0; i < 4; i = i + 1) { if (i != 2) s = s + i; } print s;'
    statements = parse_program(source)
    reloaded = ast_from_obj(json.loads(json.dumps(ast_to_obj(statements))))
    assert reloaded == statements

    out = io.StringIO()
    Interpreter(out=out).interpret(reloaded)
    assert out.getvalue() == '4\n'


def test_integer_numbers_load_as_floats():
    (stmt,) = ast_from_obj([{"type": "Print", "expression": {"type": "Literal", "value": 3}}])
    assert stmt == Print(Literal(3.0))
    assert isinstance(stmt.expression.value, float)


def test_faults_keep_line_after_reload():
    statements = ast_from_obj(ast_to_obj(parse_program('\n\nprint missing;')))
    with pytest.raises(LoxRuntimeError) as excinfo:
        Interpreter(out=io.StringIO()).interpret(statements)
    assert excinfo.value.kind is FaultKind.UNDEFINED_VARIABLE
    assert excinfo.value.fault.line == 3


def test_invalid_input():
    with pytest.raises(ValueError):
        ast_from_obj({"type": "Function"})
    with pytest.raises(ValueError):
        ast_from_obj(42)
    with pytest.raises(TypeError):
        ast_to_obj(object())
