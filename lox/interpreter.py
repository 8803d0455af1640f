"""Tree-walking interpreter for the Lox language.

The interpreter executes a list of statement nodes directly, with no
intermediate representation. State lives in a chain of `Environment`
frames; `self.environment` always points at the innermost frame of the
block currently executing and starts at the global frame.

Faults are raised as `LoxRuntimeError` and are never caught here. The
only cleanup on the way out is restoring the enclosing frame when a block
is left, which happens on every exit path.
"""

from __future__ import annotations

import sys
from typing import Any, Iterable, List, Optional, TextIO

from .ast import (
    Assign, Binary, Block, ExpressionStmt, Grouping, If, Literal, Logical,
    Node, Print, Unary, Var, Variable, While,
)
from .environment import Environment
from .errors import Fault, FaultKind, LoxRuntimeError
from .parser import parse
from .scanner import scan
from .tokens import Token, TokenType
from .types import NIL, divide, is_equal, is_number, is_truthy, stringify, type_name


class Interpreter:
    """Core interpreter that executes Lox statements."""
    def __init__(self, out: Optional[TextIO] = None, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.globals = Environment()
        self.environment = self.globals
        self.out = out
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def write(self, text: str):
        # resolve stdout lazily so redirection after construction still works
        out = self.out if self.out is not None else sys.stdout
        out.write(text + '\n')

    # Public API
    def interpret(self, statements: Iterable[Node]) -> Any:
        """Execute statements in order and return the last statement's value."""
        statements = list(statements)
        if self.debug_level >= 1:
            self.debug(f"interpret {len(statements)} statement(s)")
        result: Any = NIL
        for stmt in statements:
            result = self.execute(stmt)
        return result

    def execute_block(self, statements: Iterable[Node], env: Environment) -> Any:
        previous = self.environment
        if self.debug_level >= 3:
            self.debug(f"enter block at depth {env.depth}")
        try:
            self.environment = env
            result: Any = NIL
            for stmt in statements:
                result = self.execute(stmt)
            return result
        finally:
            self.environment = previous
            if self.debug_level >= 3:
                self.debug(f"leave block, back at depth {previous.depth}")

    def execute(self, node: Node) -> Any:
        if isinstance(node, ExpressionStmt):
            return self.evaluate(node.expression)
        if isinstance(node, Print):
            value = self.evaluate(node.expression)
            self.write(stringify(value))
            return value
        if isinstance(node, Var):
            value = self.evaluate(node.initializer) if node.initializer is not None else NIL
            self.environment.define(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme}: {type_name(value)} = {stringify(value)} "
                           f"(depth {self.environment.depth})")
            return NIL
        if isinstance(node, Block):
            self.execute_block(node.statements, Environment(self.environment))
            return NIL
        if isinstance(node, If):
            cond = self.evaluate(node.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {stringify(cond)} -> {truthy}")
            if truthy:
                self.execute(node.then_branch)
            elif node.else_branch is not None:
                self.execute(node.else_branch)
            return NIL
        if isinstance(node, While):
            iterations = 0
            while True:
                cond = self.evaluate(node.condition)
                if not is_truthy(cond):
                    break
                self.execute(node.body)
                iterations += 1
            if self.debug_level >= 3:
                self.debug(f"while loop finished after {iterations} iteration(s)")
            return NIL
        raise NotImplementedError(f"execute: unexpected node type {type(node).__name__}")

    def evaluate(self, node: Node) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression)
        if isinstance(node, Variable):
            return self.environment.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.environment.assign(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name.lexeme} = {stringify(value)} (depth {self.environment.depth})")
            return value
        if isinstance(node, Logical):
            left = self.evaluate(node.left)
            if node.operator.kind is TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right)
        if isinstance(node, Unary):
            operand = self.evaluate(node.right)
            if node.operator.kind is TokenType.BANG:
                return not is_truthy(operand)
            if node.operator.kind is TokenType.MINUS:
                self.check_number_operands(node.operator, operand)
                return -operand
            raise NotImplementedError(f"unsupported unary operator {node.operator.lexeme}")
        if isinstance(node, Binary):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node.operator, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")

    def check_number_operands(self, operator: Token, *operands: Any):
        for operand in operands:
            if not is_number(operand):
                names = ' and '.join(type_name(o) for o in operands)
                raise LoxRuntimeError(Fault(
                    FaultKind.OPERAND_MUST_BE_A_NUMBER, operator,
                    f"operand of '{operator.lexeme}' must be a number, got {names}",
                ))

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        kind = operator.kind
        if kind is TokenType.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            if isinstance(a, str) and is_number(b):
                return a + stringify(b)
            if is_number(a) and isinstance(b, str):
                return stringify(a) + b
            raise LoxRuntimeError(Fault(
                FaultKind.OPERAND_MUST_BE_A_NUMBER_OR_STRING, operator,
                f"unsupported + for {type_name(a)} and {type_name(b)}",
            ))
        if kind is TokenType.EQUAL_EQUAL:
            return is_equal(a, b)
        if kind is TokenType.BANG_EQUAL:
            return not is_equal(a, b)

        self.check_number_operands(operator, a, b)
        if kind is TokenType.MINUS:
            return a - b
        if kind is TokenType.STAR:
            return a * b
        if kind is TokenType.SLASH:
            return divide(a, b)
        if kind is TokenType.GREATER:
            return a > b
        if kind is TokenType.GREATER_EQUAL:
            return a >= b
        if kind is TokenType.LESS:
            return a < b
        if kind is TokenType.LESS_EQUAL:
            return a <= b
        raise NotImplementedError(f"unknown operator {operator.lexeme}")


def parse_program(source: str) -> List[Node]:
    """Scan and parse Lox source code into a list of statements."""
    return parse(scan(source))


def run_program(source: str, out: Optional[TextIO] = None, debug_level: int = 0) -> Any:
    """Convenience function to scan, parse and run a Lox program from source string."""
    statements = parse_program(source)
    interpreter = Interpreter(out=out, debug_level=debug_level)
    try:
        return interpreter.interpret(statements)
    finally:
        interpreter.close()
