"""Fault types raised by the Lox scanner, parser and interpreter.

Every fault is described by a `Fault` value: its kind, the offending token
(when there is one), a short detail message and the source line. Faults
travel as exceptions so that neither the parser nor the interpreter has to
thread them through return values; the driver inspects `error.fault.kind`
to decide how to report them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from lox.tokens import Token, TokenType


class FaultKind(Enum):
    # Scanner
    UNEXPECTED_CHARACTER = 'UnexpectedCharacter'
    UNTERMINATED_STRING = 'UnterminatedString'

    # Parser
    MISSING_SEMICOLON = 'MissingSemicolon'
    MISSING_CLOSING_PARENTHESIS = 'MissingClosingParenthesis'
    MISSING_LEFT_PARENTHESIS = 'MissingLeftParenthesis'
    MISSING_RIGHT_BRACE = 'MissingRightBrace'
    MISSING_VARIABLE_NAME = 'MissingVariableName'
    INVALID_ASSIGNMENT_TARGET = 'InvalidAssignmentTarget'
    UNKNOWN_EXPRESSION = 'UnknownExpression'

    # Interpreter
    UNDEFINED_VARIABLE = 'UndefinedVariable'
    DUPLICATE_VARIABLE_NAME = 'DuplicateVariableName'
    OPERAND_MUST_BE_A_NUMBER = 'OperandMustBeANumber'
    OPERAND_MUST_BE_A_NUMBER_OR_STRING = 'OperandMustBeANumberOrString'


@dataclass(frozen=True)
class Fault:
    kind: FaultKind
    token: Optional[Token]
    detail: str = ''
    line: int = 0

    def __post_init__(self):
        if not self.line and self.token is not None:
            object.__setattr__(self, 'line', self.token.line)

    @property
    def location(self) -> str:
        if self.token is None:
            return f"line {self.line}"
        if self.token.kind is TokenType.EOF:
            return f"line {self.line} at end"
        return f"line {self.line} near '{self.token.lexeme}'"

    def __str__(self) -> str:
        text = f"{self.kind.value} at {self.location}"
        if self.detail:
            text += f": {self.detail}"
        return text


class LoxError(Exception):
    """Base exception carrying a structured `Fault`."""
    def __init__(self, fault: Fault):
        super().__init__(str(fault))
        self.fault = fault

    @property
    def kind(self) -> FaultKind:
        return self.fault.kind

    @property
    def token(self) -> Optional[Token]:
        return self.fault.token


class LoxScanError(LoxError):
    """Raised when source text cannot be split into tokens."""


class LoxSyntaxError(LoxError):
    """Raised by the parser on the first malformed construct."""


class LoxRuntimeError(LoxError):
    """Raised by the interpreter and environment during evaluation."""
