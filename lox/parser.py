"""Recursive-descent parser for the Lox language.

The parser consumes a finished token list (see `lox.scanner`) left to
right and produces a list of statement nodes. Each grammar rule maps to
one method; expression rules call the next tighter level on both sides,
so precedence and left associativity fall out of the call structure:

    assignment -> logic_or -> logic_and -> equality -> comparison
               -> term -> factor -> unary -> primary

There is no error recovery. The first malformed construct raises a
`LoxSyntaxError` naming the offending token and the whole parse is
abandoned.

`for` loops have no node of their own. They are rewritten here into an
equivalent `while` loop wrapped in blocks, so the interpreter only ever
sees `While`.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .ast import (
    Assign, Binary, Block, Expr, ExpressionStmt, Grouping, If, Literal,
    Logical, Print, Stmt, Unary, Var, Variable, While,
)
from .errors import Fault, FaultKind, LoxSyntaxError
from .tokens import Token, TokenType
from .types import NIL


# Which fault to raise when `consume` does not find the expected kind.
MISSING_TOKEN_FAULTS = {
    TokenType.SEMICOLON: FaultKind.MISSING_SEMICOLON,
    TokenType.RIGHT_PAREN: FaultKind.MISSING_CLOSING_PARENTHESIS,
    TokenType.LEFT_PAREN: FaultKind.MISSING_LEFT_PARENTHESIS,
    TokenType.RIGHT_BRACE: FaultKind.MISSING_RIGHT_BRACE,
    TokenType.IDENTIFIER: FaultKind.MISSING_VARIABLE_NAME,
}


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        if not tokens or tokens[-1].kind is not TokenType.EOF:
            raise ValueError("token sequence must end with an EOF token")
        self.tokens = list(tokens)
        self.pos = 0

    # Token stream helpers

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().kind is TokenType.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.pos += 1
        return self.previous()

    def check(self, kind: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().kind is kind

    def match(self, *kinds: TokenType) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind: TokenType, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        fault_kind = MISSING_TOKEN_FAULTS.get(kind)
        if fault_kind is None:
            raise ValueError(f"no fault registered for missing {kind.name}")
        raise LoxSyntaxError(Fault(fault_kind, self.peek(), message))

    # Statements

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.is_at_end():
            statements.append(self.declaration())
        return statements

    def declaration(self) -> Stmt:
        if self.match(TokenType.VAR):
            return self.var_declaration()
        return self.statement()

    def var_declaration(self) -> Var:
        name = self.consume(TokenType.IDENTIFIER, "expect variable name after 'var'")
        initializer: Optional[Expr] = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON, "expect ';' after variable declaration")
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def for_statement(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, "expect '(' after 'for'")

        initializer: Optional[Stmt]
        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition: Optional[Expr] = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "expect ';' after loop condition")

        increment: Optional[Expr] = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "expect ')' after for clauses")

        body = self.statement()

        # for (init; cond; incr) body  =>  { init; while (cond) { body; incr; } }
        if increment is not None:
            body = Block((body, ExpressionStmt(increment)))
        if condition is None:
            condition = Literal(True)
        body = While(condition, body)
        if initializer is not None:
            body = Block((initializer, body))
        return body

    def if_statement(self) -> If:
        self.consume(TokenType.LEFT_PAREN, "expect '(' after 'if'")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "expect ')' after if condition")
        then_branch = self.statement()
        else_branch: Optional[Stmt] = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()
        return If(condition, then_branch, else_branch)

    def print_statement(self) -> Print:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "expect ';' after value")
        return Print(value)

    def while_statement(self) -> While:
        self.consume(TokenType.LEFT_PAREN, "expect '(' after 'while'")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "expect ')' after while condition")
        body = self.statement()
        return While(condition, body)

    def block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.declaration())
        self.consume(TokenType.RIGHT_BRACE, "expect '}' after block")
        return statements

    def expression_statement(self) -> ExpressionStmt:
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "expect ';' after expression")
        return ExpressionStmt(expr)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.logic_or()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            raise LoxSyntaxError(Fault(FaultKind.INVALID_ASSIGNMENT_TARGET, equals, 'invalid assignment target'))
        return expr

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            right = self.logic_and()
            expr = Logical(expr, operator, right)
        return expr

    def logic_and(self) -> Expr:
        expr = self.equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            right = self.equality()
            expr = Logical(expr, operator, right)
        return expr

    def equality(self) -> Expr:
        expr = self.comparison()
        while self.match(TokenType.EQUAL_EQUAL, TokenType.BANG_EQUAL):
            operator = self.previous()
            right = self.comparison()
            expr = Binary(expr, operator, right)
        return expr

    def comparison(self) -> Expr:
        expr = self.term()
        while self.match(TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self.previous()
            right = self.term()
            expr = Binary(expr, operator, right)
        return expr

    def term(self) -> Expr:
        expr = self.factor()
        while self.match(TokenType.PLUS, TokenType.MINUS):
            operator = self.previous()
            right = self.factor()
            expr = Binary(expr, operator, right)
        return expr

    def factor(self) -> Expr:
        expr = self.unary()
        while self.match(TokenType.STAR, TokenType.SLASH):
            operator = self.previous()
            right = self.unary()
            expr = Binary(expr, operator, right)
        return expr

    def unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.primary()

    def primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(NIL)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "expect ')' after expression")
            return Grouping(expr)
        raise LoxSyntaxError(Fault(FaultKind.UNKNOWN_EXPRESSION, self.peek(), 'expect expression'))


def parse(tokens: Sequence[Token]) -> List[Stmt]:
    """Parse a token list into a list of statements."""
    return Parser(tokens).parse()
