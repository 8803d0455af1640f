"""Scanner for the Lox language.

Lox source text is split into tokens by a Lark lexer. The grammar below
only declares terminals: Lark is used for its lexer, not its parser. The
token stream is handed to the recursive-descent parser in `lox.parser`.

Keywords are declared as plain string terminals. Lark's basic lexer
notices that every keyword is also matched in full by `IDENTIFIER` and
re-labels an identifier whose text equals a keyword, so `or` becomes an
`OR` token while `orchid` stays an identifier.
"""

from __future__ import annotations

from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import Fault, FaultKind, LoxScanError
from .tokens import Token, TokenType


LOX_TERMINALS = r"""
    start: _token*

    _token: LEFT_PAREN | RIGHT_PAREN | LEFT_BRACE | RIGHT_BRACE
          | COMMA | DOT | MINUS | PLUS | SEMICOLON | SLASH | STAR
          | BANG | BANG_EQUAL | EQUAL | EQUAL_EQUAL
          | GREATER | GREATER_EQUAL | LESS | LESS_EQUAL
          | IDENTIFIER | STRING | NUMBER
          | AND | ELSE | FALSE | FOR | IF | NIL | OR
          | PRINT | TRUE | VAR | WHILE

    LEFT_PAREN: "("
    RIGHT_PAREN: ")"
    LEFT_BRACE: "{"
    RIGHT_BRACE: "}"
    COMMA: ","
    DOT: "."
    MINUS: "-"
    PLUS: "+"
    SEMICOLON: ";"
    SLASH: "/"
    STAR: "*"

    BANG: "!"
    BANG_EQUAL: "!="
    EQUAL: "="
    EQUAL_EQUAL: "=="
    GREATER: ">"
    GREATER_EQUAL: ">="
    LESS: "<"
    LESS_EQUAL: "<="

    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/
    STRING: /"[^"]*"/
    NUMBER: /[0-9]+(\.[0-9]+)?/

    AND: "and"
    ELSE: "else"
    FALSE: "false"
    FOR: "for"
    IF: "if"
    NIL: "nil"
    OR: "or"
    PRINT: "print"
    TRUE: "true"
    VAR: "var"
    WHILE: "while"

    COMMENT: /\/\/[^\n]*/
    %ignore COMMENT

    %import common.WS
    %ignore WS
"""


LOX_LEXER = Lark(
    LOX_TERMINALS,
    parser='lalr',
    lexer='basic',
)


def _literal_for(kind: TokenType, text: str):
    if kind is TokenType.NUMBER:
        return float(text)
    if kind is TokenType.STRING:
        return text[1:-1]
    if kind is TokenType.TRUE:
        return True
    if kind is TokenType.FALSE:
        return False
    return None


def scan(source: str) -> List[Token]:
    """Convert Lox source code into a list of tokens ending with EOF.

    Raises `LoxScanError` for a character that cannot start any token,
    including the opening quote of a string that is never closed.
    """
    tokens: List[Token] = []
    try:
        for lark_token in LOX_LEXER.lex(source):
            kind = TokenType[lark_token.type]
            text = str(lark_token)
            tokens.append(Token(kind, text, _literal_for(kind, text), lark_token.line))
    except UnexpectedCharacters as e:
        char = source[e.pos_in_stream] if e.pos_in_stream < len(source) else ''
        if char == '"':
            raise LoxScanError(Fault(FaultKind.UNTERMINATED_STRING, None, 'unterminated string', e.line)) from None
        raise LoxScanError(Fault(FaultKind.UNEXPECTED_CHARACTER, None, f"unexpected character {char!r}", e.line)) from None
    eof_line = source.count('\n') + 1
    tokens.append(Token(TokenType.EOF, '', None, eof_line))
    return tokens
