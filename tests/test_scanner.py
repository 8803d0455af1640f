import pytest

from lox.errors import FaultKind, LoxScanError
from lox.scanner import scan
from lox.tokens import KEYWORDS, TokenType


def kinds(source):
    return [t.kind for t in scan(source)]


def test_empty_source_is_just_eof():
    tokens = scan('')
    assert len(tokens) == 1
    assert tokens[0].kind is TokenType.EOF
    assert tokens[0].line == 1


def test_operators_prefer_two_character_forms():
    assert kinds('! != = == > >= < <=') == [
        TokenType.BANG, TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EQUAL_EQUAL,
        TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        TokenType.EOF,
    ]


def test_punctuation():
    assert kinds('(){},.-+;/*') == [
        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
        TokenType.COMMA, TokenType.DOT, TokenType.MINUS, TokenType.PLUS, TokenType.SEMICOLON,
        TokenType.SLASH, TokenType.STAR, TokenType.EOF,
    ]


def test_keywords_and_identifiers():
    tokens = scan('var orchid = nil or true;')
    assert [t.kind for t in tokens] == [
        TokenType.VAR, TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.NIL,
        TokenType.OR, TokenType.TRUE, TokenType.SEMICOLON, TokenType.EOF,
    ]
    assert tokens[1].lexeme == 'orchid'
    assert tokens[5].literal is True


def test_number_literals_are_floats():
    tokens = scan('12 3.5')
    assert tokens[0].literal == 12.0
    assert isinstance(tokens[0].literal, float)
    assert tokens[1].literal == 3.5


def test_trailing_dot_is_not_part_of_number():
    assert kinds('1.') == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]


def test_string_literal_drops_quotes_and_may_span_lines():
    tokens = scan('"a\nb" x')
    assert tokens[0].kind is TokenType.STRING
    assert tokens[0].literal == 'a\nb'
    assert tokens[0].lexeme == '"a\nb"'
    assert tokens[0].line == 1
    assert tokens[1].line == 2


def test_comments_and_whitespace_are_skipped():
    tokens = scan('// nothing here\nprint 1; // trailing\n')
    assert [t.kind for t in tokens] == [TokenType.PRINT, TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF]
    assert tokens[0].line == 2
    assert tokens[-1].line == 3


def test_unexpected_character():
    with pytest.raises(LoxScanError) as excinfo:
        scan('var a = 1;\nvar b = @;')
    assert excinfo.value.kind is FaultKind.UNEXPECTED_CHARACTER
    assert excinfo.value.fault.line == 2


def test_unterminated_string():
    with pytest.raises(LoxScanError) as excinfo:
        scan('print "oops;')
    assert excinfo.value.kind is FaultKind.UNTERMINATED_STRING


@pytest.mark.parametrize('word, kind', sorted(KEYWORDS.items()))
def test_every_keyword_is_reserved(word, kind):
    assert kinds(word) == [kind, TokenType.EOF]
    assert kinds(word + '_') == [TokenType.IDENTIFIER, TokenType.EOF]
