import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from hopiler import hopiler_lexer
from hopiler.hopiler_errors import (
    LEX_LOCAL_ERRORS,
    InvalidCharacterLiteralLength,
    InvalidEscapeSequence,
    InvalidIdentifier,
    InvalidNumberLiteral,
    LexError,
    UnrecognizedToken,
)
from hopiler.hopiler_lexer import CharacterStream, Lexer, classify_lexeme, tokenize
from hopiler.hopiler_tokens import (
    DelimiterType,
    KeywordType,
    LiteralType,
    OperatorType,
    Token,
    TokenCategory,
    WhitespaceType,
)

SPACE = Token.whitespace(WhitespaceType.SPACE)
TAB = Token.whitespace(WhitespaceType.TAB)
NEWLINE = Token.whitespace(WhitespaceType.NEWLINE)


def significant(tokens: list[Token]) -> list[Token]:
    return [t for t in tokens if t.category is not TokenCategory.WHITESPACE]


def test_declaration_tokens() -> None:
    assert tokenize("int x = 5\n") == [
        Token.keyword(KeywordType.INT),
        SPACE,
        Token.identifier("x"),
        SPACE,
        Token.operator(OperatorType.ASSIGN),
        SPACE,
        Token.literal(LiteralType.INT, "5"),
        NEWLINE,
    ]


def test_comment_line() -> None:
    assert tokenize("# a comment\n") == [Token.comment("a comment"), NEWLINE]


def test_comment_at_end_of_input() -> None:
    assert tokenize("x # trailing") == [
        Token.identifier("x"),
        SPACE,
        Token.comment("trailing"),
    ]


def test_comment_discards_buffered_characters(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="hopiler.hopiler_lexer"):
        tokens = tokenize("abc#note\n")
    assert tokens == [Token.comment("note"), NEWLINE]
    assert "Discarding 'abc'" in caplog.text


def test_comment_keeps_quotes() -> None:
    assert tokenize("# it's \"quoted\"\n") == [
        Token.comment("it's \"quoted\""),
        NEWLINE,
    ]


def test_comment_applies_escape_sequences() -> None:
    assert tokenize("# a\\tb\n") == [Token.comment("a\tb"), NEWLINE]


def test_invalid_escape_in_comment_is_fatal() -> None:
    with pytest.raises(InvalidEscapeSequence) as excinfo:
        tokenize("# C:\\dir\n")
    assert excinfo.value.lexeme == "\\d"
    assert "at line 1, col 5" in str(excinfo.value)


def test_whitespace_kinds_are_preserved() -> None:
    assert tokenize("a\tb c\n") == [
        Token.identifier("a"),
        TAB,
        Token.identifier("b"),
        SPACE,
        Token.identifier("c"),
        NEWLINE,
    ]


def test_string_literal_keeps_whitespace() -> None:
    assert tokenize('"hello  world\tnow"') == [
        Token.literal(LiteralType.STRING, "hello  world\tnow")
    ]


def test_string_literal_spans_newline() -> None:
    assert tokenize('"a\nb"') == [Token.literal(LiteralType.STRING, "a\nb")]


def test_string_literal_with_comment_marker() -> None:
    assert tokenize('"# not a comment"') == [
        Token.literal(LiteralType.STRING, "# not a comment")
    ]


def test_string_escapes() -> None:
    tokens = tokenize(r'"tab\there \"q\" back\\slash\n"')
    assert tokens == [
        Token.literal(LiteralType.STRING, 'tab\there "q" back\\slash\n')
    ]


@pytest.mark.parametrize(
    "escape,char",
    [
        ("n", "\n"),
        ("t", "\t"),
        ("r", "\r"),
        ("b", "\b"),
        ("v", "\v"),
        ("f", "\f"),
        ("0", "\0"),
        ("'", "'"),
        ('"', '"'),
        ("\\", "\\"),
    ],
)  # type: ignore[misc]
def test_escape_table(escape: str, char: str) -> None:
    assert tokenize(f'"\\{escape}"') == [Token.literal(LiteralType.STRING, char)]


def test_invalid_escape_sequence_is_fatal() -> None:
    with pytest.raises(InvalidEscapeSequence) as excinfo:
        tokenize('"bad \\q"')
    assert excinfo.value.lexeme == "\\q"
    assert "at line 1, col 6" in str(excinfo.value)


def test_char_literal() -> None:
    assert tokenize("'a'") == [Token.literal(LiteralType.CHAR, "a")]


def test_escaped_char_literal() -> None:
    assert tokenize("'\\n'") == [Token.literal(LiteralType.CHAR, "\n")]


def test_char_literal_escaped_quote() -> None:
    assert tokenize("'\\''") == [Token.literal(LiteralType.CHAR, "'")]


def test_char_literal_backslash_pair_accepted() -> None:
    # `\\` buffers a backslash, making a two-character buffer led by a backslash
    assert tokenize("'\\\\x'") == [Token.literal(LiteralType.CHAR, "\\x")]


def test_char_literal_too_long_is_fatal() -> None:
    with pytest.raises(InvalidCharacterLiteralLength) as excinfo:
        tokenize("'ab'")
    assert excinfo.value.lexeme == "ab"


def test_empty_char_literal_is_fatal() -> None:
    with pytest.raises(InvalidCharacterLiteralLength):
        tokenize("''")


def test_double_quote_inside_char_literal() -> None:
    assert tokenize("'\"'") == [Token.literal(LiteralType.CHAR, '"')]


def test_unterminated_string_is_dropped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="hopiler.hopiler_lexer"):
        tokens = tokenize('x "abc')
    assert tokens == [Token.identifier("x"), SPACE]
    assert "Unterminated string literal" in caplog.text


def test_unrecognized_token_is_dropped_and_logged(
    caplog: pytest.LogCaptureFixture,
) -> None:
    lexer = Lexer("int @ x = 5\n")
    with caplog.at_level(logging.ERROR, logger="hopiler.hopiler_lexer"):
        tokens = lexer.tokenize()
    assert significant(tokens) == [
        Token.keyword(KeywordType.INT),
        Token.identifier("x"),
        Token.operator(OperatorType.ASSIGN),
        Token.literal(LiteralType.INT, "5"),
    ]
    assert [type(e) for e in lexer.errors] == [UnrecognizedToken]
    assert lexer.errors[0].lexeme == "@"
    assert "Issue with compiling" in caplog.text


def test_lex_local_errors_do_not_stop_scanning() -> None:
    lexer = Lexer("1.2.3 9lives a-b ok\n")
    tokens = lexer.tokenize()
    assert significant(tokens) == [Token.identifier("ok")]
    assert [type(e) for e in lexer.errors] == [
        InvalidNumberLiteral,
        InvalidNumberLiteral,
        InvalidIdentifier,
    ]
    assert all(isinstance(e, LEX_LOCAL_ERRORS) for e in lexer.errors)


def test_other_classifier_errors_are_raised(monkeypatch: pytest.MonkeyPatch) -> None:
    def classify(lexeme: str, line: int = 0, col: int = 0) -> LexError:
        return LexError("boom", lexeme, line, col)

    monkeypatch.setattr(hopiler_lexer, "classify_lexeme", classify)
    lexer = Lexer("word\n")
    with pytest.raises(LexError, match="boom"):
        lexer.tokenize()
    assert lexer.errors == []


def test_operators_need_surrounding_whitespace() -> None:
    lexer = Lexer("x=5\n")
    assert lexer.tokenize() == [NEWLINE]
    assert isinstance(lexer.errors[0], InvalidIdentifier)


def test_token_positions() -> None:
    tokens = tokenize("int x\n  y = 'c'")
    ident_y = tokens[6]
    char = tokens[-1]
    assert ident_y == Token.identifier("y")
    assert (ident_y.line, ident_y.col) == (2, 3)
    assert (char.line, char.col) == (2, 7)


def test_tokenize_is_one_shot() -> None:
    lexer = Lexer("int x = 5\n")
    first = lexer.tokenize()
    first.clear()
    assert len(lexer.tokenize()) == 8


def test_lexer_accepts_character_stream() -> None:
    assert Lexer(CharacterStream("while")).tokenize() == [
        Token.keyword(KeywordType.WHILE)
    ]


def test_empty_input() -> None:
    assert tokenize("") == []


@pytest.mark.parametrize(
    "lexeme,expected",
    [
        ("int", Token.keyword(KeywordType.INT)),
        ("str", Token.keyword(KeywordType.STRING)),
        ("string", Token.keyword(KeywordType.STRING)),
        ("continue", Token.keyword(KeywordType.CONTINUE)),
        ("**=", Token.operator(OperatorType.POW_ASSIGN)),
        ("&&", Token.operator(OperatorType.AND)),
        ("and", Token.operator(OperatorType.AND)),
        ("not", Token.operator(OperatorType.NOT)),
        ("xor", Token.operator(OperatorType.XOR)),
        (">=", Token.operator(OperatorType.GTE)),
        ("[", Token.delimiter(DelimiterType.BRACKET_OPEN)),
        ("}", Token.delimiter(DelimiterType.BRACE_CLOSE)),
        ("42", Token.literal(LiteralType.INT, "42")),
        ("4.2", Token.literal(LiteralType.FLOAT, "4.2")),
        ("4.", Token.literal(LiteralType.FLOAT, "4.")),
        ("_tmp1", Token.identifier("_tmp1")),
        ("Integer", Token.identifier("Integer")),
    ],
)  # type: ignore[misc]
def test_classify_lexeme(lexeme: str, expected: Token) -> None:
    assert classify_lexeme(lexeme) == expected


@pytest.mark.parametrize(
    "lexeme,error",
    [
        ("1.2.3", InvalidNumberLiteral),
        ("12a", InvalidNumberLiteral),
        ("x.y", InvalidIdentifier),
        ("héllo", InvalidIdentifier),
        ("@", UnrecognizedToken),
        ("+=+", UnrecognizedToken),
        (".5", UnrecognizedToken),
    ],
)  # type: ignore[misc]
def test_classify_lexeme_returns_errors(lexeme: str, error: type[LexError]) -> None:
    result = classify_lexeme(lexeme, 3, 4)
    assert isinstance(result, error)
    assert result.lexeme == lexeme
    assert "at line 3, col 4" in str(result)


def test_character_stream_methods() -> None:
    stream = CharacterStream("ab\nc")
    assert stream.next() == "a"
    stream.next()
    stream.next()
    assert (stream.line, stream.column) == (2, 1)
    stream.next()
    assert stream.end_of_file()
    with pytest.raises(EOFError):
        stream.next()


@given(st.text(max_size=200))  # type: ignore[misc]
def test_tokenizing_is_deterministic(text: str) -> None:
    try:
        first = tokenize(text)
    except (InvalidEscapeSequence, InvalidCharacterLiteralLength):
        with pytest.raises((InvalidEscapeSequence, InvalidCharacterLiteralLength)):
            tokenize(text)
        return
    assert tokenize(text) == first


@given(st.lists(st.sampled_from(["int", "x", "=", "5", "@", "1.2.3", "(", "**"])))  # type: ignore[misc]
def test_every_boundary_yields_a_whitespace_token(words: list[str]) -> None:
    tokens = tokenize(" ".join(words) + "\n")
    assert tokens[-1] == NEWLINE
    assert tokens.count(SPACE) == max(len(words) - 1, 0)
