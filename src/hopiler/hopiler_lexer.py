"""
Lexical analyzer for the HoPiler programming language.

This module converts raw `.ho` source text into a flat list of tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Lexer: Mode-driven scanner that turns a CharacterStream into a list of Tokens.

Functions:
    classify_lexeme: Classifies one whitespace-delimited lexeme.
    tokenize: Convenience wrapper around `Lexer(source).tokenize()`.

Features:
    - Whitespace (space, tab, newline) is kept in the token stream; newline ends a statement
    - Single-line comments (`#`) become Comment tokens
    - String (`"..."`) and character (`'.'`) literals with backslash escape sequences
    - Keywords, operators and delimiters are matched only as whole lexemes. There is no
      longest-match splitting, so `x=5` is a single (invalid) lexeme and operators must be
      surrounded by whitespace.

Errors:
    InvalidNumberLiteral, InvalidIdentifier, UnrecognizedToken:
        Returned by `classify_lexeme`. The lexer logs them, records them on
        `Lexer.errors` and drops the lexeme.
    InvalidEscapeSequence, InvalidCharacterLiteralLength:
        Raised; tokenization is aborted.

Example:
    >>> tokenize("int x = 5\\n")[:3]
    [Token(KEYWORD, INT), Token(WHITESPACE, SPACE), Token(IDENTIFIER, 'x')]

Exports:
    - CharacterStream
    - Lexer
    - classify_lexeme
    - tokenize
"""

import logging
import string
from enum import Enum

from hopiler.hopiler_constants import (
    DELIMITERS,
    ESCAPES,
    KEYWORDS,
    OPERATORS,
    WHITESPACE,
)
from hopiler.hopiler_errors import (
    LEX_LOCAL_ERRORS,
    InvalidCharacterLiteralLength,
    InvalidEscapeSequence,
    InvalidIdentifier,
    InvalidNumberLiteral,
    LexError,
    UnrecognizedToken,
)
from hopiler.hopiler_tokens import LiteralType, Token

logger = logging.getLogger(__name__)

_DIGITS = frozenset(string.digits)
_NUMBER_CHARS = _DIGITS | {"."}
_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CHARS = _IDENT_START | _DIGITS


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Returns:
            str: The next character.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def end_of_file(self) -> bool:
        """
        Checks whether every character has been consumed.

        Returns:
            bool: True if the stream is exhausted, False otherwise.
        """
        return self.position >= len(self.source)


def classify_lexeme(lexeme: str, line: int = 0, col: int = 0) -> Token | LexError:
    """Classifies one already-delimited lexeme.

    Lexemes are matched, in order, against the keyword, operator and delimiter
    tables, then validated as a number literal (when they start with a digit)
    or as an identifier (when they start with a letter or underscore).

    Args:
        lexeme (str): The buffered characters between two boundaries.
        line (int, optional): Line where the lexeme starts.
        col (int, optional): Column where the lexeme starts.

    Returns:
        Token | LexError: The classified token, or the lex-local error describing
        why the lexeme was rejected. Errors are returned, never raised, so the
        caller decides whether to skip or abort.
    """
    if lexeme in KEYWORDS:
        return Token.keyword(KEYWORDS[lexeme], line, col)
    if lexeme in OPERATORS:
        return Token.operator(OPERATORS[lexeme], line, col)
    if lexeme in DELIMITERS:
        return Token.delimiter(DELIMITERS[lexeme], line, col)

    if lexeme and lexeme[0] in _DIGITS:
        if not set(lexeme) <= _NUMBER_CHARS:
            return InvalidNumberLiteral(
                f"Invalid number(float/int) literal {lexeme!r}", lexeme, line, col
            )
        dots = lexeme.count(".")
        if dots > 1:
            return InvalidNumberLiteral(
                f"Invalid number(float/int) literal {lexeme!r}, only one or zero . is permitted",
                lexeme,
                line,
                col,
            )
        kind = LiteralType.FLOAT if dots else LiteralType.INT
        return Token.literal(kind, lexeme, line, col)

    if lexeme and lexeme[0] in _IDENT_START:
        if not set(lexeme) <= _IDENT_CHARS:
            return InvalidIdentifier(
                f"Invalid identifier {lexeme!r}: identifiers start with _ or a letter "
                "and contain only _, letters or digits",
                lexeme,
                line,
                col,
            )
        return Token.identifier(lexeme, line, col)

    return UnrecognizedToken(f"The given token({lexeme!r}) is invalid", lexeme, line, col)


class _Mode(Enum):
    NORMAL = "normal"
    COMMENT = "comment"
    STRING = "string"
    CHAR = "char"


class Lexer:
    """Lexical analyzer for the HoPiler language.

    The scanner reads the whole stream once, character by character. Outside of
    comments and literals, characters accumulate in a buffer that is classified
    whenever a whitespace boundary (or the end of input) is reached. A pending
    backslash escape overlays the normal, string and char modes.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        errors (list[LexError]): Lex-local errors whose lexemes were dropped, in order.
    """

    def __init__(self, source: str | CharacterStream) -> None:
        """Initializes the Lexer.

        Args:
            source (str | CharacterStream): Source text, or a stream positioned at its start.
        """
        self.stream = source if isinstance(source, CharacterStream) else CharacterStream(source)
        self.errors: list[LexError] = []
        self._tokens: list[Token] | None = None
        self._out: list[Token] = []
        self._buffer: list[str] = []
        self._mode = _Mode.NORMAL
        self._escape_pending = False
        self._escape_at = (0, 0)
        self._start = (0, 0)

    def tokenize(self) -> list[Token]:
        """Scans the stream and returns every token in source order.

        The scan runs once; later calls return a copy of the same result.

        Returns:
            list[Token]: The token sequence, whitespace and comments included.

        Raises:
            InvalidEscapeSequence: If a backslash is followed by an unknown character.
            InvalidCharacterLiteralLength: If a character literal does not hold one character.
        """
        if self._tokens is None:
            while not self.stream.end_of_file():
                line, col = self.stream.line, self.stream.column
                self._step(self.stream.next(), line, col)
            self._finish()
            self._tokens = self._out
            logger.debug(
                "Tokens generated: %d (%d lexemes dropped)",
                len(self._tokens),
                len(self.errors),
            )
        return list(self._tokens)

    def _step(self, ch: str, line: int, col: int) -> None:
        if self._escape_pending:
            self._escape_pending = False
            if ch not in ESCAPES:
                raise InvalidEscapeSequence(
                    f"Invalid character {ch!r} after \\ (escape character)",
                    "\\" + ch,
                    *self._escape_at,
                )
            self._append(ESCAPES[ch], *self._escape_at)
            return

        if ch == "\\":
            self._escape_pending = True
            self._escape_at = (line, col)
            return

        if self._mode is _Mode.COMMENT:
            if ch == "\n":
                self._emit_comment()
                self._out.append(Token.whitespace(WHITESPACE[ch], line, col))
            else:
                self._buffer.append(ch)
            return

        if self._mode is _Mode.STRING:
            if ch == '"':
                self._close_literal(LiteralType.STRING)
            else:
                self._buffer.append(ch)
            return

        if self._mode is _Mode.CHAR:
            if ch == "'":
                self._close_literal(LiteralType.CHAR)
            else:
                self._buffer.append(ch)
            return

        if ch == "#":
            self._open(_Mode.COMMENT, line, col)
        elif ch == '"':
            self._open(_Mode.STRING, line, col)
        elif ch == "'":
            self._open(_Mode.CHAR, line, col)
        elif ch in WHITESPACE:
            self._flush()
            self._out.append(Token.whitespace(WHITESPACE[ch], line, col))
        else:
            self._append(ch, line, col)

    def _append(self, ch: str, line: int, col: int) -> None:
        if self._mode is _Mode.NORMAL and not self._buffer:
            self._start = (line, col)
        self._buffer.append(ch)

    def _open(self, mode: _Mode, line: int, col: int) -> None:
        if self._buffer:
            logger.warning(
                "Discarding %r before %s at line %d, col %d",
                "".join(self._buffer),
                mode.value,
                line,
                col,
            )
            self._buffer.clear()
        self._mode = mode
        self._start = (line, col)

    def _close_literal(self, kind: LiteralType) -> None:
        text = "".join(self._buffer)
        if kind is LiteralType.CHAR and len(text) != 1 and not (
            len(text) == 2 and text[0] == "\\"
        ):
            raise InvalidCharacterLiteralLength(
                f"The length of a character literal should be exactly 1, got {len(text)}",
                text,
                *self._start,
            )
        self._out.append(Token.literal(kind, text, *self._start))
        self._buffer.clear()
        self._mode = _Mode.NORMAL

    def _emit_comment(self) -> None:
        self._out.append(Token.comment("".join(self._buffer).strip(), *self._start))
        self._buffer.clear()
        self._mode = _Mode.NORMAL

    def _flush(self) -> None:
        if not self._buffer:
            return
        result = classify_lexeme("".join(self._buffer), *self._start)
        self._buffer.clear()
        if isinstance(result, Token):
            self._out.append(result)
        elif isinstance(result, LEX_LOCAL_ERRORS):
            logger.error("Issue with compiling: %s", result)
            self.errors.append(result)
        else:
            raise result

    def _finish(self) -> None:
        if self._escape_pending:
            line, col = self._escape_at
            logger.warning("Dangling \\ at end of input (line %d, col %d)", line, col)
            self._escape_pending = False

        if self._mode is _Mode.COMMENT:
            self._emit_comment()
        elif self._mode is _Mode.NORMAL:
            self._flush()
        else:
            line, col = self._start
            logger.warning(
                "Unterminated %s literal %r at line %d, col %d dropped",
                self._mode.value,
                "".join(self._buffer),
                line,
                col,
            )
            self._buffer.clear()
            self._mode = _Mode.NORMAL


def tokenize(source: str | CharacterStream) -> list[Token]:
    """Tokenizes `source` with a fresh Lexer."""
    return Lexer(source).tokenize()


__all__ = ["CharacterStream", "Lexer", "classify_lexeme", "tokenize"]
