"""
Error taxonomy for the HoPiler front end.

Classes:
    HopilerError: Base for every front-end failure (a `SyntaxError`).
    LexError: Base for lexer failures; carries the offending lexeme.
    InvalidNumberLiteral, InvalidIdentifier, UnrecognizedToken:
        Lex-local errors. The classifier returns them instead of raising;
        the scan loop logs them and drops the lexeme.
    InvalidEscapeSequence, InvalidCharacterLiteralLength:
        Lex-fatal errors, raised out of the scan loop.
    ParseError: Base for parser failures.
    TypeMismatch: Parse-fatal; a declared type initialized with an incompatible literal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hopiler.hopiler_tokens import Token


class HopilerError(SyntaxError):
    """Base class for HoPiler lexing and parsing errors.

    Attributes:
        message (str): The human-readable description without position.
        line (int): 1-based source line, or 0 if unknown.
        col (int): 1-based source column, or 0 if unknown.
    """

    def __init__(self, message: str, line: int = 0, col: int = 0) -> None:
        self.message = message
        self.line = line
        self.col = col
        if line:
            message = f"{message} at line {line}, col {col}"
        super().__init__(message)


class LexError(HopilerError):
    def __init__(self, message: str, lexeme: str, line: int = 0, col: int = 0) -> None:
        self.lexeme = lexeme
        super().__init__(message, line, col)


class InvalidNumberLiteral(LexError):
    pass


class InvalidIdentifier(LexError):
    pass


class UnrecognizedToken(LexError):
    pass


class InvalidEscapeSequence(LexError):
    pass


class InvalidCharacterLiteralLength(LexError):
    pass


LEX_LOCAL_ERRORS: tuple[type[LexError], ...] = (
    InvalidNumberLiteral,
    InvalidIdentifier,
    UnrecognizedToken,
)
"""Lex errors that drop one lexeme without aborting tokenization."""


class ParseError(HopilerError):
    pass


class TypeMismatch(ParseError):
    """A declaration whose literal kind does not match its declared type.

    Attributes:
        data_type (Token): The declared type operand.
        literal (Token): The assigned operand.
    """

    def __init__(self, data_type: Token, literal: Token) -> None:
        self.data_type = data_type
        self.literal = literal
        super().__init__(
            f"Invalid assignment on type {data_type!r} with {literal!r}",
            literal.line,
            literal.col,
        )


__all__ = [
    "LEX_LOCAL_ERRORS",
    "HopilerError",
    "InvalidCharacterLiteralLength",
    "InvalidEscapeSequence",
    "InvalidIdentifier",
    "InvalidNumberLiteral",
    "LexError",
    "ParseError",
    "TypeMismatch",
    "UnrecognizedToken",
]
