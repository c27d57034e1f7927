"""
Token model for the HoPiler language.

This module defines the typed units produced by the lexer and consumed by the parser:

Classes:
    TokenCategory: The eight token categories (the tag of a Token).
    KeywordType, LiteralType, OperatorType, DelimiterType, WhitespaceType:
        Integer subtype codes for the categories that carry one.
    Associativity: Operator associativity (left, right, none).
    TokenTriple: The normalized (category, subtype, value) view of a Token.
    Token: An immutable, category-tagged lexical unit.

Features:
    - One constructor per category, so a token never mixes payloads across categories
    - `normalize()` maps every token to a (category, int subtype, str value) triple
    - Static precedence/associativity tables for operator tokens

Example:
    >>> tok = Token.operator(OperatorType.POW)
    >>> tok.precedence(), tok.associativity()
    (80, <Associativity.RIGHT: 'right'>)

Exports:
    - TokenCategory
    - KeywordType
    - LiteralType
    - OperatorType
    - DelimiterType
    - WhitespaceType
    - Associativity
    - TokenTriple
    - Token
    - Subtype
    - OPERATOR_PRECEDENCE
    - PRIMITIVE_TYPES
    - ASSIGNMENT_OPERATORS
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping, NamedTuple


class TokenCategory(Enum):
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    LITERAL = "literal"
    OPERATOR = "operator"
    DELIMITER = "delimiter"
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    STATEMENT_ROOT = "statement_root"

    def __str__(self) -> str:
        return self.name


class KeywordType(IntEnum):
    IF = 0
    ELIF = 1
    ELSE = 2
    FOR = 3
    WHILE = 4
    DO = 5
    RETURN = 6
    BREAK = 7
    CONTINUE = 8
    # primitive types
    INT = 9
    CHAR = 10
    FLOAT = 11
    STRING = 12
    BOOL = 13

    def __str__(self) -> str:
        return self.name


class LiteralType(IntEnum):
    INT = 0
    FLOAT = 1
    STRING = 2
    CHAR = 3

    def __str__(self) -> str:
        return self.name


class OperatorType(IntEnum):
    # arithmetic
    ADD = 0
    SUB = 1
    MUL = 2
    DIV = 3
    MOD = 4
    POW = 5
    # logical
    AND = 6
    OR = 7
    NOT = 8
    XOR = 9
    # comparison
    EQ = 10
    NEQ = 11
    GT = 12
    LT = 13
    GTE = 14
    LTE = 15
    # assignment
    ASSIGN = 16
    ADD_ASSIGN = 17
    SUB_ASSIGN = 18
    MUL_ASSIGN = 19
    DIV_ASSIGN = 20
    MOD_ASSIGN = 21
    POW_ASSIGN = 22

    def __str__(self) -> str:
        return self.name


class DelimiterType(IntEnum):
    PAREN_OPEN = 0
    PAREN_CLOSE = 1
    BRACE_OPEN = 2
    BRACE_CLOSE = 3
    BRACKET_OPEN = 4
    BRACKET_CLOSE = 5

    def __str__(self) -> str:
        return self.name


class WhitespaceType(IntEnum):
    SPACE = 0
    TAB = 1
    NEWLINE = 2

    def __str__(self) -> str:
        return self.name


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


Subtype = KeywordType | LiteralType | OperatorType | DelimiterType | WhitespaceType

# category -> (subtype enum or None, carries a text value)
_PAYLOADS: Mapping[TokenCategory, tuple[type[IntEnum] | None, bool]] = MappingProxyType(
    {
        TokenCategory.KEYWORD: (KeywordType, False),
        TokenCategory.IDENTIFIER: (None, True),
        TokenCategory.LITERAL: (LiteralType, True),
        TokenCategory.OPERATOR: (OperatorType, False),
        TokenCategory.DELIMITER: (DelimiterType, False),
        TokenCategory.COMMENT: (None, True),
        TokenCategory.WHITESPACE: (WhitespaceType, False),
        TokenCategory.STATEMENT_ROOT: (None, False),
    }
)


PRIMITIVE_TYPES: frozenset[KeywordType] = frozenset(
    {
        KeywordType.INT,
        KeywordType.CHAR,
        KeywordType.FLOAT,
        KeywordType.STRING,
        KeywordType.BOOL,
    }
)

ASSIGNMENT_OPERATORS: frozenset[OperatorType] = frozenset(
    {
        OperatorType.ASSIGN,
        OperatorType.ADD_ASSIGN,
        OperatorType.SUB_ASSIGN,
        OperatorType.MUL_ASSIGN,
        OperatorType.DIV_ASSIGN,
        OperatorType.MOD_ASSIGN,
        OperatorType.POW_ASSIGN,
    }
)


def _table(
    groups: list[tuple[tuple[OperatorType, ...], int, Associativity]],
) -> Mapping[OperatorType, tuple[int, Associativity]]:
    table: dict[OperatorType, tuple[int, Associativity]] = {}
    for ops, precedence, assoc in groups:
        for op in ops:
            table[op] = (precedence, assoc)
    return MappingProxyType(table)


OPERATOR_PRECEDENCE: Mapping[OperatorType, tuple[int, Associativity]] = _table(
    [
        ((OperatorType.POW,), 80, Associativity.RIGHT),
        ((OperatorType.NOT,), 70, Associativity.RIGHT),
        ((OperatorType.MUL, OperatorType.DIV, OperatorType.MOD), 60, Associativity.LEFT),
        ((OperatorType.ADD, OperatorType.SUB), 50, Associativity.LEFT),
        (
            (OperatorType.GT, OperatorType.LT, OperatorType.GTE, OperatorType.LTE),
            40,
            Associativity.LEFT,
        ),
        ((OperatorType.EQ, OperatorType.NEQ), 35, Associativity.LEFT),
        ((OperatorType.AND,), 30, Associativity.LEFT),
        ((OperatorType.XOR,), 25, Associativity.LEFT),
        ((OperatorType.OR,), 20, Associativity.LEFT),
        (tuple(sorted(ASSIGNMENT_OPERATORS)), 10, Associativity.RIGHT),
    ]
)
"""Precedence (higher binds tighter) and associativity per operator subtype."""


class TokenTriple(NamedTuple):
    """Normalized view of a Token shared by every downstream consumer.

    Attributes:
        category (TokenCategory): The active category.
        subtype (int): The subtype code, or 0 for categories without one.
        value (str): The text payload, or "" for categories without one.
    """

    category: TokenCategory
    subtype: int
    value: str


@dataclass(frozen=True)
class Token:
    """Represents a single lexical token in the HoPiler language.

    A Token is a tagged value: `category` selects which payload is meaningful.
    Keyword, Operator, Delimiter and Whitespace tokens carry only a subtype,
    Literal tokens carry a subtype and text, Identifier and Comment tokens carry
    only text, and StatementRoot carries nothing. Use the per-category
    constructors (`Token.keyword(...)`, `Token.literal(...)`, ...) rather than
    building one by hand; direct construction is validated either way.

    Attributes:
        category (TokenCategory): The token category (never changes).
        subtype (IntEnum | None): Category-specific subtype code, if any.
        value (str): Text payload for literals, identifiers and comments.
        line (int): 1-based line where the lexeme starts (0 if unknown).
        col (int): 1-based column where the lexeme starts (0 if unknown).
    """

    category: TokenCategory
    subtype: Subtype | None = None
    value: str = ""
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.category, TokenCategory):
            raise TypeError(f"Invalid token category: {self.category!r}")
        subtype_enum, has_text = _PAYLOADS[self.category]
        if subtype_enum is None:
            if self.subtype is not None:
                raise ValueError(f"{self.category} tokens carry no subtype")
        elif not isinstance(self.subtype, subtype_enum):
            raise TypeError(
                f"{self.category} tokens need a {subtype_enum.__name__}, got {self.subtype!r}"
            )
        if not isinstance(self.value, str):
            raise TypeError(f"Token value must be str, got {type(self.value).__name__}")
        if not has_text and self.value:
            raise ValueError(f"{self.category} tokens carry no text value")

    @classmethod
    def keyword(cls, kind: KeywordType, line: int = 0, col: int = 0) -> Token:
        """Builds a Keyword token.

        Args:
            kind (KeywordType): The keyword subtype.
            line (int): 1-based source line, 0 if unknown.
            col (int): 1-based source column, 0 if unknown.

        Returns:
            Token: A token carrying only the keyword subtype.
        """
        return cls(TokenCategory.KEYWORD, kind, line=line, col=col)

    @classmethod
    def identifier(cls, name: str, line: int = 0, col: int = 0) -> Token:
        """Builds an Identifier token holding `name`."""
        return cls(TokenCategory.IDENTIFIER, None, name, line=line, col=col)

    @classmethod
    def literal(cls, kind: LiteralType, text: str, line: int = 0, col: int = 0) -> Token:
        """Builds a Literal token.

        Args:
            kind (LiteralType): The literal subtype (int, float, string or char).
            text (str): The literal text, without quotes and with escapes resolved.
            line (int): 1-based source line, 0 if unknown.
            col (int): 1-based source column, 0 if unknown.

        Returns:
            Token: A token carrying both the subtype and the text.
        """
        return cls(TokenCategory.LITERAL, kind, text, line=line, col=col)

    @classmethod
    def operator(cls, kind: OperatorType, line: int = 0, col: int = 0) -> Token:
        """Builds an Operator token of subtype `kind`."""
        return cls(TokenCategory.OPERATOR, kind, line=line, col=col)

    @classmethod
    def delimiter(cls, kind: DelimiterType, line: int = 0, col: int = 0) -> Token:
        """Builds a Delimiter token of subtype `kind`."""
        return cls(TokenCategory.DELIMITER, kind, line=line, col=col)

    @classmethod
    def comment(cls, text: str, line: int = 0, col: int = 0) -> Token:
        """Builds a Comment token holding the comment body (without the `#`)."""
        return cls(TokenCategory.COMMENT, None, text, line=line, col=col)

    @classmethod
    def whitespace(cls, kind: WhitespaceType, line: int = 0, col: int = 0) -> Token:
        """Builds a Whitespace token (space, tab or newline)."""
        return cls(TokenCategory.WHITESPACE, kind, line=line, col=col)

    @classmethod
    def statement_root(cls) -> Token:
        """Returns the payload-less sentinel used for the AST root."""
        return cls(TokenCategory.STATEMENT_ROOT)

    def normalize(self) -> TokenTriple:
        """Maps the token to its (category, subtype, value) triple.

        Returns:
            TokenTriple: The category, the subtype as an int (0 when the category
            has none), and the text value ("" when the category has none).

        Raises:
            ValueError: If the category is not a representable token category.
        """
        if self.category not in _PAYLOADS:
            raise ValueError(f"The type of token given is incorrect: {self.category!r}")
        subtype = int(self.subtype) if self.subtype is not None else 0
        return TokenTriple(self.category, subtype, self.value)

    def precedence(self) -> int:
        """Returns the binding strength of an operator token, 0 for anything else."""
        if self.category is not TokenCategory.OPERATOR:
            return 0
        return OPERATOR_PRECEDENCE[self.subtype][0]  # type: ignore[index]

    def associativity(self) -> Associativity:
        """Returns the associativity of an operator token, NONE for anything else."""
        if self.category is not TokenCategory.OPERATOR:
            return Associativity.NONE
        return OPERATOR_PRECEDENCE[self.subtype][1]  # type: ignore[index]

    def is_assignment(self) -> bool:
        """Returns True for `=` and the compound assignment operators."""
        return (
            self.category is TokenCategory.OPERATOR
            and self.subtype in ASSIGNMENT_OPERATORS
        )

    def is_primitive_type(self) -> bool:
        """Returns True for the int, char, float, string and bool keywords."""
        return self.category is TokenCategory.KEYWORD and self.subtype in PRIMITIVE_TYPES

    def __repr__(self) -> str:
        parts = [str(self.category)]
        if self.subtype is not None:
            parts.append(str(self.subtype))
        if _PAYLOADS[self.category][1]:
            parts.append(repr(self.value))
        return f"Token({', '.join(parts)})"


__all__ = [
    "ASSIGNMENT_OPERATORS",
    "OPERATOR_PRECEDENCE",
    "PRIMITIVE_TYPES",
    "Associativity",
    "DelimiterType",
    "KeywordType",
    "LiteralType",
    "OperatorType",
    "Subtype",
    "Token",
    "TokenCategory",
    "TokenTriple",
    "WhitespaceType",
]
