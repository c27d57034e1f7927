"""
Fixed lexical tables for the HoPiler language.

Every table is read-only. The lexer's classifier looks lexemes up here in the
order keywords, operators, delimiters; the parser uses the type-compatibility
table to validate declarations.
"""

from types import MappingProxyType
from typing import Mapping

from hopiler.hopiler_tokens import (
    ASSIGNMENT_OPERATORS,
    PRIMITIVE_TYPES,
    DelimiterType,
    KeywordType,
    LiteralType,
    OperatorType,
    WhitespaceType,
)

SOURCE_SUFFIX = ".ho"

KEYWORDS: Mapping[str, KeywordType] = MappingProxyType(
    {
        "int": KeywordType.INT,
        "char": KeywordType.CHAR,
        "float": KeywordType.FLOAT,
        "string": KeywordType.STRING,
        "str": KeywordType.STRING,
        "bool": KeywordType.BOOL,
        "if": KeywordType.IF,
        "elif": KeywordType.ELIF,
        "else": KeywordType.ELSE,
        "for": KeywordType.FOR,
        "while": KeywordType.WHILE,
        "do": KeywordType.DO,
        "return": KeywordType.RETURN,
        "break": KeywordType.BREAK,
        "continue": KeywordType.CONTINUE,
    }
)

OPERATORS: Mapping[str, OperatorType] = MappingProxyType(
    {
        # arithmetic
        "+": OperatorType.ADD,
        "-": OperatorType.SUB,
        "*": OperatorType.MUL,
        "/": OperatorType.DIV,
        "%": OperatorType.MOD,
        "**": OperatorType.POW,
        # logical
        "&&": OperatorType.AND,
        "and": OperatorType.AND,
        "||": OperatorType.OR,
        "or": OperatorType.OR,
        "!": OperatorType.NOT,
        "not": OperatorType.NOT,
        "^": OperatorType.XOR,
        "xor": OperatorType.XOR,
        # comparison
        "==": OperatorType.EQ,
        "!=": OperatorType.NEQ,
        ">": OperatorType.GT,
        "<": OperatorType.LT,
        ">=": OperatorType.GTE,
        "<=": OperatorType.LTE,
        # assignment
        "=": OperatorType.ASSIGN,
        "+=": OperatorType.ADD_ASSIGN,
        "-=": OperatorType.SUB_ASSIGN,
        "*=": OperatorType.MUL_ASSIGN,
        "/=": OperatorType.DIV_ASSIGN,
        "%=": OperatorType.MOD_ASSIGN,
        "**=": OperatorType.POW_ASSIGN,
    }
)

DELIMITERS: Mapping[str, DelimiterType] = MappingProxyType(
    {
        "(": DelimiterType.PAREN_OPEN,
        ")": DelimiterType.PAREN_CLOSE,
        "{": DelimiterType.BRACE_OPEN,
        "}": DelimiterType.BRACE_CLOSE,
        "[": DelimiterType.BRACKET_OPEN,
        "]": DelimiterType.BRACKET_CLOSE,
    }
)

WHITESPACE: Mapping[str, WhitespaceType] = MappingProxyType(
    {
        " ": WhitespaceType.SPACE,
        "\t": WhitespaceType.TAB,
        "\n": WhitespaceType.NEWLINE,
    }
)

# character after a backslash -> character appended to the buffer
ESCAPES: Mapping[str, str] = MappingProxyType(
    {
        "n": "\n",
        "t": "\t",
        "r": "\r",
        "b": "\b",
        "v": "\v",
        "f": "\f",
        "0": "\0",
        "'": "'",
        '"': '"',
        "\\": "\\",
    }
)

TYPE_COMPATIBILITY: Mapping[KeywordType, LiteralType] = MappingProxyType(
    {
        KeywordType.INT: LiteralType.INT,
        KeywordType.CHAR: LiteralType.CHAR,
        KeywordType.STRING: LiteralType.STRING,
        KeywordType.FLOAT: LiteralType.FLOAT,
    }
)

__all__ = [
    "ASSIGNMENT_OPERATORS",
    "DELIMITERS",
    "ESCAPES",
    "KEYWORDS",
    "OPERATORS",
    "PRIMITIVE_TYPES",
    "SOURCE_SUFFIX",
    "TYPE_COMPATIBILITY",
    "WHITESPACE",
]
