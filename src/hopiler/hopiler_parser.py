"""
HoPiler Language Parser

Recognizes declare-and-assign statements in a HoPiler token stream and builds the AST.

The parser is a small stack machine rather than a recursive-descent parser. It walks
the token list once, pushing operands (primitive type keywords, identifiers and
literals) and assignment operators onto two stacks. A newline token marks a
statement boundary: if the stacks hold a complete `<type> <ident> <op> <literal>`
statement, it is checked against the type-compatibility table and attached to the
root as `op(identifier, literal)`.

Supported Constructs
--------------------
- Declarations with initializer: `int x = 5`, `float ratio = 0.5`,
  `char c = 'a'`, `string s = "hi"` (and the compound forms `+=`, `-=`, `*=`,
  `/=`, `%=`, `**=`)

Parser Behavior
---------------
- Comments, spaces and tabs are ignored; newline is the only statement delimiter.
- Operators other than the seven assignment variants are dropped.
- A newline that does not complete a statement leaves both stacks untouched, so
  the pending operands carry over into the next line.
- Operands left on the stacks at end of input are discarded.
- The declared type is validated but not kept in the tree.

Raises
------
TypeMismatch
    When a declared type is initialized with an incompatible literal. The parse is
    aborted; there is no statement-local recovery.
"""

from __future__ import annotations

import logging

from hopiler.hopiler_ast import ASTNode
from hopiler.hopiler_constants import TYPE_COMPATIBILITY
from hopiler.hopiler_errors import TypeMismatch
from hopiler.hopiler_tokens import (
    LiteralType,
    Token,
    TokenCategory,
    WhitespaceType,
)

logger = logging.getLogger(__name__)


def is_compatible(data_type: Token, literal: Token) -> bool:
    """Checks a (declared type, assigned operand) pair against the compatibility table."""
    if not data_type.is_primitive_type() or literal.category is not TokenCategory.LITERAL:
        return False
    expected: LiteralType | None = TYPE_COMPATIBILITY.get(data_type.subtype)  # type: ignore[arg-type]
    return expected is not None and literal.subtype is expected


class Parser:
    """
    HoPiler Parser Class

    Transforms the lexer's token list into an AST rooted at a StatementRoot node
    whose direct children are the recognized statements.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream to be parsed.
    root : ASTNode
        The tree root, created before parsing with the StatementRoot sentinel.
    operand_stack : tuple[ASTNode, ...]
        Snapshot of the pending type-keyword, identifier and literal nodes.
    operator_stack : tuple[ASTNode, ...]
        Snapshot of the pending assignment-operator nodes.

    Methods
    -------
    parse() -> ASTNode
        Run the recognizer over every token and return the root.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens: list[Token] = list(tokens)
        self.root: ASTNode = ASTNode(Token.statement_root())
        self._operands: list[ASTNode] = []
        self._operators: list[ASTNode] = []
        self._parsed: bool = False

    @property
    def operand_stack(self) -> tuple[ASTNode, ...]:
        """Snapshot of the pending operand nodes, bottom first."""
        return tuple(self._operands)

    @property
    def operator_stack(self) -> tuple[ASTNode, ...]:
        """Snapshot of the pending operator nodes, bottom first."""
        return tuple(self._operators)

    def parse(self) -> ASTNode:
        """
        Parse the whole token list.

        The recognizer runs once; later calls return the same root.

        Returns
        -------
        ASTNode
            The root node; its children are `op(identifier, literal)` subtrees.

        Raises
        ------
        TypeMismatch
            If a completed statement assigns a literal of the wrong kind.
        """
        if self._parsed:
            return self.root
        logger.debug("Received %d tokens.", len(self.tokens))
        for token in self.tokens:
            self.feed(token)
        self._parsed = True
        if self._operands or self._operators:
            logger.debug(
                "Discarding %d operand(s) and %d operator(s) left at end of input",
                len(self._operands),
                len(self._operators),
            )
        self._operands.clear()
        self._operators.clear()
        logger.debug("Tree parsed: %d statement(s)", len(self.root))
        return self.root

    def feed(self, token: Token) -> None:
        """Apply one token to the recognizer."""
        category = token.category

        if category is TokenCategory.WHITESPACE:
            if token.subtype is WhitespaceType.NEWLINE:
                self.end_statement()
            return

        if (
            category in (TokenCategory.IDENTIFIER, TokenCategory.LITERAL)
            or token.is_primitive_type()
        ):
            self._operands.append(ASTNode(token))
        elif token.is_assignment():
            self._operators.append(ASTNode(token))
        elif category is TokenCategory.OPERATOR:
            logger.debug("Dropping unsupported operator %r", token)

    def end_statement(self) -> None:
        """
        Handle a statement boundary.

        Reduces `<type> <ident> <op> <literal>` from the stacks into `op(ident, literal)`
        and attaches it to the root. Without a complete statement on the stacks this
        is a no-op.

        Raises
        ------
        TypeMismatch
            If the declared type does not accept the literal.
        """
        if (
            len(self._operands) < 3
            or not self._operators
            or not self._operators[-1].token.is_assignment()
        ):
            return

        op = self._operators.pop()
        literal = self._operands.pop()
        identifier = self._operands.pop()
        data_type = self._operands.pop()

        if not is_compatible(data_type.token, literal.token):
            error = TypeMismatch(data_type.token, literal.token)
            logger.error("%s (identifier %r)", error, identifier.value)
            raise error

        op.add_child(identifier)
        op.add_child(literal)
        self.root.add_child(op)
        self._operands.clear()
        self._operators.clear()


__all__ = ["Parser", "is_compatible"]
