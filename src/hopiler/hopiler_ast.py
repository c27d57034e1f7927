"""
Defines the abstract syntax tree (AST) node structure for the HoPiler language.

Classes:
    ASTNode:
        A tree node holding exactly one Token and an ordered list of children it owns.
        The parser builds one node per operand/operator and attaches recognized
        statements to a root node that holds the StatementRoot sentinel token.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python
        dictionaries, suitable for JSON output or debugging.

Ownership:
    A node owns its children outright: there are no back-references, and reading
    `children` returns a detached deep copy, so callers cannot reach in and mutate
    the tree except through `add_child` / `remove_child`.

Example:
    >>> op = ASTNode(Token.operator(OperatorType.ASSIGN))
    >>> op.add_child(ASTNode(Token.identifier("x")))
    >>> op.add_child(ASTNode(Token.literal(LiteralType.INT, "5")))
    >>> print(op.pretty())
    Token(OPERATOR, ASSIGN)
      Token(IDENTIFIER, 'x')
      Token(LITERAL, INT, '5')
"""

import copy
from typing import Any, Iterator, TypedDict

from hopiler.hopiler_tokens import Subtype, Token, TokenCategory


class ASTDict(TypedDict):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        category (str): The held token's category name (e.g. "OPERATOR").
        subtype (str | None): The held token's subtype name (e.g. "ASSIGN"), if any.
        value (str): The held token's text payload ("" when it has none).
        line (int): Line number of the held token (0 if unknown).
        col (int): Column number of the held token (0 if unknown).
        children (list[ASTDict]): Child nodes in order.
    """

    category: str
    subtype: str | None
    value: str
    line: int
    col: int
    children: list["ASTDict"]


class ASTNode:
    """
    Represents a node in the abstract syntax tree (AST) for the HoPiler language.

    Args:
        token (Token): The token this node represents.

    Attributes:
        token (Token): The held token (read-only).
        category (TokenCategory): Category of the held token.
        subtype (Subtype | None): Subtype of the held token.
        value (str): Text payload of the held token.
        children (list[ASTNode]): A detached copy of the child nodes.
    """

    def __init__(self, token: Token) -> None:
        self._token = token
        self._children: list["ASTNode"] = []

    @property
    def token(self) -> Token:
        """Returns the token this node holds."""
        return self._token

    @property
    def category(self) -> TokenCategory:
        """Returns the category of the held token."""
        return self._token.category

    @property
    def subtype(self) -> Subtype | None:
        """Returns the subtype of the held token, or None for categories without one."""
        return self._token.subtype

    @property
    def value(self) -> str:
        """Returns the text payload of the held token ("" when it has none)."""
        return self._token.value

    @property
    def children(self) -> list["ASTNode"]:
        """
        Returns a deep copy of the child nodes, in insertion order.

        Changes to the returned list or to the nodes in it never reach this tree.

        Returns:
            list[ASTNode]: The copied children.
        """
        return copy.deepcopy(self._children)

    def add_child(self, node: "ASTNode") -> None:
        """
        Appends a child node. The node becomes owned by this tree.

        Args:
            node (ASTNode): The node to attach as the last child.
        """
        self._children.append(node)

    def remove_child(self, index: int) -> None:
        """Removes the child at `index`. The caller guarantees `0 <= index < len(self)`."""
        del self._children[index]

    def walk(self) -> Iterator["ASTNode"]:
        """Yields every node of the subtree in post-order (children before their parent)."""
        for child in self._children:
            yield from child.walk()
        yield self

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        parts = [repr(self._token)]
        if self._children:
            preview = ", ".join(repr(c) for c in self._children[:3])
            if len(self._children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return self._token == other._token and self._children == other._children

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> ASTDict:
        subtype = self._token.subtype
        return {
            "category": self._token.category.name,
            "subtype": subtype.name if subtype is not None else None,
            "value": self._token.value,
            "line": self._token.line,
            "col": self._token.col,
            "children": [c.to_dict() for c in self._children],
        }

    def pretty(self, indent: int = 0) -> str:
        """Renders the subtree one token per line, two spaces per depth level."""
        lines = ["  " * indent + repr(self._token)]
        lines.extend(c.pretty(indent + 1) for c in self._children)
        return "\n".join(lines)


__all__ = ["ASTDict", "ASTNode"]
