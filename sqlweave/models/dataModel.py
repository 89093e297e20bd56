"""
dataModel.py

This module defines the data models and node types used throughout sqlweave.

Features:
- Enum classes for reserved template keywords and pipeline stages.
- Dataclasses for the raw token tree built by the tokenizer.
- Dataclasses for the abstract syntax tree (literal, conditional and
  sequence nodes) built by the tree parser.
- Pydantic result model for the non-raising parse entry point.

The token tree and AST node sets are closed: every consumer dispatches over
exactly the classes defined here.

Usage:
Import these models to build, inspect or compare token trees and ASTs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Union
from pydantic import BaseModel


class Keyword(str, Enum):
    """
    Reserved template tokens.
    """

    IF = "[if]"
    THEN = "[then]"
    ELSE = "[else]"
    SCOPE_OPEN = "{{"
    SCOPE_CLOSE = "}}"


KEYWORDS: Final[frozenset[str]] = frozenset(keyword.value for keyword in Keyword)


def keyword_check(text: str) -> bool:
    """Return True if ``text`` is one of the reserved template tokens."""
    return text in KEYWORDS


class Stage(Enum):
    """
    Pipeline stages, used to give context to a failure.
    """

    TOKENIZE = "tokenizing"
    PARSE = "building AST"
    SUBSTITUTE = "substituting args"


@dataclass
class LiteralToken:
    """A whitespace-delimited piece of template text with no structure."""

    text: str


@dataclass
class TokenTree:
    """An ordered list of tokens enclosed by a scope delimiter pair.

    The root of a tokenized template is a TokenTree with no delimiters.
    Subtrees own their tokens; there is no link back to the enclosing scope.
    """

    tokens: list["RawToken"] = field(default_factory=list)


RawToken = Union[LiteralToken, TokenTree]


@dataclass
class LiteralNode:
    """AST leaf holding literal text, replaced in place on substitution."""

    text: str


@dataclass
class SequenceNode:
    """AST node holding an ordered list of child nodes.

    Children are owned exclusively by this node.
    """

    children: list["Node"] = field(default_factory=list)


@dataclass
class ConditionalNode:
    """AST node for an ``[if] ... [then] ... [else] ...`` expression.

    Attributes:
        predicate: Tokens between ``[if]`` and ``[then]``. Exactly one token is
            valid; the count is checked during substitution.
        then_branch: Nodes following ``[then]``.
        else_branch: Nodes following ``[else]``, or None when the conditional
            has no ``[else]`` clause.
    """

    predicate: list[str]
    then_branch: SequenceNode = field(default_factory=SequenceNode)
    else_branch: SequenceNode | None = None


Node = Union[LiteralNode, ConditionalNode, SequenceNode]


class ParseResult(BaseModel):
    """Result of a template expansion.

    Attributes:
        text: The expanded text
        error: Optional error message if expansion failed
        success: Whether expansion succeeded
    """

    text: str
    error: str | None
    success: bool
