"""
Parser package for sqlweave template expansion.

Provides the tokenize / parse / substitute / evaluate pipeline and the
TemplateParser that runs it.
"""

from .base import TemplateParser, apply, apply_result, parser_default
from .evaluate import syntaxTree_evaluate
from .substitute import value_format, vars_substitute
from .tokenizer import tokenTree_build
from .tree import conditional_detect, conditional_parse, syntaxTree_parse

__all__ = [
    "TemplateParser",
    "apply",
    "apply_result",
    "parser_default",
    "tokenTree_build",
    "syntaxTree_parse",
    "conditional_detect",
    "conditional_parse",
    "vars_substitute",
    "value_format",
    "syntaxTree_evaluate",
]
