"""
sqlweave: conditional template expansion for SQL query fragments.

Example:
    from sqlweave import apply

    apply(
        "SELECT * {{ [if] .IncludeReviews [then] ,json_agg(reviews) AS reviews }} FROM products",
        {"IncludeReviews": True},
    )
    -> "SELECT * ,json_agg(reviews) AS reviews FROM products"
"""

from sqlweave.lib.args import args_fromRecord
from sqlweave.lib.errors import (
    EmptyPredicateError,
    InvalidPredicateError,
    MalformedExpressionError,
    MissingPredicateError,
    MissingThenClauseError,
    MultiTokenPredicateError,
    TemplateApplyError,
    TemplateError,
    UnbalancedDelimiterError,
    UnsupportedArgsTypeError,
)
from sqlweave.lib.parser import TemplateParser, apply, apply_result

__all__ = [
    "apply",
    "apply_result",
    "args_fromRecord",
    "TemplateParser",
    "TemplateError",
    "TemplateApplyError",
    "UnsupportedArgsTypeError",
    "UnbalancedDelimiterError",
    "MalformedExpressionError",
    "MissingPredicateError",
    "MissingThenClauseError",
    "EmptyPredicateError",
    "MultiTokenPredicateError",
    "InvalidPredicateError",
]
