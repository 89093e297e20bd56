"""
Exception types raised by the template pipeline.

Every failure is a TemplateError. Errors raised inside a pipeline stage are
wrapped in a TemplateApplyError naming the stage, with the original error
chained as its cause.
"""

from typing import Self
from sqlweave.models.dataModel import Stage


class TemplateError(Exception):
    """Base class for all template expansion errors."""


class UnsupportedArgsTypeError(TemplateError):
    """The argument bag is neither a mapping nor a record."""


class UnbalancedDelimiterError(TemplateError):
    """A scope delimiter has no matching partner."""


class MalformedExpressionError(TemplateError):
    """A token tree has a shape the parser cannot build an AST from."""


class MissingPredicateError(TemplateError):
    """An ``[if]`` is not followed by a predicate token."""


class MissingThenClauseError(TemplateError):
    """An ``[if]`` has no ``[then]`` clause."""


class EmptyPredicateError(TemplateError):
    """A conditional has no predicate token."""


class MultiTokenPredicateError(TemplateError):
    """A conditional has more than one predicate token."""


class InvalidPredicateError(TemplateError):
    """A predicate does not reduce to ``true`` or ``false``."""


class NotConditional(Exception):
    """Raised by conditional detection for a tree that is a plain sequence.

    Control flow only; the tree parser catches it.
    """


class TemplateApplyError(TemplateError):
    """A pipeline stage failed.

    Attributes:
        stage: The stage that failed
        cause: The error raised by that stage
    """

    def __init__(self: Self, stage: Stage, cause: TemplateError) -> None:
        super().__init__(f"{stage.value}: {cause}")
        self.stage: Stage = stage
        self.cause: TemplateError = cause
