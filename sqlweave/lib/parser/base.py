r"""
Template expansion pipeline.

Runs the four stages over a template:

1. Tokenize the template into a tree of scopes
2. Parse the token tree into an AST
3. Substitute argument values into the AST, validating predicates
4. Evaluate the AST into the output text

A failure in any stage aborts the whole expansion; no partial output is
produced.

Example:
    parser = TemplateParser()
    parser.apply(
        "SELECT * {{ [if] .Reviews [then] ,json_agg(reviews) }} FROM products",
        {"Reviews": False},
    )
    -> "SELECT * FROM products"
"""

from typing import Any, Callable, Self, TypeVar
from sqlweave.config.settings import appsettings
from sqlweave.lib.args import lookupTable_build
from sqlweave.lib.errors import MalformedExpressionError, TemplateApplyError, TemplateError
from sqlweave.lib.log import LOG
from sqlweave.lib.parser.evaluate import syntaxTree_evaluate
from sqlweave.lib.parser.substitute import vars_substitute
from sqlweave.lib.parser.tokenizer import tokenTree_build
from sqlweave.lib.parser.tree import MAX_DEPTH, syntaxTree_parse
from sqlweave.models.dataModel import Node, ParseResult, Stage

T = TypeVar("T")


def _stage_run(stage: Stage, func: Callable[..., T], *args: Any) -> T:
    try:
        return func(*args)
    except TemplateError as e:
        LOG(f"Stage '{stage.value}' failed: {e}")
        raise TemplateApplyError(stage, e) from e
    except RecursionError as e:
        LOG(f"Stage '{stage.value}' ran out of stack: {e}")
        cause = MalformedExpressionError("nesting too deep for the interpreter stack")
        raise TemplateApplyError(stage, cause) from e


class TemplateParser:
    """Template expansion engine.

    Attributes:
        marker: Prefix that marks a template token as a variable reference
        strict: Whether unbalanced scope delimiters are an error
        max_depth: Deepest scope nesting accepted
    """

    def __init__(
        self: Self, marker: str = ".", strict: bool = True, max_depth: int = MAX_DEPTH
    ) -> None:
        """Initialize parser with template configuration.

        Args:
            marker: Prefix that marks a template token as a variable reference
            strict: Whether unbalanced scope delimiters are an error
            max_depth: Deepest scope nesting accepted

        Raises:
            ValueError: If marker is empty or max_depth is below 1
        """
        if not marker:
            raise ValueError("Variable marker cannot be empty")
        if max_depth < 1:
            raise ValueError("Maximum nesting depth must be at least 1")

        self.marker: str = marker
        self.strict: bool = strict
        self.max_depth: int = max_depth

    def syntaxTree_build(self: Self, template: str) -> Node:
        """Tokenize and parse a template without substituting anything.

        Args:
            template: Raw template text

        Returns:
            The AST root

        Raises:
            TemplateApplyError: If tokenizing or parsing fails
        """
        tree = _stage_run(Stage.TOKENIZE, tokenTree_build, template, self.strict)
        return _stage_run(Stage.PARSE, syntaxTree_parse, tree, 0, self.max_depth)

    def apply(self: Self, template: str, args: Any = None) -> str:
        """Expand a template with the given arguments.

        Args:
            template: Raw template text
            args: Mapping or record of substitution values. If None, the
                template is returned unchanged.

        Returns:
            The expanded text

        Raises:
            UnsupportedArgsTypeError: If args is not a mapping or record
            TemplateApplyError: If any pipeline stage fails
        """
        if args is None:
            return template

        lookup: dict[str, Any] = lookupTable_build(args, self.marker)
        syntax_tree: Node = self.syntaxTree_build(template)
        _stage_run(Stage.SUBSTITUTE, vars_substitute, syntax_tree, lookup)
        return syntaxTree_evaluate(syntax_tree)

    def parse(self: Self, template: str, args: Any = None) -> ParseResult:
        """Expand a template, reporting failure in the result instead of raising.

        Args:
            template: Raw template text
            args: Mapping or record of substitution values

        Returns:
            ParseResult with expanded text or error details
        """
        try:
            text: str = self.apply(template, args)
            return ParseResult(text=text, error=None, success=True)
        except TemplateError as e:
            LOG(f"Error in parse: {e}")
            return ParseResult(text="", error=str(e), success=False)


def parser_default() -> TemplateParser:
    """Return a TemplateParser configured from application settings."""
    return TemplateParser(
        marker=appsettings.varMarker,
        strict=appsettings.strictDelimiters,
        max_depth=appsettings.maxDepth,
    )


def apply(template: str, args: Any = None) -> str:
    """Expand a template using the application settings.

    See TemplateParser.apply.
    """
    return parser_default().apply(template, args)


def apply_result(template: str, args: Any = None) -> ParseResult:
    """Expand a template using the application settings, without raising.

    See TemplateParser.parse.
    """
    return parser_default().parse(template, args)
