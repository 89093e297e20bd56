"""Tests for the TemplateParser pipeline."""

import pytest
from sqlweave.lib.errors import (
    InvalidPredicateError,
    MalformedExpressionError,
    MultiTokenPredicateError,
    TemplateApplyError,
    UnbalancedDelimiterError,
    UnsupportedArgsTypeError,
)
from sqlweave.lib.parser import TemplateParser, apply, apply_result
from sqlweave.models.dataModel import ConditionalNode, LiteralNode, SequenceNode, Stage

TEMPLATE = "{{ [if] .Key [then] A [else] B }}"


@pytest.fixture
def parser():
    return TemplateParser()


def test_empty_marker_rejected():
    with pytest.raises(ValueError, match="cannot be empty"):
        TemplateParser(marker="")


def test_none_args_bypasses_pipeline(parser):
    template = "SELECT *\t{{ broken"
    assert parser.apply(template, None) == template


@pytest.mark.parametrize("value, expected", [(True, "A"), (False, "B")])
def test_truth_table(parser, value, expected):
    assert parser.apply(TEMPLATE, {"Key": value}) == expected


@pytest.mark.parametrize("args", [{}, {"Key": "haha"}, {"Key": 1}])
def test_truth_table_errors(parser, args):
    with pytest.raises(TemplateApplyError) as excinfo:
        parser.apply(TEMPLATE, args)
    assert excinfo.value.stage is Stage.SUBSTITUTE
    assert isinstance(excinfo.value.cause, InvalidPredicateError)
    assert str(excinfo.value).startswith("substituting args: ")


@pytest.mark.parametrize("key1, key2", [(True, True), (True, False), ("x", None)])
def test_multi_token_predicate(parser, key1, key2):
    with pytest.raises(TemplateApplyError) as excinfo:
        parser.apply("{{ [if] .Key1 .Key2 [then] A }}", {"Key1": key1, "Key2": key2})
    assert isinstance(excinfo.value.__cause__, MultiTokenPredicateError)


def test_empty_lookup_normalizes_whitespace(parser):
    template = "\n  SELECT   products.*\n\tFROM products\n  WHERE id = $1  \n"
    assert parser.apply(template, {}) == "SELECT products.* FROM products WHERE id = $1"


def test_parse_stage_error_is_wrapped(parser):
    with pytest.raises(TemplateApplyError) as excinfo:
        parser.apply("", {})
    assert excinfo.value.stage is Stage.PARSE
    assert isinstance(excinfo.value.cause, MalformedExpressionError)
    assert str(excinfo.value).startswith("building AST: ")


def test_tokenize_stage_error_is_wrapped(parser):
    with pytest.raises(TemplateApplyError) as excinfo:
        parser.apply("SELECT }}", {})
    assert excinfo.value.stage is Stage.TOKENIZE
    assert isinstance(excinfo.value.cause, UnbalancedDelimiterError)


def test_lenient_parser_repairs_delimiters():
    parser = TemplateParser(strict=False)
    assert parser.apply("SELECT }} * {{ [if] .A [then] x", {"A": True}) == "SELECT * x"


def test_unsupported_args_type_is_not_wrapped(parser):
    with pytest.raises(UnsupportedArgsTypeError):
        parser.apply(TEMPLATE, ["Key"])


def test_custom_marker():
    parser = TemplateParser(marker=":")
    assert parser.apply("LIMIT :Limit .Limit", {"Limit": 10}) == "LIMIT 10 .Limit"


def test_syntax_tree_build(parser):
    node = parser.syntaxTree_build("x {{ [if] .A [then] y }}")
    assert node == SequenceNode(
        [
            LiteralNode("x"),
            SequenceNode(
                [ConditionalNode(predicate=[".A"], then_branch=SequenceNode([LiteralNode("y")]))]
            ),
        ]
    )


def test_parse_success(parser):
    result = parser.parse(TEMPLATE, {"Key": True})
    assert result.success
    assert result.text == "A"
    assert result.error is None


def test_parse_failure(parser):
    result = parser.parse(TEMPLATE, {"Key": "haha"})
    assert not result.success
    assert result.text == ""
    assert "substituting args" in result.error


def test_parse_does_not_hide_programming_errors(parser, monkeypatch):
    def broken(*args):
        raise RuntimeError("boom")

    monkeypatch.setattr("sqlweave.lib.parser.base.syntaxTree_evaluate", broken)
    with pytest.raises(RuntimeError):
        parser.parse(TEMPLATE, {"Key": True})


def test_module_level_api():
    assert apply(TEMPLATE, {"Key": False}) == "B"
    assert apply_result(TEMPLATE, {"Key": "nope"}).success is False


def test_module_level_api_uses_settings(monkeypatch):
    from sqlweave.config.settings import appsettings

    monkeypatch.setattr(appsettings, "varMarker", "$")
    assert apply("LIMIT $Limit", {"Limit": 5}) == "LIMIT 5"


def nested_template(depth: int, body: str = "x") -> str:
    return "{{ " * depth + body + " }}" * depth


def test_nesting_at_limit():
    assert TemplateParser(max_depth=5).apply(nested_template(5), {}) == "x"


def test_nesting_over_limit():
    with pytest.raises(TemplateApplyError) as excinfo:
        TemplateParser(max_depth=5).apply(nested_template(6), {})
    assert excinfo.value.stage is Stage.PARSE
    assert isinstance(excinfo.value.cause, MalformedExpressionError)
    assert "nesting too deep" in str(excinfo.value)


def test_deep_nesting_is_reported(parser):
    result = parser.parse(nested_template(3000), {})
    assert not result.success
    assert "building AST" in result.error
    assert "nesting too deep" in result.error


def test_stack_exhaustion_is_reported():
    parser = TemplateParser(max_depth=100_000)
    result = parser.parse(nested_template(5000), {})
    assert not result.success
    assert "nesting too deep" in result.error


def test_default_depth_with_nested_conditionals(parser):
    template = "{{ [if] true [then] " * 200 + "x" + " }}" * 200
    assert parser.apply(template, {}) == "x"


def test_invalid_max_depth():
    with pytest.raises(ValueError, match="at least 1"):
        TemplateParser(max_depth=0)
