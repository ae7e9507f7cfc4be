"""Tests for the template parser."""

import pytest

from kiwi.exceptions import RenderError
from kiwi.parser import parse
from kiwi.tokens import ExpressionToken, IncludeToken, TextToken


def test_plain_text():
    assert parse("hello") == [TextToken("hello")]


def test_empty_source():
    assert parse("") == []


def test_expressions_and_text():
    assert parse("Hi {{ name }}!") == [
        TextToken("Hi "),
        ExpressionToken("name"),
        TextToken("!"),
    ]


def test_include_with_either_quote():
    assert parse("{% include \"header\" %}{% include 'footer.kiwi' %}") == [
        IncludeToken("header"),
        IncludeToken("footer.kiwi"),
    ]


def test_comments_dropped():
    assert parse("a{# note\nspanning lines #}b") == [TextToken("a"), TextToken("b")]


def test_unknown_tag_raises():
    with pytest.raises(RenderError, match="Unknown tag `for`"):
        parse("{% for x in y %}")


def test_unclosed_expression_is_text():
    assert parse("{{ open") == [TextToken("{{ open")]


def test_tokens_compare_by_value_and_are_unhashable():
    assert TextToken("a") == TextToken("a")
    assert TextToken("a") != ExpressionToken("a")
    with pytest.raises(TypeError):
        hash(TextToken("a"))
