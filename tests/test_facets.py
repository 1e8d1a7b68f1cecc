"""Tests for FacetBuilder: left associativity, flattening, wire form."""
import pytest

from meilimelo.facets import Facet, FacetBuilder, FacetGroup, Operator


def test_single_leaf() -> None:
    expr = FacetBuilder("company", "ACME").build()
    assert expr == Facet("company", "ACME")
    assert expr.to_filters() == [["company:ACME"]]


def test_or_then_and_is_left_associative() -> None:
    expr = FacetBuilder("a", "1").or_("b", "2").and_("c", "3").build()
    assert expr == FacetGroup(
        Operator.AND,
        (FacetGroup(Operator.OR, (Facet("a", "1"), Facet("b", "2"))), Facet("c", "3")),
    )
    assert expr.to_filters() == [["a:1", "b:2"], ["c:3"]]


def test_and_then_or_wraps_the_conjunction() -> None:
    expr = FacetBuilder("a", "1").and_("b", "2").or_("c", "3").build()
    assert expr == FacetGroup(
        Operator.OR,
        (FacetGroup(Operator.AND, (Facet("a", "1"), Facet("b", "2"))), Facet("c", "3")),
    )
    # (a AND b) OR c == (a OR c) AND (b OR c)
    assert expr.to_filters() == [["a:1", "c:3"], ["b:2", "c:3"]]


def test_same_operator_is_flattened() -> None:
    expr = FacetBuilder("company", "ACME").or_("company", "Corp").or_("company", "Inc").build()
    assert expr == FacetGroup(
        Operator.OR,
        (Facet("company", "ACME"), Facet("company", "Corp"), Facet("company", "Inc")),
    )
    assert expr.to_filters() == [["company:ACME", "company:Corp", "company:Inc"]]


def test_builder_is_not_mutated() -> None:
    base = FacetBuilder("a", "1")
    base.and_("b", "2")
    assert base.build() == Facet("a", "1")


def test_str_rendering() -> None:
    expr = FacetBuilder("a", "1").or_("b", "2").and_("c", "3").build()
    assert str(expr) == "((a:1 OR b:2) AND c:3)"


@pytest.mark.parametrize("key,value", [("", "x"), ("x", "")])
def test_empty_key_or_value_rejected(key: str, value: str) -> None:
    with pytest.raises(ValueError):
        FacetBuilder(key, value)


def test_empty_group_rejected() -> None:
    with pytest.raises(ValueError):
        FacetGroup(Operator.AND, ())
