"""Facet filters built with the builder pattern.

Example::

    FacetBuilder("company", "ACME Corp").or_("company", "Big Corp").and_("roles", "Tech").build()

gives ``AND(OR(company:ACME Corp, company:Big Corp), roles:Tech)``, sent to
MeiliSearch as ``[["company:ACME Corp", "company:Big Corp"], ["roles:Tech"]]``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class Operator(str, Enum):
    AND = "AND"
    OR = "OR"


class FacetExpression(ABC):
    """Immutable facet filter tree."""

    @abstractmethod
    def to_filters(self) -> list[list[str]]:
        """Wire form: list of OR-groups of ``key:value`` strings, all ANDed."""
        ...


@dataclass(frozen=True)
class Facet(FacetExpression):
    """Single ``key:value`` facet condition."""

    key: str
    value: str

    def __post_init__(self) -> None:
        if not self.key or not self.value:
            raise ValueError("facet key and value must be non-empty")

    def to_filters(self) -> list[list[str]]:
        return [[f"{self.key}:{self.value}"]]

    def __str__(self) -> str:
        return f"{self.key}:{self.value}"


@dataclass(frozen=True)
class FacetGroup(FacetExpression):
    """AND/OR combination of sub-expressions, in the order they were added."""

    operator: Operator
    children: tuple[FacetExpression, ...]

    def __post_init__(self) -> None:
        if not self.children:
            raise ValueError(f"{self.operator.value} group needs at least one facet")

    def to_filters(self) -> list[list[str]]:
        """Conjunctive normal form: OR-groups that are all ANDed together."""
        if self.operator is Operator.AND:
            return [clause for child in self.children for clause in child.to_filters()]
        # distribute OR over the AND clauses of each child
        clauses: list[list[str]] = [[]]
        for child in self.children:
            clauses = [left + right for left in clauses for right in child.to_filters()]
        return clauses

    def __str__(self) -> str:
        inner = f" {self.operator.value} ".join(str(c) for c in self.children)
        return f"({inner})"


class FacetBuilder:
    """Left-associative builder: each call wraps everything built so far."""

    def __init__(self, key: str, value: str) -> None:
        self._expression: FacetExpression = Facet(key, value)

    @classmethod
    def _from_expression(cls, expression: FacetExpression) -> FacetBuilder:
        builder = cls.__new__(cls)
        builder._expression = expression
        return builder

    def _combine(self, operator: Operator, key: str, value: str) -> FacetBuilder:
        leaf = Facet(key, value)
        current = self._expression
        if isinstance(current, FacetGroup) and current.operator is operator:
            return self._from_expression(FacetGroup(operator, current.children + (leaf,)))
        return self._from_expression(FacetGroup(operator, (current, leaf)))

    def or_(self, key: str, value: str) -> FacetBuilder:
        return self._combine(Operator.OR, key, value)

    def and_(self, key: str, value: str) -> FacetBuilder:
        return self._combine(Operator.AND, key, value)

    def build(self) -> FacetExpression:
        return self._expression
