"""Search query builder.

``Query`` implements the builder pattern: every call returns a new builder
and leaves the previous one untouched. Nothing is sent until :meth:`Query.run`.

Example::

    results = await (
        meili.search("employees")
        .query("johnson")
        .facets(FacetBuilder("company", "ACME Corp").build())
        .distribution(["roles"])
        .limit(10)
        .run(Employee)
    )
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from meilimelo.facets import FacetExpression
from meilimelo.schema import validate_payload
from meilimelo.schemas.results import SearchResult

if TYPE_CHECKING:
    from meilimelo.client import MeiliMelo

T = TypeVar("T")


@dataclass(frozen=True)
class Crop:
    """Crop instruction for one attribute.

    Without ``length`` the attribute is cropped at the query's ``crop_length``.
    """

    attribute: str
    length: int | None = None

    def __str__(self) -> str:
        if self.length is None:
            return self.attribute
        return f"{self.attribute}:{self.length}"


CropSpec = Union[Crop, str, tuple[str, int]]


def _to_crop(spec: CropSpec) -> Crop:
    if isinstance(spec, Crop):
        return spec
    if isinstance(spec, str):
        return Crop(spec)
    attribute, length = spec
    return Crop(attribute, length)


def _unique(values: str | Iterable[str]) -> tuple[str, ...]:
    """Drop duplicates, keep first-seen order. A bare string is one attribute."""
    if isinstance(values, str):
        return (values,)
    return tuple(dict.fromkeys(values))


class SearchRequest(BaseModel):
    """Accumulated search parameters for one index."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, arbitrary_types_allowed=True)

    index: str
    query: str | None = Field(default=None, alias="q")
    filters: str | None = None
    facets: FacetExpression | None = Field(default=None, alias="facetFilters")
    limit: int | None = None
    offset: int | None = None
    attributes: tuple[str, ...] | None = Field(default=None, alias="attributesToRetrieve")
    crop: tuple[Crop, ...] | None = Field(default=None, alias="attributesToCrop")
    crop_length: int | None = Field(default=None, alias="cropLength")
    highlight: tuple[str, ...] | None = Field(default=None, alias="attributesToHighlight")
    distribution: tuple[str, ...] | None = Field(default=None, alias="facetsDistribution")
    matches: bool = False

    @field_serializer("facets")
    def _serialize_facets(self, facets: FacetExpression | None) -> list[list[str]] | None:
        return facets.to_filters() if facets is not None else None

    @field_serializer("crop")
    def _serialize_crop(self, crop: tuple[Crop, ...] | None) -> list[str] | None:
        return [str(c) for c in crop] if crop is not None else None

    def to_payload(self) -> dict[str, Any]:
        """JSON body for ``POST /indexes/{index}/search``; unset parameters are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"index"})


class Query:
    """Builder for a search on a single index."""

    def __init__(self, client: MeiliMelo, index: str, request: SearchRequest | None = None) -> None:
        self._client = client
        self._request = request if request is not None else SearchRequest(index=index)

    def _with(self, **changes: Any) -> Query:
        return Query(self._client, self._request.index, self._request.model_copy(update=changes))

    @property
    def index(self) -> str:
        return self._request.index

    def query(self, query: str) -> Query:
        return self._with(query=query)

    def filters(self, filters: str) -> Query:
        """Filter expression, e.g. ``"company = ACME AND age > 23"``."""
        return self._with(filters=filters)

    def limit(self, limit: int) -> Query:
        # range checks are left to the instance
        return self._with(limit=limit)

    def offset(self, offset: int) -> Query:
        return self._with(offset=offset)

    def facets(self, facets: FacetExpression) -> Query:
        return self._with(facets=facets)

    def attributes(self, attributes: str | Iterable[str]) -> Query:
        """Attributes to retrieve; replaces any previous selection."""
        return self._with(attributes=_unique(attributes))

    retrieve = attributes

    def crop(self, attributes: str | Crop | Iterable[CropSpec]) -> Query:
        """Attributes to crop, e.g. ``["overview", Crop("description", 10)]``."""
        if isinstance(attributes, (str, Crop)):
            attributes = [attributes]
        return self._with(crop=tuple(_to_crop(spec) for spec in attributes))

    def crop_length(self, length: int) -> Query:
        return self._with(crop_length=length)

    def highlight(self, attributes: str | Iterable[str]) -> Query:
        return self._with(highlight=_unique(attributes))

    def distribution(self, facets: str | Iterable[str]) -> Query:
        """Facets for which to return distribution counts."""
        return self._with(distribution=_unique(facets))

    def matches(self, enabled: bool = True) -> Query:
        return self._with(matches=enabled)

    def build(self) -> SearchRequest:
        return self._request

    def to_payload(self) -> dict[str, Any]:
        return self._request.to_payload()

    async def run(self, model: type[T] = dict) -> SearchResult[T]:  # type: ignore[assignment]
        """Send the search and validate the hits into ``model``."""
        data = await self._client._call(
            "POST", self._client._index_path(self._request.index, "search"), json=self.to_payload()
        )
        return validate_payload(SearchResult[model], data)  # type: ignore[valid-type]
