"""Search results schema."""
from typing import Generic, Iterator, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

T = TypeVar("T")


class SearchResult(BaseModel, Generic[T]):
    """Hits of a search, in the relevance order returned by the instance.

    Iterating yields the hits; ``len()`` is the number of hits returned,
    ``nb_hits`` the total number of matches.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hits: list[T] = Field(default_factory=list)
    nb_hits: int = Field(
        default=0,
        validation_alias=AliasChoices("nbHits", "estimatedTotalHits", "totalHits"),
    )
    exhaustive_nb_hits: bool | None = Field(default=None, alias="exhaustiveNbHits")
    facets_distribution: dict[str, dict[str, int]] | None = Field(
        default=None,
        validation_alias=AliasChoices("facetsDistribution", "facetDistribution"),
    )
    exhaustive_facets_count: bool | None = Field(default=None, alias="exhaustiveFacetsCount")
    query: str = ""
    limit: int | None = None
    offset: int | None = None
    processing_time_ms: int | None = Field(default=None, alias="processingTimeMs")

    def __iter__(self) -> Iterator[T]:  # type: ignore[override]
        return iter(self.hits)

    def __len__(self) -> int:
        return len(self.hits)
