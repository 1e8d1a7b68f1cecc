"""Query-builder client for the MeiliSearch HTTP API."""
from meilimelo.client import MeiliMelo
from meilimelo.config import MeiliSettings
from meilimelo.errors import (
    AuthError,
    MeiliMeloError,
    NotFound,
    SchemaMismatch,
    ServiceError,
    TransportError,
)
from meilimelo.facets import Facet, FacetBuilder, FacetExpression, FacetGroup, Operator
from meilimelo.logging import configure_logging
from meilimelo.schema import dump_document, load_document, schema
from meilimelo.schemas import IndexDescriptor, SearchResult, Update
from meilimelo.search import Crop, Query, SearchRequest

__all__ = [
    "AuthError",
    "Crop",
    "Facet",
    "FacetBuilder",
    "FacetExpression",
    "FacetGroup",
    "IndexDescriptor",
    "MeiliMelo",
    "MeiliMeloError",
    "MeiliSettings",
    "NotFound",
    "Operator",
    "Query",
    "SchemaMismatch",
    "SearchRequest",
    "SearchResult",
    "ServiceError",
    "TransportError",
    "Update",
    "configure_logging",
    "dump_document",
    "load_document",
    "schema",
]
