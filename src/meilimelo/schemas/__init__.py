"""Typed views of MeiliSearch responses."""
from meilimelo.schemas.index import IndexDescriptor
from meilimelo.schemas.results import SearchResult
from meilimelo.schemas.update import Update

__all__ = ["IndexDescriptor", "SearchResult", "Update"]
