"""Backend implementations for code search."""

from .models import Bucket, Facets, Hit, SearchParams, SearchResult
from .search import (
    AbstractSearchClient,
    GrepAppSearchClient,
    SearchClientFactory,
    SearchError,
)

__all__ = [
    "AbstractSearchClient",
    "SearchClientFactory",
    "GrepAppSearchClient",
    "SearchError",
    "SearchParams",
    "SearchResult",
    "Facets",
    "Bucket",
    "Hit",
]
