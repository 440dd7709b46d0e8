"""Command-line code search over grep.app."""

from .backends import GrepAppSearchClient, SearchError, SearchParams, SearchResult
from .core import PageOrchestrator, Palette, ResultPrinter, SnippetRenderer

__all__ = [
    "GrepAppSearchClient",
    "PageOrchestrator",
    "Palette",
    "ResultPrinter",
    "SearchError",
    "SearchParams",
    "SearchResult",
    "SnippetRenderer",
]

__version__ = "0.1.0"
