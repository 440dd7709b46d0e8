"""Search backends for remote code-search services."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Tuple

import requests
from pydantic import ValidationError

from codegrep.backends.models import SearchParams, SearchResult

logger = logging.getLogger(__name__)

GREPAPP_SEARCH_URL = "https://grep.app/api/search"


class SearchError(RuntimeError):
    """Raised when a search request fails or its response cannot be decoded."""


class AbstractSearchClient(ABC):
    """Abstract base class for search clients."""

    @abstractmethod
    def search(self, params: SearchParams) -> SearchResult:
        """Run one search request.

        Args:
            params: Search parameters, including the page to fetch

        Returns:
            Decoded search result for the requested page

        Raises:
            SearchError: On transport, status or decoding failure
        """
        pass

    async def search_async(self, params: SearchParams) -> SearchResult:
        """Run :meth:`search` in a worker thread."""
        return await asyncio.to_thread(self.search, params)


class GrepAppSearchClient(AbstractSearchClient):
    """grep.app search client implementation."""

    def __init__(self, base_url: str = GREPAPP_SEARCH_URL, timeout: float = 30) -> None:
        """Initialize grep.app client.

        Args:
            base_url: Search endpoint URL
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url
        self.timeout = timeout

    @staticmethod
    def build_query(params: SearchParams) -> List[Tuple[str, str]]:
        """Map search params onto the service's query string pairs."""
        query = [("format", "e"), ("q", params.query)]
        if params.page > 1:
            query.append(("page", str(params.page)))
        if params.case_sensitive:
            query.append(("case", "true"))
        if params.regex:
            query.append(("regexp", "true"))
        if params.words:
            query.append(("words", "true"))
        for lang in params.langs:
            query.append(("f.lang", lang))
        if params.repo is not None:
            query.append(("f.repo.pattern", params.repo))
        if params.path is not None:
            query.append(("f.path.pattern", params.path))
        return query

    def search(self, params: SearchParams) -> SearchResult:
        """Search using grep.app."""
        logger.debug(f"Requesting page {params.page} for query {params.query!r}")
        try:
            response = requests.get(
                self.base_url,
                params=self.build_query(params),
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.JSONDecodeError as exc:
            raise SearchError(f"Search response for page {params.page} is not JSON: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            raise SearchError(f"Search request for page {params.page} failed: {exc}") from exc
        except ValueError as exc:
            raise SearchError(f"Search response for page {params.page} is not JSON: {exc}") from exc

        try:
            result = SearchResult.model_validate(payload)
        except ValidationError as exc:
            raise SearchError(
                f"Search response for page {params.page} has an unexpected shape: {exc}"
            ) from exc

        if result.partial:
            logger.warning(f"Page {params.page} holds partial results")
        logger.debug(f"Page {params.page}: {len(result.hits)} hits of {result.count}")
        return result


class SearchClientFactory:
    """Factory for creating search clients."""

    @staticmethod
    def create_client(backend: str, **kwargs) -> AbstractSearchClient:
        """Create a search client for the given backend.

        Args:
            backend: Backend name ('grepapp')
            **kwargs: Backend-specific configuration

        Returns:
            Search client instance

        Raises:
            ValueError: If backend is not supported
        """
        backend = backend.lower()
        if backend == "grepapp":
            return GrepAppSearchClient(
                base_url=kwargs.get("base_url") or GREPAPP_SEARCH_URL,
                timeout=kwargs.get("timeout", 30),
            )
        else:
            raise ValueError(f"Unsupported backend: {backend}")
