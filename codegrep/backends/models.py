"""Backend models for search requests and results."""

from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


@dataclass(frozen=True)
class SearchParams:
    """Parameters of one search request."""

    query: str
    page: int = 1
    case_sensitive: bool = True
    regex: bool = True
    words: bool = False
    langs: Tuple[str, ...] = field(default_factory=tuple)
    repo: Optional[str] = None
    path: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.query or not self.query.strip():
            raise ValueError("Query cannot be empty.")
        if self.page < 1:
            raise ValueError(f"Page must be a positive integer, got {self.page}")
        # Accept any iterable of languages but store it immutably
        object.__setattr__(self, "langs", tuple(self.langs))

    def with_page(self, page: int) -> "SearchParams":
        """Return a copy of these params for another page."""
        return replace(self, page=page)


class Bucket(BaseModel):
    """A single facet entry: a value and how many hits carry it."""

    model_config = ConfigDict(frozen=True)

    val: str
    count: int


def _unwrap_buckets(value: Any) -> Any:
    if isinstance(value, dict):
        return value.get("buckets", [])
    return value


class Facets(BaseModel):
    """Aggregate counts accompanying a search result."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    count: int = 0
    langs: List[Bucket] = Field(default_factory=list, alias="lang")
    repos: List[Bucket] = Field(default_factory=list, alias="repo")
    paths: List[Bucket] = Field(default_factory=list, alias="path")

    @field_validator("langs", "repos", "paths", mode="before")
    @classmethod
    def _buckets(cls, value: Any) -> Any:
        return _unwrap_buckets(value)


class Hit(BaseModel):
    """One matched file location with its markup snippet."""

    model_config = ConfigDict(frozen=True)

    repo: str
    path: str
    snippet: str = ""

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        """Flatten the service's ``{"raw": ...}`` and ``content.snippet`` shapes."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("repo", "path"):
            if isinstance(data.get(key), dict):
                data[key] = data[key].get("raw")
        content = data.pop("content", None)
        if isinstance(content, dict) and "snippet" not in data:
            data["snippet"] = content.get("snippet", "")
        return data


class SearchResult(BaseModel):
    """One page of search results."""

    model_config = ConfigDict(frozen=True)

    facets: Facets = Field(default_factory=Facets)
    hits: List[Hit] = Field(default_factory=list)
    total: int = 0
    partial: bool = False
    time: int = 0

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        """Flatten ``{"hits": {"hits": [...], "total": n}}`` into ``hits``/``total``."""
        if isinstance(data, dict) and isinstance(data.get("hits"), dict):
            data = dict(data)
            hits = data.pop("hits")
            data["hits"] = hits.get("hits", [])
            data.setdefault("total", hits.get("total", 0))
        return data

    @property
    def count(self) -> int:
        """Total number of hits reported by the service."""
        return self.facets.count
