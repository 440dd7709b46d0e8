"""Shared builders for test data."""

from codegrep.backends.models import Facets, Hit, SearchResult


def make_result(count: int = 0, hits=None, page: int = 1) -> SearchResult:
    """Build a result page; ``page`` is stored in ``time`` so tests can tell pages apart."""
    return SearchResult(facets=Facets(count=count), hits=hits or [], total=count, time=page)


def make_hit(snippet: str, repo: str = "acme/widgets", path: str = "src/main.go") -> Hit:
    return Hit(repo=repo, path=path, snippet=snippet)


def row(number: int, code: str, attrs: str = "") -> str:
    """One snippet row in the service's table markup."""
    return (
        f'<tr{attrs}><td><div class="lineno">{number}</div></td>'
        f"<td><pre>{code}</pre></td></tr>"
    )
