"""Writing of search results to the terminal."""

import sys
from typing import List, Optional, TextIO

from codegrep.backends.models import Bucket, SearchResult
from codegrep.core.palette import Palette
from codegrep.core.renderer import SnippetRenderer

DEFAULT_REPO_HOST = "github.com"


class ResultPrinter:
    """Prints hits with their rendered snippets, or the facet summary."""

    def __init__(
        self,
        palette: Palette,
        renderer: Optional[SnippetRenderer] = None,
        host: str = DEFAULT_REPO_HOST,
        stream: Optional[TextIO] = None,
    ) -> None:
        """Initialize result printer.

        Args:
            palette: Escape sequences for headers
            renderer: Snippet renderer, one without context is built if omitted
            host: Host of the repositories, used in the header links
            stream: Output stream, stdout if omitted
        """
        self.palette = palette
        self.renderer = renderer or SnippetRenderer(palette)
        self.host = host
        self.stream = stream or sys.stdout

    def _write(self, line: str = "") -> None:
        self.stream.write(line + "\n")

    def header(self, repo: str, path: str) -> str:
        return (
            f"{self.palette.file}https://{self.host}/{repo}/blob/master/{path}"
            f"{self.palette.reset}"
        )

    def print_result(self, result: SearchResult) -> None:
        """Print every hit of a result page."""
        for hit in result.hits:
            self._write(self.header(hit.repo, hit.path))
            for line in self.renderer.render(hit.snippet):
                self._write(line)
        self.stream.flush()

    def _print_buckets(self, title: str, buckets: List[Bucket]) -> None:
        self._write(f"results  {title}")
        for bucket in buckets:
            self._write(f"{bucket.count:>7}  {bucket.val}")

    def print_filters(self, result: SearchResult, total_pages: int) -> None:
        """Print the facet summary of a result and its page count."""
        langs = ", ".join(f"{bucket.val}: {bucket.count}" for bucket in result.facets.langs)
        self._write(f"languages: [{langs}]")
        self._write()
        self._print_buckets("repo", result.facets.repos)
        self._write()
        self._print_buckets("path", result.facets.paths)
        self._write()
        self._write(f"pages: {total_pages}")
        self.stream.flush()
