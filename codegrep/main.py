"""Command-line entry point for searching code on grep.app."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, TextIO

from codegrep.backends import AbstractSearchClient, SearchClientFactory, SearchError, SearchParams
from codegrep.config import ClientConfig
from codegrep.core import (
    COLOR_MODES,
    PageOrchestrator,
    Palette,
    ResultPrinter,
    SnippetRenderer,
    detect_palette,
)

logger = logging.getLogger(__name__)

COLOR_ALIASES = {"A": "auto", "a": "always", "n": "never"}


def _color_mode(value: str) -> str:
    mode = COLOR_ALIASES.get(value, value.lower())
    if mode not in COLOR_MODES:
        raise argparse.ArgumentTypeError(
            f"invalid color mode {value!r} (choose from {', '.join(COLOR_MODES)})"
        )
    return mode


def _page_count(value: str) -> int:
    try:
        pages = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid page count {value!r}")
    if pages < 0:
        raise argparse.ArgumentTypeError("page count cannot be negative")
    return pages


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cg", description="Search code on grep.app")
    parser.add_argument("query", help="Search query")
    parser.add_argument("-i", dest="case_insensitive", action="store_true", help="Case insensitive")
    parser.add_argument("-a", dest="text", action="store_true", help="Search as text")
    parser.add_argument(
        "-w", dest="words", action="store_true", help="Match whole words (implies -a)"
    )
    parser.add_argument("-C", dest="context", action="store_true", help="Show context")
    parser.add_argument(
        "-l", dest="langs", action="append", default=[], metavar="LANG", help="Language filter"
    )
    parser.add_argument("-r", dest="repo", help="Repository filter")
    parser.add_argument("-P", dest="path", help="Path filter")
    parser.add_argument(
        "-c",
        dest="color",
        type=_color_mode,
        default="auto",
        metavar="{auto,always,never}",
        help="Color output",
    )
    parser.add_argument(
        "-N", dest="no_line_numbers", action="store_true", help="Disable line numbers"
    )
    parser.add_argument(
        "-f", dest="show_filters", action="store_true", help="Show available filters"
    )
    parser.add_argument(
        "-p",
        dest="pages",
        type=_page_count,
        default=5,
        help="How many pages to show (0 means all)",
    )
    parser.add_argument("-v", dest="verbose", action="store_true", help="Verbose logging")
    return parser


def params_from_args(args: argparse.Namespace) -> SearchParams:
    """Build first-page search params from parsed arguments."""
    return SearchParams(
        page=1,
        query=args.query,
        case_sensitive=not args.case_insensitive,
        regex=not args.text and not args.words,
        words=args.words,
        langs=tuple(args.langs),
        repo=args.repo,
        path=args.path,
    )


async def run(
    args: argparse.Namespace,
    client: AbstractSearchClient,
    palette: Palette,
    config: ClientConfig,
    stream: Optional[TextIO] = None,
) -> None:
    """Search, print the first page, then stream the remaining pages in order.

    Raises:
        SearchError: If any page request fails
    """
    params = params_from_args(args)
    renderer = SnippetRenderer(
        palette, context=args.context, line_numbers=not args.no_line_numbers
    )
    printer = ResultPrinter(palette, renderer, host=config.repo_host, stream=stream)
    orchestrator = PageOrchestrator(client.search_async, concurrency=config.concurrency)

    first = await client.search_async(params)

    if args.show_filters:
        printer.print_filters(first, orchestrator.plan(first).total_pages)
        return

    if not first.hits:
        logger.info(f"No results for {params.query!r}")
        return

    printer.print_result(first)
    async for result in orchestrator.pages(params, first, args.pages):
        printer.print_result(result)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = ClientConfig()
    except ValueError as exc:
        print(f"cg: {exc}", file=sys.stderr)
        sys.exit(2)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        params_from_args(args)
        client = SearchClientFactory.create_client(
            backend=config.search_backend, **config.get_client_kwargs()
        )
    except ValueError as exc:
        logger.error(str(exc))
        sys.exit(2)
    logger.debug(f"Using {config.search_backend} search backend")

    palette = detect_palette(args.color)

    try:
        asyncio.run(run(args, client, palette, config))
    except SearchError as exc:
        logger.error(f"Search failed: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt (CTRL+C)")
        sys.exit(130)


if __name__ == "__main__":
    main()
