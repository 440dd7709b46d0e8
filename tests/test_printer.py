import io

from codegrep.backends.models import Bucket, Facets, SearchResult
from codegrep.core.palette import Palette
from codegrep.core.printer import ResultPrinter
from codegrep.core.renderer import SnippetRenderer
from helpers import make_hit, make_result, row


def _printer(palette=None, **kwargs):
    palette = palette or Palette.none()
    stream = io.StringIO()
    renderer = SnippetRenderer(palette, **kwargs)
    return ResultPrinter(palette, renderer, stream=stream), stream


def test_prints_header_and_rendered_snippet():
    printer, stream = _printer()
    snippet = row(10, " foo <mark>bar</mark> baz") + row(11, " qux")

    printer.print_result(make_result(count=1, hits=[make_hit(snippet)]))

    assert stream.getvalue() == (
        "https://github.com/acme/widgets/blob/master/src/main.go\n"
        "10: foo bar baz\n"
        "\n"
    )


def test_header_uses_file_color_and_host(colors):
    stream = io.StringIO()
    printer = ResultPrinter(colors, host="example.com", stream=stream)

    printer.print_result(make_result(count=1, hits=[make_hit(row(1, "<mark>x</mark>"), "o/r", "a.py")]))

    first_line = stream.getvalue().splitlines()[0]
    assert first_line == "\x1b[35mhttps://example.com/o/r/blob/master/a.py\x1b[0m"


def test_multiple_hits_are_separated_by_blank_lines():
    printer, stream = _printer()
    hits = [
        make_hit(row(1, "<mark>a</mark>"), path="one.go"),
        make_hit(row(2, "<mark>b</mark>"), path="two.go"),
    ]

    printer.print_result(make_result(count=2, hits=hits))

    assert stream.getvalue().splitlines() == [
        "https://github.com/acme/widgets/blob/master/one.go",
        "1:a",
        "",
        "https://github.com/acme/widgets/blob/master/two.go",
        "2:b",
        "",
    ]


def test_hit_without_matching_rows_prints_header_and_blank():
    printer, stream = _printer()
    printer.print_result(make_result(count=1, hits=[make_hit(row(1, "plain"))]))
    assert stream.getvalue().splitlines() == [
        "https://github.com/acme/widgets/blob/master/src/main.go",
        "",
    ]


def test_empty_page_prints_nothing():
    printer, stream = _printer()
    printer.print_result(make_result(count=0))
    assert stream.getvalue() == ""


def test_filter_summary():
    printer, stream = _printer()
    result = SearchResult(
        facets=Facets(
            count=23,
            langs=[Bucket(val="Go", count=5), Bucket(val="Rust", count=3)],
            repos=[Bucket(val="acme/widgets", count=12), Bucket(val="o/r", count=1234567)],
            paths=[Bucket(val="src/lib.rs", count=3)],
        )
    )

    printer.print_filters(result, total_pages=3)

    assert stream.getvalue() == (
        "languages: [Go: 5, Rust: 3]\n"
        "\n"
        "results  repo\n"
        "     12  acme/widgets\n"
        "1234567  o/r\n"
        "\n"
        "results  path\n"
        "      3  src/lib.rs\n"
        "\n"
        "pages: 3\n"
    )


def test_filter_summary_without_facets():
    printer, stream = _printer()
    printer.print_filters(make_result(count=0), total_pages=0)
    assert stream.getvalue().splitlines()[0] == "languages: []"
    assert stream.getvalue().splitlines()[-1] == "pages: 0"
