from .pagination import DEFAULT_CONCURRENCY, PAGE_SIZE, PageOrchestrator, PagePlan, plan_pages
from .palette import COLOR_MODES, Palette, detect_palette, select_palette
from .printer import ResultPrinter
from .renderer import RenderedLine, SnippetRenderer

__all__ = [
    "COLOR_MODES",
    "DEFAULT_CONCURRENCY",
    "PAGE_SIZE",
    "PageOrchestrator",
    "PagePlan",
    "Palette",
    "RenderedLine",
    "ResultPrinter",
    "SnippetRenderer",
    "detect_palette",
    "plan_pages",
    "select_palette",
]
