"""Section-aware Markdown model and prompt search."""

from .match_result import MatchResult
from .parse_markdown import parse_document, parse_heading
from .prompt import Prompt
from .render_markdown import format_heading, render_sections
from .search import (
    FUZZY_DISTANCE_THRESHOLD,
    LITERAL_MATCH_COST,
    find_all_matches,
    find_best_match,
    fuzzy_distance,
    list_section,
    rank,
    search,
)
from .search_pool import select_pool
from .section import Section

__all__ = [
    "FUZZY_DISTANCE_THRESHOLD",
    "LITERAL_MATCH_COST",
    "MatchResult",
    "Prompt",
    "Section",
    "find_all_matches",
    "find_best_match",
    "format_heading",
    "fuzzy_distance",
    "list_section",
    "parse_document",
    "parse_heading",
    "rank",
    "render_sections",
    "search",
    "select_pool",
]
