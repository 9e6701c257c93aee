"""Fuzzy search and manage LLM prompts kept in a Markdown note."""

from .prompt import (
    Prompt,
    Section,
    find_all_matches,
    find_best_match,
    list_section,
    parse_document,
    search,
    select_pool,
)

__all__ = [
    "Prompt",
    "Section",
    "find_all_matches",
    "find_best_match",
    "list_section",
    "parse_document",
    "search",
    "select_pool",
]
