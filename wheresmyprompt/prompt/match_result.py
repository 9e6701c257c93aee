"""Scored candidate produced while ranking a search pool."""

from __future__ import annotations

from attrs import define


@define(slots=True)
class MatchResult:
    """Scored candidate produced while ranking a search pool.

    Attributes:
        content: Prompt content that matched every query word.
        score: Accumulated distance over all query words; lower is better.
        index: Position of the prompt in the search pool.
    """

    content: str
    score: int
    index: int
