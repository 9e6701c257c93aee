"""Multi-word fuzzy search over a prompt pool."""

from __future__ import annotations

import unicodedata

from rapidfuzz.distance import Levenshtein

from .match_result import MatchResult
from .types import MatchList, PromptList, SectionList, StrList

# Distance added for a query word found literally in the prompt.
LITERAL_MATCH_COST = 1

# Fuzzy matches at or above this edit distance are rejected.
FUZZY_DISTANCE_THRESHOLD = 100


def _normalize(text: str) -> str:
    """Lowercase ``text`` and strip combining marks such as accents."""

    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(
        ch for ch in decomposed if unicodedata.category(ch) != "Mn"
    )
    return unicodedata.normalize("NFC", stripped)


def _is_subsequence(needle: str, haystack: str) -> bool:
    """Return whether the characters of ``needle`` appear in order."""

    chars = iter(haystack)
    return all(ch in chars for ch in needle)


def fuzzy_distance(word: str, text: str) -> int | None:
    """Approximate match of a single word against a whole text.

    The word matches when its characters occur in ``text`` in the same
    order, ignoring case and diacritics. The reported distance is the
    Levenshtein distance between the word and the full text, so long texts
    score worse than short ones.

    Args:
        word: Query word.
        text: Candidate text.

    Returns:
        The edit distance, or ``None`` when the word does not match.
    """

    if not _is_subsequence(_normalize(word), _normalize(text)):
        return None
    return Levenshtein.distance(word, text)


def rank(pool: PromptList, query: str) -> MatchList:
    """Score every prompt that matches all words of ``query``.

    Args:
        pool: Prompts to search.
        query: Whitespace separated query words.

    Returns:
        Matches sorted by ascending score; ties keep pool order.
    """

    words = query.lower().split()
    if not words:
        return []

    matches: MatchList = []
    for index, prompt in enumerate(pool):
        content = prompt.content.lower()
        total = 0
        for word in words:
            if word in content:
                total += LITERAL_MATCH_COST
                continue

            distance = fuzzy_distance(word, content)
            if distance is None or distance >= FUZZY_DISTANCE_THRESHOLD:
                break
            total += distance
        else:
            # Every word matched.
            matches.append(
                MatchResult(content=prompt.content, score=total, index=index)
            )

    return sorted(matches, key=lambda match: match.score)


def search(pool: PromptList, query: str) -> StrList:
    """Return the prompts matching ``query``, best match first.

    An empty query returns the whole pool in its original order.

    Args:
        pool: Prompts to search.
        query: Whitespace separated query words.

    Returns:
        Prompt contents ordered by relevance.
    """

    if not pool:
        return []
    if query == "":
        return [prompt.content for prompt in pool]
    return [match.content for match in rank(pool, query)]


def find_all_matches(pool: PromptList, query: str) -> StrList:
    """Return every match for ``query``."""
    return search(pool, query)


def find_best_match(pool: PromptList, query: str) -> str:
    """Return the best match for ``query`` or ``""`` when none exists."""

    results = search(pool, query)
    return results[0] if results else ""


def list_section(document: SectionList, section_name: str) -> StrList:
    """Return the whole body of a section as a single block.

    Args:
        document: Parsed sections.
        section_name: Deepest heading of the wanted section.

    Returns:
        A one-element list with the joined lines, or an empty list.
    """

    for section in document:
        if section.headings and section.title == section_name:
            return ["\n".join(section.lines)]
    return []
