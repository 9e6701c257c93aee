"""Build the pool of prompts a search runs over."""

from __future__ import annotations

from .prompt import Prompt
from .section import Section
from .types import HeadingList, PromptList, SectionList


def _section_prompts(section: Section) -> PromptList:
    """Return the non-blank lines of ``section`` tagged with its title."""

    return [
        Prompt(content=line, section=section.title)
        for line in section.lines
        if line.strip()
    ]


def pool_all_prompts(document: SectionList) -> PromptList:
    """Return every non-blank line of every titled section."""

    pool: PromptList = []
    for section in document:
        if section.headings:
            pool.extend(_section_prompts(section))
    return pool


def pool_by_section_path(
    document: SectionList, section_path: HeadingList
) -> PromptList:
    """Return lines of sections whose nested path equals ``section_path``.

    The first heading of every section is the document title and is not
    part of the comparison.

    Args:
        document: Parsed sections.
        section_path: Headings from outer to inner, title excluded.

    Returns:
        Matching prompts in document order.
    """

    pool: PromptList = []
    for section in document:
        if len(section.headings) < 2:
            continue
        if section.headings[1:] == section_path:
            pool.extend(_section_prompts(section))
    return pool


def pool_by_single_section(document: SectionList, name: str) -> PromptList:
    """Return lines of sections whose deepest heading is ``name``."""

    pool: PromptList = []
    for section in document:
        if section.headings and section.title == name:
            pool.extend(_section_prompts(section))
    return pool


def pool_by_parent_section(document: SectionList, name: str) -> PromptList:
    """Return lines of sections nested anywhere below a ``name`` heading."""

    pool: PromptList = []
    for section in document:
        if name in section.headings[:-1]:
            pool.extend(_section_prompts(section))
    return pool


def select_pool(document: SectionList, section_selector: str) -> PromptList:
    """Select the prompts to search for a section selector.

    An empty selector pools the whole document. A comma separated selector
    is a nested heading path. A single name first matches leaf headings
    and, when that yields nothing, any ancestor heading.

    Args:
        document: Parsed sections.
        section_selector: Section name, comma separated path or ``""``.

    Returns:
        Prompts in document order; empty when nothing matches.
    """

    if section_selector == "":
        return pool_all_prompts(document)

    section_path = [part.strip() for part in section_selector.split(",")]
    if len(section_path) > 1:
        return pool_by_section_path(document, section_path)

    pool = pool_by_single_section(document, section_path[0])
    if pool:
        return pool
    return pool_by_parent_section(document, section_path[0])
