"""Render sections back into Markdown text."""

from __future__ import annotations

from .section import Section
from .types import HeadingList, SectionList


def format_heading(level: int, text: str) -> str:
    """Return a Markdown heading line of the given nesting ``level``."""
    return "#" * level + " " + text


def render_section(
    section: Section, previous: HeadingList | None = None
) -> str:
    """Render one section, skipping headings shared with ``previous``.

    Args:
        section: Section to render.
        previous: Heading path of the section rendered just before.

    Returns:
        Markdown text with one ``\\n`` after every line.
    """

    previous = previous or []

    # Headings already open from the previous section are not repeated.
    shared = 0
    for mine, theirs in zip(section.headings, previous):
        if mine != theirs:
            break
        shared += 1
    if shared == len(section.headings):
        shared = max(shared - 1, 0)

    out = [
        format_heading(depth + 1, heading) + "\n"
        for depth, heading in enumerate(section.headings)
        if depth >= shared
    ]
    out.extend(line + "\n" for line in section.lines)
    return "".join(out)


def render_sections(sections: SectionList) -> str:
    """Render a parsed document so that parsing it again yields ``sections``.

    Args:
        sections: Sections in document order.

    Returns:
        Markdown text.
    """

    out = []
    previous: HeadingList = []
    for section in sections:
        out.append(render_section(section, previous))
        previous = section.headings
    return "".join(out)
