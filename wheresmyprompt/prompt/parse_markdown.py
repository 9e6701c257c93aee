"""Parse Markdown text into heading-scoped sections."""

from __future__ import annotations

import io
import logging
from typing import Iterator, TextIO

from .section import Section
from .types import HeadingList, SectionList

logger = logging.getLogger(__name__)


def parse_heading(line: str) -> tuple[int, str]:
    """Return the heading level and text of ``line``.

    A heading is one or more ``#`` characters followed by a single space
    and some text, ignoring surrounding whitespace.

    Args:
        line: Raw document line.

    Returns:
        ``(level, text)`` for a heading, ``(0, "")`` for anything else.
    """

    line = line.strip()
    if not line.startswith("#"):
        return 0, ""

    level = len(line) - len(line.lstrip("#"))

    # "#", "#tag" and "##\ttext" stay body text.
    if len(line) > level and line[level] == " ":
        return level, line[level:].strip()
    return 0, ""


def _iter_lines(text: str | TextIO) -> Iterator[str]:
    """Yield lines of ``text`` without their line terminators."""

    stream = io.StringIO(text, newline="\n") if isinstance(text, str) else text
    for line in stream:
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        yield line


def _update_stack(stack: HeadingList, level: int, text: str) -> None:
    """Place ``text`` at depth ``level`` of the heading stack."""

    if len(stack) < level:
        # Deeper heading extends the path.
        stack.append(text)
    else:
        # Sibling or shallower heading replaces and truncates.
        del stack[level - 1 :]
        stack.append(text)


def parse_document(text: str | TextIO, verbose: bool = False) -> SectionList:
    """Parse Markdown content into an ordered list of sections.

    Sections that collect no body lines are dropped, which also drops a
    leading document title directly followed by a sub-heading. Lines that
    appear before the first heading are not part of any section.

    Args:
        text: Markdown content as a string or an open text stream.
        verbose: Log every emitted section.

    Returns:
        Sections in document order.
    """

    sections: SectionList = []
    stack: HeadingList = []
    current: Section | None = None

    for line in _iter_lines(text):
        level, heading = parse_heading(line)
        if level == 0:
            if current is not None:
                current.lines.append(line)
            continue

        _update_stack(stack, level, heading)

        # Close the previous section only when it owns lines.
        if current is not None and current.lines:
            sections.append(current)

        # Each section keeps its own copy of the heading path.
        current = Section(headings=list(stack))

    if current is not None and current.lines:
        sections.append(current)

    if verbose:
        for section in sections:
            logger.info(
                f"Section {' > '.join(section.headings)}: "
                f"{len(section.lines)} line(s)"
            )

    return sections
