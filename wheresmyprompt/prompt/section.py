"""Markdown section with its heading path and body lines."""

from __future__ import annotations

from attrs import define, field

from .types import HeadingList, LineList


@define(slots=True)
class Section:
    """A run of document lines following one Markdown heading.

    Attributes:
        headings: Heading path from the outermost heading down to the
            heading that opened the section.
        lines: Raw body lines, blank ones included, up to the next heading
            of any level.
    """

    headings: HeadingList = field(factory=list)
    lines: LineList = field(factory=list, repr=False)

    @property
    def title(self) -> str:
        """Return the deepest heading or an empty string."""
        return self.headings[-1] if self.headings else ""
