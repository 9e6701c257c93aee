"""A single searchable prompt line."""

from __future__ import annotations

from attrs import define


@define(slots=True)
class Prompt:
    """One body line filed under a section.

    Attributes:
        content: The body line as written in the document.
        section: Deepest heading of the section owning the line.
    """

    content: str
    section: str
