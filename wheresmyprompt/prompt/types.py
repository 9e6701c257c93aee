"""Common type aliases for prompt structures."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .match_result import MatchResult  # noqa: F401
    from .prompt import Prompt  # noqa: F401
    from .section import Section  # noqa: F401


HeadingList = list[str]
LineList = list[str]
SectionList = list["Section"]
PromptList = list["Prompt"]
MatchList = list["MatchResult"]
StrList = list[str]
