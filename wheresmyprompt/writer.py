"""Append new prompts to the prompts document."""

from __future__ import annotations

import io
import logging
import subprocess
import time
from pathlib import Path
from typing import Protocol

from wheresmyprompt.config import Config
from wheresmyprompt.prompt import format_heading, parse_heading
from wheresmyprompt.serialize import json_dumps
from wheresmyprompt.sources import SimplenoteSource, SourceError, run_command

logger = logging.getLogger(__name__)

# Number of leading words used for a generated title.
TITLE_WORDS = 5
UNTITLED = "Untitled Prompt"


class DocumentWriter(Protocol):
    """Anything that can file a new prompt."""

    def write(self, title: str, content: str, section: str = "") -> None: ...


def generate_title(content: str) -> str:
    """Build a short title from the first words of ``content``.

    Args:
        content: Prompt text.

    Returns:
        Up to five words with the first letter capitalized and trailing
        punctuation removed.
    """

    words = content.split()
    if not words:
        return UNTITLED

    title = " ".join(words[:TITLE_WORDS])
    title = title[0].upper() + title[1:]
    return title.rstrip(".,!?;:")


def _find_section(lines: list[str], section: str) -> tuple[int, int, int]:
    """Locate the first heading named ``section`` in raw ``lines``.

    Returns:
        Index of the heading line, index just past the section (the next
        heading of the same or a shallower level, or the end) and the
        heading level; ``(-1, -1, 0)`` when no such heading exists.
    """

    for start, line in enumerate(lines):
        level, heading = parse_heading(line)
        if level and heading == section:
            break
    else:
        return -1, -1, 0

    end = start + 1
    while end < len(lines):
        next_level = parse_heading(lines[end])[0]
        if next_level and next_level <= level:
            break
        end += 1
    return start, end, level


def _with_newline(text: str) -> str:
    return text if text.endswith("\n") else text + "\n"


def add_prompt(text: str, title: str, content: str, section: str = "") -> str:
    """Return ``text`` with a new prompt filed under ``section``.

    When a heading named ``section`` exists the prompt becomes a
    sub-heading one level below it, placed after the last line of that
    section; the rest of ``text`` is kept verbatim. An unknown section is
    created at the end of the document; without a section the prompt is
    appended.

    Args:
        text: Current Markdown document.
        title: Heading of the new prompt.
        content: Prompt text.
        section: Heading text of the target section or ``""``.

    Returns:
        The updated Markdown document.

    Throws:
        ValueError: If ``title`` or ``content`` is empty.
    """

    if not title or not content:
        raise ValueError("both title and content are required")

    if not section:
        return (
            _with_newline(text)
            + "\n"
            + format_heading(3, title)
            + "\n"
            + content
            + "\n"
        )

    lines = list(io.StringIO(text, newline="\n"))
    start, end, level = _find_section(lines, section)
    if start >= 0:
        # Insert after the last non-blank line of the section, leaving
        # every other line of the document untouched.
        at = end
        while at > start + 1 and not lines[at - 1].strip():
            at -= 1
        lines[at - 1] = _with_newline(lines[at - 1])

        heading = format_heading(level + 1, title)
        block = ["\n", heading + "\n", content + "\n"]
        if at < len(lines) and lines[at].strip():
            block.append("\n")
        lines[at:at] = block
        return "".join(lines)

    return (
        _with_newline(text)
        + "\n\n"
        + format_heading(2, section)
        + "\n\n"
        + format_heading(3, title)
        + "\n"
        + content
        + "\n"
    )


class FileWriter:
    """File prompts into a local Markdown file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def write(self, title: str, content: str, section: str = "") -> None:
        """Add a prompt to the file, creating it when missing."""

        existed = self.path.exists()
        try:
            text = self.path.read_text(encoding="utf-8") if existed else ""
            updated = add_prompt(text, title, content, section)
            self.path.write_text(updated, encoding="utf-8")
            if not existed:
                self.path.chmod(0o600)
        except OSError as exc:
            raise SourceError(
                f"failed to write file {self.path}: {exc}"
            ) from exc


class SimplenoteWriter:
    """File prompts into the configured Simplenote note."""

    def __init__(self, config: Config) -> None:
        self.config = config

    def _note_payload(self, content: str) -> str:
        """Return the ``sncli import`` JSON for the updated note."""

        now = float(int(time.time()))
        note = {
            "tags": [],
            "deleted": False,
            "shareURL": "",
            "publishURL": "",
            "content": content,
            "systemTags": [],
            "modificationDate": now,
            "creationDate": now,
            "key": self.config.sn_note,
            "version": 1,
            "syncdate": now,
            "localkey": self.config.sn_note,
            "savedate": now,
        }
        return json_dumps([note])

    def write(self, title: str, content: str, section: str = "") -> None:
        """Add a prompt to the note and import it back into Simplenote."""

        current = SimplenoteSource(self.config).read()
        updated = add_prompt(current, title, content, section)

        try:
            run_command(
                ["sncli", "import", "-"],
                input_text=self._note_payload(updated),
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            raise SourceError(
                f"failed to import note to Simplenote: {exc}"
            ) from exc

        logger.info(
            f"Added prompt '{title}' to note '{self.config.sn_note}'"
        )


def writer_for(config: Config) -> DocumentWriter:
    """Return the file writer when configured, Simplenote otherwise."""

    if config.uses_file:
        return FileWriter(config.filepath)
    return SimplenoteWriter(config)
