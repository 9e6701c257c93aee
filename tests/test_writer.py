"""Tests for adding prompts to the prompts document."""

from __future__ import annotations

import json
import os
import stat
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from wheresmyprompt import writer
from wheresmyprompt.config import Config
from wheresmyprompt.prompt import parse_document, select_pool
from wheresmyprompt.sources import SourceError


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("write unit tests for all functions", "Write unit tests for all"),
        ("short one.", "Short one"),
        ("  hello   world!  ", "Hello world"),
        ("", "Untitled Prompt"),
        ("   ", "Untitled Prompt"),
    ],
)
def test_generate_title(content: str, expected: str) -> None:
    assert writer.generate_title(content) == expected


def test_add_prompt_requires_title_and_content() -> None:
    with pytest.raises(ValueError):
        writer.add_prompt("", "", "content")
    with pytest.raises(ValueError):
        writer.add_prompt("", "title", "")


def test_add_prompt_without_section() -> None:
    result = writer.add_prompt("# P\n## a\nx", "New", "do things")
    assert result == "# P\n## a\nx\n\n### New\ndo things\n"


def test_add_prompt_to_empty_document() -> None:
    result = writer.add_prompt("", "New", "do things", "coding")
    assert result == "\n\n\n## coding\n\n### New\ndo things\n"


def test_add_prompt_creates_missing_section() -> None:
    result = writer.add_prompt("# P\n## a\nx\n", "New", "body", "b")
    assert result == "# P\n## a\nx\n\n\n## b\n\n### New\nbody\n"
    # The new section holds only a blank line, so its child is found.
    assert [p.content for p in select_pool(parse_document(result), "b")] == [
        "body"
    ]
    assert [p.content for p in select_pool(parse_document(result), "")] == [
        "x",
        "body",
    ]


def test_add_prompt_into_existing_section(sample_markdown: str) -> None:
    result = writer.add_prompt(
        sample_markdown, "Refactor", "Refactor this module", "coding"
    )
    doc = parse_document(result)

    assert [s.headings for s in doc] == [
        ["Test Prompts", "documentation"],
        ["Test Prompts", "coding"],
        ["Test Prompts", "coding", "Refactor"],
    ]
    assert doc[2].lines == ["Refactor this module"]
    original = parse_document(sample_markdown)
    assert doc[0] == original[0]
    assert doc[1].lines == [*original[1].lines, ""]
    assert result == (
        sample_markdown + "\n### Refactor\nRefactor this module\n"
    )


def test_add_prompt_keeps_preamble_and_following_sections() -> None:
    text = "intro line\n# P\n## a\nx\n## b\ny\n"
    result = writer.add_prompt(text, "New", "body", "a")
    assert result == (
        "intro line\n# P\n## a\nx\n\n### New\nbody\n\n## b\ny\n"
    )


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        # Headings without body lines stay in place.
        (
            "# P\n## drafts\n## coding\nx\n",
            "# P\n## drafts\n## coding\nx\n\n### New\nbody\n",
        ),
        # Skipped heading levels keep their depth.
        (
            "# P\n### deep\nline\n## coding\nx\n",
            "# P\n### deep\nline\n## coding\nx\n\n### New\nbody\n",
        ),
        # Sub-sections and trailing blank lines belong to the section.
        (
            "# P\n## coding\nx\n### sub\ny\n\n## b\nz",
            "# P\n## coding\nx\n### sub\ny\n\n### New\nbody\n\n## b\nz",
        ),
        # Deeper target headings nest one level further.
        (
            "# P\n#### coding\nx",
            "# P\n#### coding\nx\n\n##### New\nbody\n",
        ),
    ],
)
def test_add_prompt_leaves_rest_of_document_intact(
    text: str, expected: str
) -> None:
    assert writer.add_prompt(text, "New", "body", "coding") == expected


def test_file_writer_updates_file(prompts_file: Path) -> None:
    writer.FileWriter(prompts_file).write("Fix", "Fix the bug", "coding")
    doc = parse_document(prompts_file.read_text(encoding="utf-8"))
    assert [p.content for p in select_pool(doc, "Fix")] == ["Fix the bug"]


def test_file_writer_creates_private_file(tmp_path: Path) -> None:
    path = tmp_path / "new.md"
    writer.FileWriter(path).write("Title", "content")

    assert path.read_text(encoding="utf-8") == "\n\n### Title\ncontent\n"
    if os.name == "posix":
        assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_file_writer_wraps_os_errors(tmp_path: Path) -> None:
    with pytest.raises(SourceError):
        writer.FileWriter(tmp_path).write("Title", "content")


def test_writer_for_selects_backend(tmp_path: Path) -> None:
    file_config = Config(filepath=str(tmp_path / "p.md"))
    assert isinstance(writer.writer_for(file_config), writer.FileWriter)
    assert isinstance(writer.writer_for(Config()), writer.SimplenoteWriter)


def test_simplenote_writer_imports_note() -> None:
    config = Config(sn_note="Prompts")
    calls: list[tuple[list[str], str | None]] = []

    def fake_run(
        args: list[str], input_text: str | None = None
    ) -> subprocess.CompletedProcess[str]:
        calls.append((args, input_text))
        return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

    with (
        patch.object(
            writer.SimplenoteSource, "read", return_value="# P\n## a\nx\n"
        ),
        patch.object(writer, "run_command", side_effect=fake_run),
    ):
        writer.SimplenoteWriter(config).write("New", "body", "a")

    args, payload = calls[0]
    assert args == ["sncli", "import", "-"]
    notes = json.loads(payload or "")
    assert notes[0]["key"] == "Prompts"
    assert notes[0]["content"] == "# P\n## a\nx\n\n### New\nbody\n"


def test_simplenote_writer_wraps_import_errors() -> None:
    error = subprocess.CalledProcessError(1, ["sncli"])
    with (
        patch.object(writer.SimplenoteSource, "read", return_value=""),
        patch.object(writer, "run_command", side_effect=error),
    ):
        with pytest.raises(SourceError, match="import note"):
            writer.SimplenoteWriter(Config()).write("New", "body")
