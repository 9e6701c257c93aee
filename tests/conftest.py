"""Shared fixtures for the prompt tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from wheresmyprompt.prompt import parse_document
from wheresmyprompt.prompt.types import SectionList

SAMPLE_MARKDOWN = """# Test Prompts

## documentation

Document each function and package with comments and an overview / purpose for each using the standard methodology for the language (godoc, Python docstring, etc.)

Write extensive usage documentation in Markdown including realistic examples.

Generate a README.md file a repository containing the following code. It should contain an introductory description, usage instructions, installation instructions, and a summary of its major functionality.

Generate a DEVELOPMENT.md file for this repository. It should contain instructions on how to develop the code, tools and technologies used in the code, etc.

Generate a diagram using PlantUML and outputting a SVG graphic file which describes the overview of the application and how to use it. Embed this SVG graphic in the README.md as well under the introductory description section. The PlantUML code used to generate the SVG graphic should also be outputted such that it can live alongside the SVG graphic file in the repository under the directory docs/.

## coding

Create a function that handles authentication

Write unit tests for all functions

Implement error handling throughout the application
"""  # noqa: E501

NESTED_MARKDOWN = """# Prompts
## Golang
### testing
Write table driven tests
### errors
Wrap errors with context
## Python
### testing
Use pytest fixtures
"""


@pytest.fixture
def sample_document() -> SectionList:
    """Return the parsed sample prompts document."""
    return parse_document(SAMPLE_MARKDOWN)


@pytest.fixture
def nested_document() -> SectionList:
    """Return a document with nested language sections."""
    return parse_document(NESTED_MARKDOWN)


@pytest.fixture
def prompts_file(tmp_path: Path) -> Path:
    """Write the sample document to a temporary file."""

    path = tmp_path / "prompts.md"
    path.write_text(SAMPLE_MARKDOWN, encoding="utf-8")
    return path


@pytest.fixture
def sample_markdown() -> str:
    """Return the raw sample prompts document."""
    return SAMPLE_MARKDOWN


@pytest.fixture
def nested_markdown() -> str:
    """Return the raw nested prompts document."""
    return NESTED_MARKDOWN
