"""Serialize parsed documents, using orjson when it is installed."""

from __future__ import annotations

try:
    import orjson  # type: ignore[import-not-found]
except ImportError:  # pragma: no cover - optional dependency
    orjson = None  # type: ignore[assignment]

import json
from typing import Any

import yaml  # type: ignore[import-untyped]
from attrs import asdict

from wheresmyprompt.prompt import render_sections
from wheresmyprompt.prompt.types import SectionList

# Output formats understood by ``dump_document``.
FORMATS = ("json", "yaml", "markdown")


def json_dumps(data: object) -> str:
    """Serialize data to a JSON string.

    Args:
        data: Data structure to serialize.

    Returns:
        JSON representation of ``data``.
    """

    if orjson is not None:
        return orjson.dumps(data).decode()
    return json.dumps(data, ensure_ascii=False)


def document_to_data(document: SectionList) -> list[dict[str, Any]]:
    """Convert sections into plain dictionaries."""
    return [asdict(section) for section in document]


def dump_document(document: SectionList, output_format: str) -> str:
    """Render ``document`` in one of the supported output formats.

    Args:
        document: Parsed sections.
        output_format: ``json``, ``yaml`` or ``markdown``.

    Returns:
        The serialized document.

    Throws:
        ValueError: If the format is unknown.
    """

    if output_format == "json":
        return json_dumps(document_to_data(document))
    if output_format == "yaml":
        return yaml.safe_dump(
            document_to_data(document), allow_unicode=True, sort_keys=False
        )
    if output_format == "markdown":
        return render_sections(document)
    raise ValueError(f"Unsupported output format {output_format}")
