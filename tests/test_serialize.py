"""Tests for document serialization helpers."""

from __future__ import annotations

import json

import pytest
import yaml  # type: ignore[import-untyped]
from pytest import MonkeyPatch

from wheresmyprompt import serialize
from wheresmyprompt.prompt import Section


def test_json_dumps_without_orjson(monkeypatch: MonkeyPatch) -> None:
    """Serialize using standard json when orjson is absent."""

    monkeypatch.setattr(serialize, "orjson", None)
    data = {"a": "ü"}
    assert serialize.json_dumps(data) == json.dumps(data, ensure_ascii=False)


def test_json_dumps_with_orjson(monkeypatch: MonkeyPatch) -> None:
    """Serialize using orjson when available."""

    class Fake:
        def dumps(
            self, obj: object
        ) -> bytes:  # pragma: no cover - simple stub
            return b"[]"

    monkeypatch.setattr(serialize, "orjson", Fake())
    assert serialize.json_dumps({}) == "[]"


def test_dump_document_formats() -> None:
    """Each output format describes the same sections."""

    doc = [Section(headings=["T", "A"], lines=["x", ""])]
    expected = [{"headings": ["T", "A"], "lines": ["x", ""]}]

    assert json.loads(serialize.dump_document(doc, "json")) == expected
    assert yaml.safe_load(serialize.dump_document(doc, "yaml")) == expected
    assert serialize.dump_document(doc, "markdown") == "# T\n## A\nx\n\n"


def test_dump_document_unknown_format() -> None:
    with pytest.raises(ValueError):
        serialize.dump_document([], "xml")
