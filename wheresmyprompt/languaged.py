"""Detect the primary programming language of a directory tree.

The detected name is used as the default section when searching, so a
prompts document organised by language ("## Python", "## Golang", ...)
yields prompts relevant to the current project.
"""

from __future__ import annotations

import logging
import os
import re
from collections import Counter
from pathlib import Path

logger = logging.getLogger(__name__)

EXTENSION_TO_LANGUAGE = {
    ".go": "Golang",
    ".py": "Python",
    ".js": "JavaScript",
    ".ts": "TypeScript",
    ".java": "Java",
    ".c": "C",
    ".cpp": "C++",
    ".cs": "C#",
    ".rb": "Ruby",
    ".php": "PHP",
    ".rs": "Rust",
    ".swift": "Swift",
    ".kt": "Kotlin",
    ".m": "Objective-C",
    ".scala": "Scala",
    ".sh": "Shell",
    ".lua": "Lua",
    ".hs": "Haskell",
    ".html": "HTML",
    ".css": "CSS",
}

# Longer interpreter names first so "python3" wins over "python".
SHEBANG_TO_LANGUAGE = {
    "python3": "Python",
    "python2": "Python",
    "python": "Python",
    "bash": "Shell",
    "ruby": "Ruby",
    "node": "JavaScript",
    "perl": "Perl",
    "php": "PHP",
    "lua": "Lua",
    "sh": "Shell",
}

SKIP_DIRS = {"vendor", "node_modules"}

# Bytes of the first line inspected for a shebang.
SHEBANG_READ_LIMIT = 256

_LINGUIST_RE = re.compile(r"linguist-language=(\S+)")


def parse_gitattributes(path: Path) -> dict[str, str]:
    """Return ``linguist-language`` overrides keyed by relative path.

    Args:
        path: Location of a ``.gitattributes`` file; may be missing.

    Returns:
        Mapping of path patterns to language names.
    """

    overrides: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return overrides

    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        pattern = parts[0].lstrip("/")
        for attr in parts[1:]:
            match = _LINGUIST_RE.fullmatch(attr)
            if match:
                overrides[pattern] = match.group(1)
    return overrides


def detect_language_by_shebang(path: Path) -> str | None:
    """Return the language named by the shebang line of ``path``."""

    try:
        with path.open(encoding="utf-8", errors="replace") as fh:
            first = fh.readline(SHEBANG_READ_LIMIT)
    except OSError:
        return None

    if not first.startswith("#!"):
        return None
    for key, language in SHEBANG_TO_LANGUAGE.items():
        if key in first:
            return language
    return None


def _count_lines(path: Path) -> int | None:
    try:
        with path.open("rb") as fh:
            return sum(1 for _ in fh)
    except OSError:
        return None


def detect_primary_language(repo_path: str | Path) -> str | None:
    """Return the language with the most lines of code under ``repo_path``.

    Hidden directories, ``vendor`` and ``node_modules`` are skipped.
    Unreadable files are ignored.

    Args:
        repo_path: Root of the tree to inspect.

    Returns:
        Language name, or ``None`` when no known language is found.
    """

    root = Path(repo_path)
    overrides = parse_gitattributes(root / ".gitattributes")
    line_counts: Counter[str] = Counter()

    for dirpath, dirnames, filenames in os.walk(root):
        # Prune in place so os.walk does not descend.
        dirnames[:] = sorted(
            d for d in dirnames if not d.startswith(".") and d not in SKIP_DIRS
        )
        for name in sorted(filenames):
            path = Path(dirpath) / name
            rel_path = path.relative_to(root).as_posix()

            language = overrides.get(rel_path)
            if language is None:
                language = EXTENSION_TO_LANGUAGE.get(path.suffix.lower())
            if language is None:
                language = detect_language_by_shebang(path)
            if language is None:
                continue

            count = _count_lines(path)
            if count:
                line_counts[language] += count

    if not line_counts:
        return None

    # Ties go to the alphabetically first language.
    language, count = min(
        line_counts.items(), key=lambda item: (-item[1], item[0])
    )
    logger.debug(f"Detected {language} ({count} lines) in {root}")
    return language
