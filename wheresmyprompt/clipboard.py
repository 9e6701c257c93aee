"""Place text on the system clipboard."""

from __future__ import annotations

import pyperclip  # type: ignore[import-untyped]


class ClipboardError(RuntimeError):
    """Raised when the clipboard cannot be written."""


def copy_to_clipboard(text: str) -> None:
    """Copy ``text`` to the system clipboard.

    Args:
        text: Content to copy.

    Throws:
        ClipboardError: If no clipboard mechanism is available or copying
            fails.
    """

    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        raise ClipboardError(f"failed to copy to clipboard: {exc}") from exc
