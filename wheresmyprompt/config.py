"""Runtime configuration read from environment variables."""

from __future__ import annotations

import os
from typing import Mapping

from attrs import define

DEFAULT_NOTE = "LLM Prompts"


@define(slots=True, frozen=True)
class Config:
    """Where prompts are read from and how to authenticate.

    Attributes:
        sn_note: Name of the Simplenote note holding the prompts.
        sn_credential: 1Password item holding the Simplenote credentials.
        sn_username: Simplenote username, or the 1Password field name for
            it when ``sn_credential`` is set.
        sn_password: Simplenote password, or the 1Password field name for
            it when ``sn_credential`` is set.
        filepath: Local Markdown file; takes precedence over Simplenote.
    """

    sn_note: str = DEFAULT_NOTE
    sn_credential: str = ""
    sn_username: str = ""
    sn_password: str = ""
    filepath: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build a configuration from ``environ`` (``os.environ`` default).

        Call ``dotenv.load_dotenv`` first to pick up a ``.env`` file.
        """

        env = os.environ if environ is None else environ
        return cls(
            sn_note=env.get("SN_NOTE") or DEFAULT_NOTE,
            sn_credential=env.get("SN_CREDENTIAL", ""),
            sn_username=env.get("SN_USERNAME", ""),
            sn_password=env.get("SN_PASSWORD", ""),
            filepath=env.get("FILEPATH", ""),
        )

    @property
    def uses_file(self) -> bool:
        """Return whether prompts come from a local file."""
        return bool(self.filepath)
