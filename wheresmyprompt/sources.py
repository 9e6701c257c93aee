"""Load the raw prompts document from a file or a Simplenote note."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from wheresmyprompt.config import Config
from wheresmyprompt.prompt import parse_document
from wheresmyprompt.prompt.types import SectionList

logger = logging.getLogger(__name__)


class SourceError(RuntimeError):
    """Raised when the prompts document cannot be read or written."""


class DocumentSource(Protocol):
    """Anything that can produce the raw Markdown text."""

    def read(self) -> str: ...


def run_command(
    args: list[str], input_text: str | None = None
) -> subprocess.CompletedProcess[str]:
    """Run an external command and capture its text output."""

    logger.debug(f"Running {' '.join(args[:2])}")
    return subprocess.run(
        args, input=input_text, check=True, capture_output=True, text=True
    )


def check_required_binaries(config: Config) -> None:
    """Ensure the external tools needed by ``config`` are installed.

    Args:
        config: Active configuration.

    Throws:
        SourceError: If ``sncli`` or ``op`` is needed but missing.
    """

    if config.uses_file:
        return
    if shutil.which("sncli") is None:
        raise SourceError("sncli binary not found")
    if config.sn_credential and shutil.which("op") is None:
        raise SourceError("1Password CLI (op) binary not found")


class FileSource:
    """Read prompts from a local Markdown file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read(self) -> str:
        """Return the file content.

        Throws:
            SourceError: If the file cannot be read.
        """

        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SourceError(
                f"failed to read file {self.path}: {exc}"
            ) from exc


class SimplenoteSource:
    """Read prompts from a Simplenote note through ``sncli``."""

    def __init__(self, config: Config) -> None:
        self.config = config

    def _op_field(self, field_name: str, reveal: bool = False) -> str:
        """Return one field of the configured 1Password item."""

        args = [
            "op",
            "item",
            "get",
            self.config.sn_credential,
            "--field",
            field_name,
        ]
        if reveal:
            args.append("--reveal")
        try:
            return run_command(args).stdout.strip()
        except (OSError, subprocess.CalledProcessError) as exc:
            raise SourceError(
                f"failed to fetch {field_name} from 1Password: {exc}"
            ) from exc

    def ensure_auth(self) -> None:
        """Make Simplenote credentials available to ``sncli``.

        Nothing happens when ``sncli`` can already list the note. Otherwise
        the credentials come from the configuration directly or, when a
        1Password item is configured, from ``op``.

        Throws:
            SourceError: If the configuration lacks credentials.
        """

        try:
            run_command(["sncli", "list", self.config.sn_note])
            return
        except (OSError, subprocess.CalledProcessError):
            logger.debug("sncli is not authenticated yet")

        conf = self.config
        if conf.sn_username and conf.sn_password and not conf.sn_credential:
            username, password = conf.sn_username, conf.sn_password
        else:
            if not conf.sn_credential:
                raise SourceError(
                    "SN_CREDENTIAL op item must be set for 1Password "
                    "integration"
                )
            if not conf.sn_username:
                raise SourceError(
                    "SN_USERNAME op field must be set for 1Password "
                    "integration"
                )
            if not conf.sn_password:
                raise SourceError(
                    "SN_PASSWORD op field must be set for 1Password "
                    "integration"
                )
            username = self._op_field(conf.sn_username)
            password = self._op_field(conf.sn_password, reveal=True)

        # sncli reads its credentials from the environment.
        os.environ["SN_USERNAME"] = username
        os.environ["SN_PASSWORD"] = password

    def read(self) -> str:
        """Return the note content.

        Throws:
            SourceError: If authentication or the download fails.
        """

        self.ensure_auth()
        try:
            return run_command(["sncli", "dump", self.config.sn_note]).stdout
        except (OSError, subprocess.CalledProcessError) as exc:
            raise SourceError(
                f"failed to fetch note '{self.config.sn_note}' from "
                f"Simplenote: {exc}"
            ) from exc


def source_for(config: Config) -> DocumentSource:
    """Return the file source when configured, Simplenote otherwise."""

    if config.uses_file:
        return FileSource(config.filepath)
    return SimplenoteSource(config)


def load_document(config: Config, verbose: bool = False) -> SectionList:
    """Read and parse the prompts document described by ``config``.

    Args:
        config: Active configuration.
        verbose: Log the parsed structure.

    Returns:
        Parsed sections.
    """

    text = source_for(config).read()
    return parse_document(text, verbose=verbose)
