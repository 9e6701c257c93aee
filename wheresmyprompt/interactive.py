"""Line-based interactive prompt picker."""

from __future__ import annotations

import click

from wheresmyprompt.prompt import Prompt, rank
from wheresmyprompt.prompt.types import PromptList

# Number of ranked results shown per query.
MAX_DISPLAY = 5
PREVIEW_CHARS = 100


def filter_pool(pool: PromptList, query: str) -> PromptList:
    """Return the prompts of ``pool`` matching ``query``, best first."""

    if query == "":
        return list(pool)
    return [pool[match.index] for match in rank(pool, query)]


def _preview(content: str) -> str:
    if len(content) > PREVIEW_CHARS:
        return content[:PREVIEW_CHARS] + "..."
    return content


def pick(pool: PromptList) -> Prompt | None:
    """Let the user narrow ``pool`` with queries and choose one prompt.

    Every round lists the best matches with their section and asks for a
    number. Choosing nothing asks for a new query; an empty query gives
    up. The first round shows the whole pool.

    Args:
        pool: Prompts to choose from.

    Returns:
        The chosen prompt, or ``None`` when the user gives up.
    """

    query = ""
    while True:
        results = filter_pool(pool, query)
        if not results:
            click.echo("No prompts found.")
        else:
            click.echo(f"Found {len(results)} prompt(s):")
            for number, prompt in enumerate(results[:MAX_DISPLAY], start=1):
                click.echo(f"  {number}) [{prompt.section}]")
                click.echo(f"     {_preview(prompt.content)}")
            if len(results) > MAX_DISPLAY:
                click.echo(f"  ... and {len(results) - MAX_DISPLAY} more")

            shown = min(len(results), MAX_DISPLAY)
            choice = click.prompt(
                "Select a prompt (empty to search again)",
                type=click.IntRange(0, shown),
                default=0,
                show_default=False,
            )
            if choice:
                return results[choice - 1]

        query = click.prompt(
            "Search (empty to quit)", default="", show_default=False
        ).strip()
        if query == "":
            return None
