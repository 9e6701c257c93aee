import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import attrs
import click
from dotenv import load_dotenv

from wheresmyprompt import languaged, sources
from wheresmyprompt.clipboard import ClipboardError, copy_to_clipboard
from wheresmyprompt.config import Config
from wheresmyprompt.interactive import pick as pick_prompt
from wheresmyprompt.prompt import (
    find_all_matches,
    find_best_match,
    list_section,
    select_pool,
)
from wheresmyprompt.prompt.types import PromptList, SectionList
from wheresmyprompt.serialize import FORMATS, dump_document
from wheresmyprompt.writer import generate_title, writer_for

try:
    __version__ = version("wheresmyprompt")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"

logger = logging.getLogger(__name__)


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="WHERESMYPROMPT_LOG_FILE",
)
@click.option(
    "--load",
    "-l",
    "load_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Load prompts from a local Markdown file instead of Simplenote.",
)
@click.option(
    "--note",
    default=None,
    help="Name of the Simplenote note holding the prompts.",
)
@click.version_option(__version__, prog_name="wheresmyprompt")
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    trace: bool,
    log_file: Optional[str] = None,
    load_path: Optional[str] = None,
    note: Optional[str] = None,
) -> None:
    """Fuzzy search and manage LLM prompts kept in a Markdown note.

    Args:
        ctx: Click context object.
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
        load_path: Local prompts file overriding the configured source.
        note: Simplenote note name overriding the configured one.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")
    load_dotenv()

    # Command line values take precedence over the environment.
    config = Config.from_env()
    if load_path:
        config = attrs.evolve(config, filepath=load_path)
    if note:
        config = attrs.evolve(config, sn_note=note)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = debug or trace


def _load_document(ctx: click.Context) -> SectionList:
    """Read and parse the configured prompts document.

    Args:
        ctx: Click context holding the configuration.

    Returns:
        Parsed sections.

    Throws:
        click.ClickException: If the document cannot be loaded.
    """

    config: Config = ctx.obj["config"]
    try:
        sources.check_required_binaries(config)
        return sources.load_document(config, verbose=ctx.obj["verbose"])
    except sources.SourceError as exc:
        raise click.ClickException(str(exc)) from exc


def _resolve_section(section: Optional[str], all_sections: bool) -> str:
    """Return the section selector to search.

    Without an explicit section the primary language of the working
    directory is used, unless every section was requested.
    """

    if section is not None:
        return section
    if all_sections:
        return ""

    detected = languaged.detect_primary_language(Path.cwd())
    if detected:
        logger.info(f"Using section: {detected}")
        return detected
    return ""


def _pool(
    ctx: click.Context, section: Optional[str], all_sections: bool
) -> PromptList:
    document = _load_document(ctx)
    return select_pool(document, _resolve_section(section, all_sections))


section_option = click.option(
    "--section",
    "-s",
    default=None,
    help="Search within a section; use commas for a nested path.",
)
all_sections_option = click.option(
    "--all-sections",
    "-a",
    is_flag=True,
    help="Search every section instead of the detected language.",
)


@cli.command()
@click.argument("query", nargs=-1)
@section_option
@all_sections_option
@click.pass_context
def search(
    ctx: click.Context,
    query: tuple[str, ...],
    section: Optional[str] = None,
    all_sections: bool = False,
) -> None:
    """Print every prompt matching QUERY, best match first.

    Without a query every prompt of the section is printed.
    """

    results = find_all_matches(
        _pool(ctx, section, all_sections), " ".join(query)
    )
    if not results:
        click.echo("No matches found")
        ctx.exit(1)

    for content in results:
        click.echo(f"\n{content}\n")


@cli.command()
@click.argument("query", nargs=-1)
@section_option
@all_sections_option
@click.option("--clip", is_flag=True, help="Copy the match to the clipboard.")
@click.pass_context
def best(
    ctx: click.Context,
    query: tuple[str, ...],
    section: Optional[str] = None,
    all_sections: bool = False,
    clip: bool = False,
) -> None:
    """Print or copy the single best match for QUERY."""

    result = find_best_match(
        _pool(ctx, section, all_sections), " ".join(query)
    )
    if result == "":
        click.echo("No match found")
        ctx.exit(1)

    if clip:
        try:
            copy_to_clipboard(result)
        except ClipboardError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo("Copied best match to clipboard")
        return

    click.echo(f"\n{result}\n")


@cli.command()
@click.argument("section")
@click.pass_context
def show(ctx: click.Context, section: str) -> None:
    """Print the whole body of SECTION."""

    results = list_section(_load_document(ctx), section)
    if not results:
        click.echo(f"No section named {section}")
        ctx.exit(1)

    for block in results:
        click.echo(f"\n{block}\n")


@cli.command()
@click.argument("content", nargs=-1)
@click.option("--title", default=None, help="Heading for the new prompt.")
@click.option(
    "--section", "-s", default="", help="Section to file the prompt under."
)
@click.pass_context
def add(
    ctx: click.Context,
    content: tuple[str, ...],
    title: Optional[str] = None,
    section: str = "",
) -> None:
    """Add a new prompt to the prompts document.

    Without CONTENT the title, the content and the section are read
    interactively; the content ends at end of input.
    """

    text = " ".join(content)
    if not text:
        title = title or click.prompt("Enter prompt title")
        click.echo("Enter prompt content (press Ctrl+D when done):")
        text = click.get_text_stream("stdin").read().strip("\n")
        if not section:
            section = click.prompt(
                "Enter section (optional)", default="", show_default=False
            ).strip()

    title = title or generate_title(text)
    config: Config = ctx.obj["config"]
    try:
        sources.check_required_binaries(config)
        writer_for(config).write(title, text, section)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    except sources.SourceError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Added prompt '{title}'")
    if section:
        click.echo(f"Section: {section}")


@cli.command()
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Write output to FILE instead of the console.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(list(FORMATS)),
    default="json",
    help="Output format.",
)
@click.pass_context
def dump(
    ctx: click.Context,
    output_path: Optional[str] = None,
    output_format: str = "json",
) -> None:
    """Dump the parsed sections of the prompts document."""

    content = dump_document(_load_document(ctx), output_format)
    if output_path:
        Path(output_path).write_text(content, encoding="utf-8")
    else:
        click.echo(content)


@cli.command()
@section_option
@click.option(
    "--print",
    "print_only",
    is_flag=True,
    help="Print the selection instead of copying it.",
)
@click.pass_context
def pick(
    ctx: click.Context,
    section: Optional[str] = None,
    print_only: bool = False,
) -> None:
    """Interactively narrow down the prompts and copy the selected one."""

    # Interactive selection starts from every section unless told otherwise.
    chosen = pick_prompt(_pool(ctx, section, all_sections=True))
    if chosen is None:
        return

    if print_only:
        click.echo(chosen.content)
        return

    try:
        copy_to_clipboard(chosen.content)
    except ClipboardError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Copied prompt from [{chosen.section}]")
