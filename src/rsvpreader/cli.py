"""Command-line interface for rsvpreader.

Built with Typer for commands and Rich for beautiful output.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import get_config
from .host import (
    FileSource,
    LogseqClient,
    LogseqError,
    LogseqSource,
    page_words,
    render_template,
    selection_words,
)
from .pacing import (
    PacingConfig,
    compute_delay_ms,
    estimate_reading_ms,
    sentence_start_indices,
)
from .reading import NoReadableTextError, SessionState, Snapshot
from .utils import compute_base_ms

# Create the main app
app = typer.Typer(
    name="rsvpreader",
    help="Speed-read Logseq pages and markdown files one word at a time.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def format_duration(ms: int) -> str:
    """Format milliseconds as e.g. '2m 05s'."""
    seconds = round(ms / 1000)
    minutes, seconds = divmod(seconds, 60)
    if minutes:
        return f"{minutes}m {seconds:02d}s"
    return f"{seconds}s"


def setup_logging(verbose: bool = False) -> None:
    """Send log records through Rich at the configured level."""
    level = logging.DEBUG if verbose else get_config().log_level
    if not isinstance(logging.getLevelName(level), int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def build_pacing(
    wpm: Optional[int] = None,
    no_pauses: bool = False,
    no_ramp: bool = False,
) -> PacingConfig:
    """Pacing from the environment with command-line overrides applied."""
    pacing = get_config().pacing()
    updates = {}
    if wpm is not None:
        updates["wpm"] = wpm
    if no_pauses:
        updates["pause_on_punctuation"] = False
    if no_ramp:
        updates["ramp_enabled"] = False
    if updates:
        # Validate again so the WPM override is clamped
        pacing = PacingConfig(**{**pacing.model_dump(), **updates})
    return pacing


def load_words(source, page: Optional[str] = None, selection: bool = False) -> tuple[list[str], str]:
    """Read words from a document source, exiting on failure."""
    try:
        if selection:
            return selection_words(source)
        return page_words(source, page)
    except NoReadableTextError as e:
        print_warning(str(e))
        raise typer.Exit(1)
    except LogseqError as e:
        print_error(str(e))
        raise typer.Exit(1)


def open_file(path: Path) -> FileSource:
    """Open a markdown file or graph, exiting if it is missing."""
    try:
        return FileSource(path)
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(1)


def play(words: list[str], status: str, pacing: PacingConfig) -> None:
    """Run an interactive session and report how far it got."""
    from .host.terminal import run_session

    config = get_config()
    print_info(
        f"{len(words)} words at {pacing.wpm} WPM, "
        f"about {format_duration(estimate_reading_ms(words, pacing))}"
    )

    try:
        last = run_session(
            words,
            pacing,
            bindings=config.key_bindings(),
            console=console,
            status=status,
            show_progress=config.show_progress,
            color_scheme=config.color_scheme,
        )
    except KeyboardInterrupt:
        print_warning("Interrupted.")
        raise typer.Exit(130)

    read = last.index + 1 if last else 0
    if read >= len(words):
        print_success(f"Finished {len(words)} words.")
    else:
        print_info(f"Stopped at word {read} of {len(words)}.")


# ============================================================================
# Global Options
# ============================================================================


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Speed-read Logseq pages and markdown files one word at a time."""
    setup_logging(verbose)


# ============================================================================
# Reading Commands
# ============================================================================


@app.command()
def read(
    path: Path = typer.Argument(..., help="Markdown file or Logseq graph directory"),
    page: Optional[str] = typer.Option(None, "--page", "-p", help="Page to read from a graph"),
    wpm: Optional[int] = typer.Option(None, "--wpm", "-w", help="Words per minute"),
    no_pauses: bool = typer.Option(False, "--no-pauses", help="Disable punctuation pauses"),
    no_ramp: bool = typer.Option(False, "--no-ramp", help="Disable speed ramping"),
) -> None:
    """Read a markdown file (or a page of a Logseq graph) word by word.

    Controls: Space start/pause, Left/Right previous/next sentence,
    Up/Down change speed, Escape stop.

    Examples:
      rsvpreader read notes.md --wpm 450
      rsvpreader read ~/logseq --page "Reading List"
    """
    source = open_file(path)
    words, status = load_words(source, page)
    play(words, status, build_pacing(wpm, no_pauses, no_ramp))


@app.command()
def logseq(
    page: Optional[str] = typer.Option(None, "--page", "-p", help="Page name (default: current page)"),
    selection: bool = typer.Option(False, "--selection", "-s", help="Read only the selected blocks"),
    url: Optional[str] = typer.Option(None, "--url", help="Logseq API server address"),
    token: Optional[str] = typer.Option(None, "--token", help="Logseq API token"),
    wpm: Optional[int] = typer.Option(None, "--wpm", "-w", help="Words per minute"),
    no_pauses: bool = typer.Option(False, "--no-pauses", help="Disable punctuation pauses"),
    no_ramp: bool = typer.Option(False, "--no-ramp", help="Disable speed ramping"),
) -> None:
    """Read from a running Logseq app through its HTTP API.

    Without options, reads the selected blocks or else the current page.
    """
    config = get_config()
    token = token or config.logseq_api_token
    if not token:
        print_error("No Logseq API token. Set LOGSEQ_API_TOKEN or pass --token.")
        raise typer.Exit(1)

    source = LogseqSource(LogseqClient(url or config.logseq_api_url, token))
    words, status = load_words(source, page, selection)
    play(words, status, build_pacing(wpm, no_pauses, no_ramp))


# ============================================================================
# Inspection Commands
# ============================================================================


@app.command()
def words(
    path: Path = typer.Argument(..., help="Markdown file or Logseq graph directory"),
    page: Optional[str] = typer.Option(None, "--page", "-p", help="Page to read from a graph"),
    wpm: Optional[int] = typer.Option(None, "--wpm", "-w", help="Words per minute"),
) -> None:
    """Show the cleaned word stream and reading estimate for a document."""
    source = open_file(path)
    tokens, _ = load_words(source, page)
    pacing = build_pacing(wpm)

    console.print(" ".join(tokens))
    console.print()

    table = Table(show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Words", str(len(tokens)))
    table.add_row("Sentences", str(len(sentence_start_indices(tokens))))
    table.add_row("Speed", f"{pacing.wpm} WPM")
    table.add_row("Estimated time", format_duration(estimate_reading_ms(tokens, pacing)))
    console.print(table)


@app.command()
def timing(
    path: Path = typer.Argument(..., help="Markdown file or Logseq graph directory"),
    page: Optional[str] = typer.Option(None, "--page", "-p", help="Page to read from a graph"),
    wpm: Optional[int] = typer.Option(None, "--wpm", "-w", help="Words per minute"),
    no_pauses: bool = typer.Option(False, "--no-pauses", help="Disable punctuation pauses"),
    no_ramp: bool = typer.Option(False, "--no-ramp", help="Disable speed ramping"),
    limit: int = typer.Option(50, "--limit", "-l", help="Max words to show"),
) -> None:
    """Show how long each word would stay on screen."""
    source = open_file(path)
    tokens, _ = load_words(source, page)
    pacing = build_pacing(wpm, no_pauses, no_ramp)
    base_ms = compute_base_ms(pacing.wpm)
    starts = set(sentence_start_indices(tokens))

    table = Table(title=f"Timing at {pacing.wpm} WPM", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Word", style="cyan")
    table.add_column("Delay (ms)", justify="right")
    table.add_column("Sentence start", justify="center")

    for i, word in enumerate(tokens[:limit]):
        delay = compute_delay_ms(word, base_ms, pacing, i, len(tokens))
        table.add_row(str(i), word, str(delay), "•" if i in starts else "")

    console.print(table)
    if len(tokens) > limit:
        print_info(f"... {len(tokens) - limit} more words")


@app.command()
def preview(
    path: Path = typer.Argument(..., help="Markdown file or Logseq graph directory"),
    index: int = typer.Option(0, "--index", "-i", help="Word to show"),
    page: Optional[str] = typer.Option(None, "--page", "-p", help="Page to read from a graph"),
    html: bool = typer.Option(False, "--html", help="Print the HTML overlay instead"),
) -> None:
    """Render a single reader frame without starting a session."""
    from .host.terminal import build_view

    config = get_config()
    source = open_file(path)
    tokens, status = load_words(source, page)
    index = max(0, min(index, len(tokens) - 1))

    snapshot = Snapshot(
        visible=True,
        word=tokens[index],
        wpm=config.wpm,
        index=index,
        total=len(tokens),
        paused=True,
        status=status,
        state=SessionState.PAUSED,
    )

    if html:
        typer.echo(render_template(snapshot, config.show_progress, config.color_scheme))
    else:
        console.print(build_view(snapshot, config.show_progress, config.color_scheme))


# ============================================================================
# Configuration Commands
# ============================================================================


@app.command("config")
def show_config() -> None:
    """Show the active configuration and any problems with it."""
    config = get_config()

    table = Table(title="Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for name, value in vars(config).items():
        if name == "logseq_api_token":
            value = "(set)" if value else "(not set)"
        table.add_row(name, str(value))
    console.print(table)

    errors = config.validate()
    if errors:
        for error in errors:
            print_warning(error)
        raise typer.Exit(1)


# ============================================================================
# Version Command
# ============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"rsvpreader version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
