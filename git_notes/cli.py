"""Command-line interface for Git Notes Reader."""

import asyncio
import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from .config import Config
from .errors import GitNotesError
from .notes import err_console, run_notes

logger = logging.getLogger(__name__)
console = Console(soft_wrap=True)

app = typer.Typer(
    name="git-notes",
    help="Print the Git notes attached to commits of a GitHub repository."
)


def _run_async(func, *args, **kwargs):
    """Helper to run async functions from synchronous Typer commands."""
    return asyncio.run(func(*args, **kwargs))


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        force=True,
    )
    # httpx logs every request at INFO; ours already cover it
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _load_config(
    owner: Optional[str] = None,
    repo: Optional[str] = None,
    ref: Optional[str] = None,
    api_url: Optional[str] = None,
) -> Config:
    return Config.from_env().with_overrides(
        owner=owner, repo=repo, notes_ref=ref, api_url=api_url
    )


def _fail(error: GitNotesError):
    logger.debug("Run failed", exc_info=True)
    err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(1)


@app.command()
def show(
    owner: Optional[str] = typer.Option(None, "--owner", "-o", help="Repository owner"),
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Repository name"),
    ref: Optional[str] = typer.Option(None, "--ref", help="Notes ref, e.g. notes/commits"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="GitHub API base URL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request"),
):
    """
    Fetch the notes ref and print every note it holds.
    
    Credentials come from GITHUB_TOKEN; without it requests are anonymous.
    """
    _setup_logging(verbose)
    
    try:
        config = _load_config(owner, repo, ref, api_url)
        _run_async(run_notes, config)
    except GitNotesError as e:
        _fail(e)


@app.command()
def status(
    owner: Optional[str] = typer.Option(None, "--owner", "-o", help="Repository owner"),
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Repository name"),
    ref: Optional[str] = typer.Option(None, "--ref", help="Notes ref, e.g. notes/commits"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="GitHub API base URL"),
):
    """Show the configuration a run would use."""
    try:
        config = _load_config(owner, repo, ref, api_url)
    except GitNotesError as e:
        _fail(e)

    console.print(Panel("[bold]Git Notes Reader - Status[/bold]", border_style="blue"))

    console.print(f"\n[bold]Configuration:[/bold]")
    console.print(f"  Repository: {escape(config.owner)}/{escape(config.repo)}")
    console.print(f"  Notes ref: {escape(config.notes_ref)}")
    console.print(f"  API: {escape(config.api_url)}")
    timeout = f"{config.request_timeout:g}s" if config.request_timeout else "none"
    console.print(f"  Timeout: {timeout}")

    if config.authenticated:
        console.print(f"  [green]✓[/green] Token: GITHUB_TOKEN is set")
    else:
        console.print(f"  [yellow]![/yellow] Token: not set, requests are anonymous")


def main():
    app()


if __name__ == "__main__":
    main()
