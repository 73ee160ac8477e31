"""Command-line interface for xgraph."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from xgraph import GraphClient, ClientConfig, Page, save_json, __version__
from xgraph.config import LogFormat
from xgraph.core.exporter import combine_pages, merge_pages
from xgraph.exceptions import XGraphError

app = typer.Typer(
    name="xgraph",
    help="X/Twitter social-graph client",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"xgraph version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """xgraph - X/Twitter social-graph client."""
    pass


def _run(coro):
    """Run a coroutine, turning xgraph errors into a red message and exit code 1."""
    try:
        return asyncio.run(coro)
    except XGraphError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1)


def _relationships(
    user_id: str,
    count: int,
    cursor: Optional[str],
    pages: int,
    output: Optional[Path],
    quiet: bool,
    label: str,
):
    config = ClientConfig(log_format=LogFormat.JSON if quiet else LogFormat.CONSOLE)

    async def run():
        async with GraphClient(config) as client:
            return [
                page
                async for page in client.iter_following(
                    user_id, count, max_pages=pages, cursor=cursor
                )
            ]

    collected = _run(run())

    if not quiet:
        for page in collected:
            _print_page(page)

    if output:
        save_json(combine_pages(collected), output)
        console.print(f"[dim]Saved to {output}[/dim]")

    summary = merge_pages(collected)
    console.print(
        f"\n[bold]{summary['profiles_count']} {label} across {summary['pages_count']} page(s)[/bold]"
    )
    if summary["next_cursor"]:
        console.print(f"[dim]next cursor: {summary['next_cursor']}[/dim]")


@app.command()
def following(
    user_id: str = typer.Argument(..., help="Numeric account id"),
    count: int = typer.Option(50, "--count", "-n", help="Page size (max 50)"),
    cursor: Optional[str] = typer.Option(None, "--cursor", "-c", help="Resume from cursor"),
    pages: int = typer.Option(1, "--pages", "-p", help="Number of pages to fetch"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write profiles to JSON file"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress table output"),
):
    """List accounts a user follows."""
    _relationships(user_id, count, cursor, pages, output, quiet, "following")


@app.command()
def followers(
    user_id: str = typer.Argument(..., help="Numeric account id"),
    count: int = typer.Option(50, "--count", "-n", help="Page size (max 50)"),
    cursor: Optional[str] = typer.Option(None, "--cursor", "-c", help="Resume from cursor"),
    pages: int = typer.Option(1, "--pages", "-p", help="Number of pages to fetch"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write profiles to JSON file"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress table output"),
):
    """List a user's followers."""
    _relationships(user_id, count, cursor, pages, output, quiet, "followers")


@app.command()
def lookup(handle: str = typer.Argument(..., help="X/Twitter handle")):
    """Resolve a handle to its account id."""

    async def run():
        async with GraphClient(ClientConfig()) as client:
            return await client.get_user_id(handle)

    user_id = _run(run())
    console.print(f"@{handle.lstrip('@')} → [bold]{user_id}[/bold]")


@app.command()
def follow(handle: str = typer.Argument(..., help="X/Twitter handle to follow")):
    """Follow an account."""

    async def run():
        async with GraphClient(ClientConfig()) as client:
            await client.follow(handle)

    _run(run())
    console.print(f"[green]✓[/green] Followed @{handle.lstrip('@')}")


@app.command()
def unfollow(handle: str = typer.Argument(..., help="X/Twitter handle to unfollow")):
    """Unfollow an account."""

    async def run():
        async with GraphClient(ClientConfig()) as client:
            await client.unfollow(handle)

    _run(run())
    console.print(f"[green]✓[/green] Unfollowed @{handle.lstrip('@')}")


def _print_page(page: Page):
    """Print one page of profiles as a table."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Handle")
    table.add_column("Name")
    table.add_column("Followers", justify="right")
    table.add_column("Following", justify="right")
    table.add_column("Flags")

    for p in page.profiles:
        flags = " ".join(
            flag for flag, on in (
                ("verified", p.verified),
                ("blue", p.is_blue_verified),
                ("protected", p.protected),
            ) if on
        )
        table.add_row(
            p.id,
            f"@{p.username}",
            p.name or "-",
            f"{p.followers_count:,}",
            f"{p.following_count:,}",
            flags or "-",
        )

    console.print(table)


if __name__ == "__main__":
    app()
