"""graphshare CLI - Main commands."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import aiohttp
import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

app = typer.Typer(
    name="graphshare",
    help="Upload and share files on OneDrive and SharePoint",
    add_completion=False
)
console = Console()

TOKEN_ENV = "GRAPHSHARE_TOKEN"

# Local and network failures reported as a red line with exit code 1
REPORTED_ERRORS = (ValueError, OSError, aiohttp.ClientError, asyncio.TimeoutError)


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def require_token(token: Optional[str]) -> str:
    if not token:
        console.print(f"[red]No access token. Pass --token or set {TOKEN_ENV}.[/red]")
        raise typer.Exit(1)
    return token


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging for all commands."""
    from graphshare import setup_logging

    logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Local file to upload", exists=True, dir_okay=False),
    site: str = typer.Option(None, "--site", "-s", help="SharePoint site ID (personal OneDrive if omitted)"),
    name: str = typer.Option(None, "--name", "-n", help="Custom file name"),
    chat: str = typer.Option(None, "--chat", "-c", help="Chat ID whose members receive a per-user link"),
    per_user: bool = typer.Option(False, "--per-user", help="Scope the link to chat members"),
    anonymous: bool = typer.Option(False, "--anonymous", help="Anonymous link (personal OneDrive only)"),
    token: str = typer.Option(None, "--token", "-t", envvar=TOKEN_ENV, help="Graph access token"),
):
    """Upload a file and print its sharing link."""
    from graphshare import GraphShareClient, GraphConfig, GraphShareError, SharingScope
    from graphshare.core.upload import UploadProgress

    token = require_token(token)
    if anonymous and site:
        console.print("[red]--anonymous is only available for personal OneDrive uploads[/red]")
        raise typer.Exit(1)

    async def do_upload():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console
        ) as progress:
            task = progress.add_task(f"Uploading {file_path.name}", total=100)

            def on_progress(p: UploadProgress):
                progress.update(task, completed=p.percentage)

            async with GraphShareClient(
                token=token,
                config=GraphConfig.from_env(),
                progress_callback=on_progress
            ) as client:
                try:
                    result = await client.upload_file(
                        file_path,
                        site_id=site,
                        name=name,
                        chat_id=chat,
                        per_user_sharing=per_user,
                        scope=SharingScope.ANONYMOUS if anonymous else SharingScope.ORGANIZATION
                    )
                except (GraphShareError, *REPORTED_ERRORS) as e:
                    console.print(f"[red]Upload failed: {e}[/red]")
                    raise typer.Exit(1)

        table = Table(show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("Name", result.name)
        table.add_row("Item ID", result.item_id)
        table.add_row("Web URL", result.web_url)
        table.add_row("Share URL", result.share_url)
        console.print(table)

    run_async(do_upload())


@app.command()
def members(
    chat_id: str = typer.Argument(..., help="Teams chat ID"),
    token: str = typer.Option(None, "--token", "-t", envvar=TOKEN_ENV, help="Graph access token"),
):
    """List the resolvable members of a chat."""
    from graphshare import GraphShareClient, GraphConfig, GraphShareError

    token = require_token(token)

    async def list_members():
        async with GraphShareClient(token=token, config=GraphConfig.from_env()) as client:
            try:
                chat_members = await client.get_chat_members(chat_id)
            except (GraphShareError, *REPORTED_ERRORS) as e:
                console.print(f"[red]Member lookup failed: {e}[/red]")
                raise typer.Exit(1)

        if not chat_members:
            console.print("[yellow]No resolvable members[/yellow]")
            return

        table = Table()
        table.add_column("Object ID", style="dim")
        table.add_column("Name")
        for member in chat_members:
            table.add_row(member.aad_object_id, member.display_name or "-")
        console.print(table)

    run_async(list_members())


@app.command()
def props(
    site_id: str = typer.Argument(..., help="SharePoint site ID"),
    item_id: str = typer.Argument(..., help="Drive item ID"),
    token: str = typer.Option(None, "--token", "-t", envvar=TOKEN_ENV, help="Graph access token"),
):
    """Show the file card properties of a SharePoint item."""
    from graphshare import GraphShareClient, GraphConfig, GraphShareError

    token = require_token(token)

    async def show_props():
        async with GraphShareClient(token=token, config=GraphConfig.from_env()) as client:
            try:
                properties = await client.get_item_properties(site_id, item_id)
            except (GraphShareError, *REPORTED_ERRORS) as e:
                console.print(f"[red]Property lookup failed: {e}[/red]")
                raise typer.Exit(1)

        console.print(f"[bold]Name:[/bold] {properties.name}")
        console.print(f"[bold]eTag:[/bold] {properties.etag}")
        console.print(f"[bold]WebDAV URL:[/bold] {properties.webdav_url}")

    run_async(show_props())


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
