import logging
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from cms_file_client import create_file_client
from cms_file_client.exceptions import FileClientError
from cms_file_client.logging import configure
from cms_file_client.utils.cli_utils import get_rich_console, record_table


app = typer.Typer(help="CLI for cms-file-client.")
logger = logging.getLogger(__name__)
console = get_rich_console()


@app.callback()
def main(log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL.")):
    configure(log_level)


def _show(record, title: str):
    data = record.model_dump(by_alias=True)
    data["extension"] = record.extension
    data["resolution"] = record.resolution
    console.print(record_table(data, title=title))


@app.command()
def check():
    """Checks connectivity to the CMS API."""
    console.rule("[bold cyan]Connection Check[/bold cyan]")
    with create_file_client() as client:
        status = client.check_connection().get("api", "unknown error")
    if status == "ok":
        console.print("[bold green]✔[/bold green] API connection: OK")
    else:
        console.print(f"[bold red]✖[/bold red] API connection: FAILED ({escape(status)})")
        raise typer.Exit(code=1)


@app.command()
def show(file_id: int):
    """Prints a file record."""
    try:
        with create_file_client() as client:
            record = client.get_file(file_id)
            _show(record, title=f"File {file_id}")
    except FileClientError as e:
        console.print(f"[bold red]✖[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command()
def upload(
    source: str = typer.Argument(..., help="Local path, URL or base64 content."),
    folder: Optional[int] = typer.Option(None, help="Target folder id (default: root)."),
    name: Optional[str] = typer.Option(None, help="Display name."),
    filename: Optional[str] = typer.Option(None, help="Stored filename."),
    description: Optional[str] = typer.Option(None),
    tags: Optional[str] = typer.Option(None, help="Comma-separated tags."),
):
    """Uploads a local file, a remote link or base64 content."""
    attributes = {
        key: value
        for key, value in {"name": name, "filename": filename, "description": description, "tags": tags}.items()
        if value is not None
    }
    local = Path(source)
    try:
        with create_file_client() as client:
            if local.is_file():
                with local.open("rb") as handle:
                    record = client.upload(handle, attributes, folder)
            else:
                record = client.upload(source, attributes, folder)
            console.print(f"[bold green]✔[/bold green] Uploaded file {record.id}")
            _show(record, title=f"File {record.id}")
    except FileClientError as e:
        console.print(f"[bold red]✖[/bold red] Upload FAILED: {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command()
def delete(file_id: int):
    """Deletes a file on the backend."""
    try:
        with create_file_client() as client:
            client.delete_file(file_id)
        console.print(f"[bold green]✔[/bold green] Deleted file {file_id}")
    except FileClientError as e:
        console.print(f"[bold red]✖[/bold red] Delete FAILED: {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command()
def dimensions(file_id: int):
    """Resolves image width/height, persisting them when missing."""
    try:
        with create_file_client() as client:
            record = client.resolve_dimensions(file_id)
        console.print(f"File {file_id}: {record.width}x{record.height}")
    except FileClientError as e:
        console.print(f"[bold red]✖[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)
