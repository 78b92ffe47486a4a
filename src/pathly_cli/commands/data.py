"""Data management commands (import, export)."""

import gzip
import json
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from pathly_cli.services.app_services import open_services
from pathly_cli.services.data_service import InvalidImportError, goals_to_csv
from pathly_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pathly_cli.utils.typer_helpers import SuggestingGroup
from pathly_cli.utils.ui.console import get_console
from pathly_cli.utils.ui.formatters import format_info, format_success, format_warning

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Data management commands")
console = get_console()


@app.command("export")
@command_wrapper
async def export_data(
    output: Annotated[
        str | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file path (default: pathly-export-{timestamp}.json)",
        ),
    ] = None,
    compress: Annotated[
        bool, typer.Option("--compress", "-z", help="Compress output with gzip")
    ] = False,
    csv_format: Annotated[
        bool, typer.Option("--csv", help="Export goals as CSV instead of a JSON backup")
    ] = False,
) -> None:
    """
    Export all goals, rewards and points.

    Examples:
        pathly data export
        pathly data export --output backup.json
        pathly data export --csv
    """
    async with open_services() as services:
        if csv_format:
            content = goals_to_csv(services.goals.goals)
        else:
            content = json.dumps(
                services.data.export_data(services.clock()), indent=2, ensure_ascii=False
            )
        goal_count = len(services.goals.goals)
        reward_count = len(services.rewards.rewards)
        points = services.ledger.total

    if output is None:
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        extension = ".csv" if csv_format else ".json"
        filename = f"pathly-export-{timestamp}{extension}" + (".gz" if compress else "")
    else:
        filename = output

    output_path = Path(filename)
    if compress:
        output_path.write_bytes(gzip.compress(content.encode("utf-8")))
    else:
        output_path.write_text(content, encoding="utf-8")

    table = Table(title="Export Summary", show_header=True)
    table.add_column("Type", style="cyan")
    table.add_column("Count", justify="right", style="green")
    table.add_row("Goals", str(goal_count))
    if not csv_format:
        table.add_row("Rewards", str(reward_count))
        table.add_row("Lifetime points", str(points))
    console.print(table)

    format_success(f"✓ Data exported to: {output_path.absolute()}")


def read_backup(path: Path) -> object:
    """Read a JSON backup, transparently decompressing ``.gz`` files."""
    if not path.exists():
        raise AppError(f"File not found: {path}", ERROR_INVALID_ARGS)
    raw = path.read_bytes()
    if raw[:2] == b"\x1f\x8b":
        raw = gzip.decompress(raw)
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise AppError(f"Failed to parse JSON file: {e}", ERROR_INVALID_ARGS) from e


@app.command("import")
@command_wrapper
async def import_data(
    file: Annotated[Path, typer.Argument(help="JSON backup to import")],
    replace: Annotated[
        bool,
        typer.Option("--replace", help="Discard current goals and rewards first"),
    ] = False,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation prompt")] = False,
) -> None:
    """
    Import a backup created by 'export'.

    Records are merged into your data (same IDs are overwritten) unless
    --replace is given. Lifetime points are never lowered by an import.
    """
    payload = read_backup(file)
    if replace and not yes and not typer.confirm("Replace all goals and rewards?"):
        format_info("Cancelled")
        return

    async with open_services() as services:
        try:
            result = await services.data.import_data(payload, replace=replace)
        except InvalidImportError as e:
            raise AppError(str(e), ERROR_INVALID_ARGS) from e

    for error in result.errors:
        format_warning(error)
    format_success(result.message)
