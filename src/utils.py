"""Shared utility functions for the schema scaffolder.

Provides the Rich console used for all operator output, coloured message
helpers, the report table, and JSON output.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Save data as pretty-printed JSON, creating parent directories."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False, default=str), encoding="utf-8"
    )
    return file_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------

STATUS_STYLES: dict[str, str] = {
    "created": "bold green",
    "applied": "bold cyan",
    "skipped": "yellow",
    "failed": "bold red",
}


def print_results_table(rows: list[dict[str, str]], title: str = "Generated files") -> None:
    """Print one row per action with status, path and message.

    Args:
        rows: Dicts with ``status``, ``kind``, ``path`` and ``message`` keys.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Status", no_wrap=True)
    table.add_column("Action", style="dim", no_wrap=True)
    table.add_column("Path")
    table.add_column("Message", style="dim")

    for row in rows:
        style = STATUS_STYLES.get(row["status"], "white")
        table.add_row(
            f"[{style}]{row['status']}[/{style}]",
            row["kind"],
            row["path"],
            row.get("message", ""),
        )

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
