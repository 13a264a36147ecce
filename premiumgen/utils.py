"""Shared utility functions for premiumgen.

Provides JSON output, numeric helpers and Rich-based console reporting.
All pipeline output goes through the module-level ``console`` so callers can
redirect or silence it in one place.
"""

from __future__ import annotations

import asyncio
import json
import math
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically.  The write itself is
    performed in a thread-pool executor to avoid blocking the event loop on
    large files.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False, default=str)

    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, file_path.write_text, content, "utf-8")


# ---------------------------------------------------------------------------
# Numeric / formatting helpers
# ---------------------------------------------------------------------------


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (``2.5 -> 3``).

    The builtin ``round`` uses banker's rounding, which would report a
    readiness of 92 for 92.5.
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    """Constrain *value* to ``[low, high]``."""
    return max(low, min(high, value))


def format_minutes(minutes: float) -> str:
    """Format budget minutes, e.g. ``format_minutes(6.25) -> "6.2 min"``."""
    return f"{max(minutes, 0.0):.1f} min"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------

PHASE_COLORS: tuple[str, ...] = (
    "bright_cyan",
    "bright_green",
    "bright_yellow",
    "bright_magenta",
    "bright_red",
    "bright_blue",
)


def print_phase_header(index: int, name: str, budget_minutes: float) -> None:
    """Print a full-width rule announcing a phase.

    Args:
        index: Zero-based phase index (shown one-based).
        name: Phase display name.
        budget_minutes: The phase's time budget.
    """
    color = PHASE_COLORS[index % len(PHASE_COLORS)]
    console.print()
    console.print(
        Rule(
            f"[bold {color}] Phase {index + 1}: {name} "
            f"({format_minutes(budget_minutes)}) [/bold {color}]",
            style=color,
        )
    )


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

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


def create_progress() -> Progress:
    """Create a Rich progress bar configured for phase tracking.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
    )
