"""
Rendering functions for dxcore command line output.

This module handles all pretty-printing and table formatting.
Models produce data and strings; this module makes them readable.
"""

from typing import Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .domain import Model
from .helpers import safe_string

console = Console()
console_err = Console(stderr=True)


def render_table(headers: List[str], rows: List[List[str]], title: Optional[str] = None) -> None:
    """
    Render a generic table with the given headers and rows.

    Args:
        headers: List of column headers
        rows: List of rows, where each row is a list of values
        title: Optional table title
    """
    if not rows:
        console.print("[yellow]No data to display.[/yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*[str(val) for val in row])

    console.print(table)


def render_model(model: Model, unsafe: bool = False) -> None:
    """Render one model as a property table."""
    rows = [
        ["type", model.type_name()],
        ["valid", "yes" if model.is_valid() else "no"],
        ["zero", "yes" if model.is_zero() else "no"],
        ["value", safe_string(model, unsafe=unsafe)],
    ]
    render_table(["Property", "Value"], rows, title=model.type_name())


def render_type_list(names: Iterable[str]) -> None:
    render_table(["Type"], [[name] for name in names], title="Model types")


def render_error(message: str) -> None:
    console_err.print(f"[red]Error:[/red] {message}", highlight=False)
