# ABOUTME: Rich table utilities for styled CLI output
# ABOUTME: Provides table builders for the harvest summary and logging status

from typing import Any

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table

from picture_harvest.core.models import HarvestSummary


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column key-value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_harvest_summary_table(summary: HarvestSummary, output_path: str | None = None) -> Table:
    """Create the end-of-run summary table.

    Args:
        summary: Completed harvest summary
        output_path: Where the picture list was written, None if the write failed

    Returns:
        Styled summary table
    """
    data = {
        "🗄️ Table": summary.table_name,
        "📄 Pages": str(summary.pages),
        "🔎 Scanned Items": str(summary.scanned_items),
        "🔗 Picture References": str(summary.picture_references),
        "🖼️ Distinct Pictures": str(summary.picture_count),
        "⏱️ Time Taken": f"{summary.elapsed_seconds:.3f}s",
        "💾 Output": output_path or "not written",
    }

    return create_key_value_table(title="📊 Harvest Summary", data=data, title_style="bold green")


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    # Add log files if they exist
    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing and style.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()  # Add spacing before
    console.print(table)
    console.print()  # Add spacing after
