# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides the scan command that harvests picture ids from a DynamoDB table

from pathlib import Path

import asyncclick as click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from picture_harvest.config import get_config
from picture_harvest.core.harvester import PictureHarvester
from picture_harvest.core.models import HarvestSummary
from picture_harvest.persistence import OutputWriteError, write_pictures
from picture_harvest.store import DynamoDBRecordSource, StoreError
from picture_harvest.utils.logging import (
    LoggingMode,
    configure_logging,
    get_logging_status,
    with_scan_context,
)
from picture_harvest.utils.rich_tables import (
    create_harvest_summary_table,
    create_logging_status_table,
    print_rich_table,
)

console = Console()


def _display_summary(summary: HarvestSummary, output_path: Path | None, json_output: bool) -> None:
    if json_output:
        click.echo(summary.model_dump_json(exclude={"pictures"}))
        return

    console.print(f"Time taken: [bold]{summary.elapsed_seconds:.3f}s[/bold]")
    console.print(f"Number of pictures: [bold green]{summary.picture_count}[/bold green]")
    print_rich_table(console, create_harvest_summary_table(summary, str(output_path) if output_path else None))


async def _scan_async(
    table_name: str,
    output_path: Path,
    max_workers: int,
    page_size: int | None,
    region: str | None,
    max_sequence_depth: int,
    retry_attempts: int,
    json_output: bool,
) -> int:
    """Run one harvest and write its output. Returns the process exit status."""
    with with_scan_context(table_name) as logger:
        logger.info("Starting harvest", max_workers=max_workers, page_size=page_size)

        if not json_output:
            console.print(
                Panel.fit(
                    f"🖼️ [bold cyan]Picture Harvest[/bold cyan]\nScanning table: {table_name}",
                    border_style="magenta",
                )
            )

        def report_page(_pages: int, scanned_items: int) -> None:
            if not json_output:
                console.print(f"Scanned items: {scanned_items}")

        try:
            source = DynamoDBRecordSource(
                table_name,
                page_size=page_size,
                region_name=region,
                retry_attempts=retry_attempts,
            )
            harvester = PictureHarvester(
                source,
                table_name=table_name,
                max_workers=max_workers,
                max_sequence_depth=max_sequence_depth,
                on_page=report_page,
            )
            summary = await harvester.run()
        except StoreError as e:
            logger.error("Harvest failed", error=str(e))
            if not json_output:
                console.print(f"[red]❌ {escape(str(e))}[/red]")
            return 1

        status = 0
        written: Path | None = None
        try:
            written = write_pictures(summary.pictures, output_path)
            logger.info("Wrote pictures", output_path=str(written), picture_count=summary.picture_count)
        except OutputWriteError as e:
            status = 1
            logger.error("Error writing to file", error=str(e), output_path=str(output_path))
            if not json_output:
                console.print(f"[red]❌ {escape(str(e))}[/red]")

        _display_summary(summary, written, json_output)
        return status


@click.command()
@click.option("--table", "table_name", help="DynamoDB table to scan")
@click.option(
    "--output", "-o", "output_path", type=click.Path(dir_okay=False, path_type=Path), help="Output JSON file"
)
@click.option("--workers", "-w", type=click.IntRange(min=1), help="Traversal worker threads")
@click.option("--page-size", type=click.IntRange(min=1), help="Maximum records per Scan page")
@click.option("--region", help="AWS region (defaults to the boto3 discovery chain)")
@click.option("--max-sequence-depth", type=click.IntRange(min=0), help="List levels walked per record path")
@click.pass_context
async def scan(
    ctx,
    table_name: str | None,
    output_path: Path | None,
    workers: int | None,
    page_size: int | None,
    region: str | None,
    max_sequence_depth: int | None,
):
    """
    🔎 Scan a content table and collect every referenced picture id.

    Reads the table page by page, walks each record (including JSON embedded in
    htmlBody markup) and writes the distinct ids as a JSON array.
    """
    config = get_config()
    status = await _scan_async(
        table_name=table_name or config.table_name,
        output_path=output_path or config.output_path,
        max_workers=workers or config.max_workers,
        page_size=page_size or config.page_size,
        region=region or config.aws_region,
        max_sequence_depth=config.max_sequence_depth if max_sequence_depth is None else max_sequence_depth,
        retry_attempts=config.fetch_retry_attempts,
        json_output=ctx.obj["json_output"],
    )
    if status:
        ctx.exit(status)


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    # --json forces production; otherwise PICTURE_HARVEST_LOG_MODE, then the terminal, decides
    mode = LoggingMode.PRODUCTION if json_output else config.log_mode

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    print_rich_table(console, create_logging_status_table(status))


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🖼️ Picture Harvest - collect picture ids referenced by content records

    Scans a DynamoDB content table, including JSON payloads embedded in HTML
    bodies, and writes the deduplicated picture ids to a file.
    """
    # Store global options in context for commands to access
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    # Initialize logging once here instead of in each command
    _initialize_logging(json, log_level, log_file)

    # Show help if no command provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Add commands to the main group
app.add_command(scan)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
