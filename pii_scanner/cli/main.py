"""Command-line interface for the Benin PII scanner."""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from pii_scanner import __version__
from pii_scanner.core import (
    get_container,
    get_scheduled_scan_runner,
    get_scheduler,
    get_session_manager,
)
from pii_scanner.detectors import BeninPIIPatterns
from pii_scanner.models import (
    PIIType,
    RiskLevel,
    ScanFrequency,
    ScanResults,
    ScanStatus,
    ScheduledScan,
)
from pii_scanner.reporters import JSONReporter
from pii_scanner.utils import setup_logging, get_logger

app = typer.Typer(
    name="pii-scanner",
    help="Detect Beninese personal data in local files and assess its exposure",
    rich_markup_mode=None,
)
console = Console()
logger = get_logger(__name__)


@app.command()
def scan(
    directory: str = typer.Argument(..., help="Directory to scan"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file for results (JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    max_workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Max concurrent file processing"),
    file_types: Optional[List[str]] = typer.Option(None, "--ext", "-e", help="File extension to scan (repeatable)"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Folder name to skip (repeatable)"),
    pii_type: Optional[List[str]] = typer.Option(None, "--type", "-t", help="PII type to look for (repeatable)"),
    show_values: bool = typer.Option(False, "--show-values", help="Keep matched values in the JSON output"),
) -> None:
    """
    Scan a directory for Beninese PII.

    Example:
        pii-scanner scan ./documents
        pii-scanner scan ./documents -o results.json --workers 8 -t IBAN -t Email
    """
    setup_logging(log_level="DEBUG" if verbose else "INFO")

    console.print(f"\n[bold blue]PII Scanner - Directory Scan[/bold blue]")
    console.print(f"Directory: {directory}\n")

    if not Path(directory).is_dir():
        console.print(f"[bold red]Error:[/bold red] Directory not found: {directory}")
        raise typer.Exit(1)

    try:
        pii_types = [PIIType(value) for value in pii_type] if pii_type else None
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if max_workers:
        container = get_container()
        settings = container.resolve("Settings").model_copy(update={"max_workers": max_workers})
        container.register_singleton("Settings", settings)

    try:
        results = asyncio.run(_scan_async(directory, file_types, exclude, pii_types))
    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {str(e)}")
        logger.exception("Scan failed")
        raise typer.Exit(1)

    _display_results(results)

    if output:
        _save_results(results, output, show_values)
        console.print(f"\n[green]Results saved to:[/green] {output}")


async def _scan_async(directory, file_types, exclude, pii_types) -> ScanResults:
    """Run a scan through the shared session manager while rendering its progress."""
    manager = get_session_manager()
    scan_id = await manager.start_scan(
        directory, file_types=file_types, exclusions=exclude, pii_types=pii_types
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
    ) as progress:
        task = progress.add_task("Scanning files...", total=None)
        waiter = asyncio.ensure_future(manager.wait_for(scan_id))

        while not waiter.done():
            snapshot = manager.get_progress(scan_id)
            if snapshot and snapshot.total_files:
                progress.update(task, completed=snapshot.processed_files, total=snapshot.total_files)
            await asyncio.sleep(0.1)

        session = waiter.result()
        progress.update(task, completed=session.total_files, total=session.total_files)

    if session.status == ScanStatus.ERROR:
        raise RuntimeError(session.error_message)

    console.print(f"Reports written to: {session.reports_directory}")
    return manager.get_results(scan_id)


def _display_results(results: ScanResults) -> None:
    """Display scan statistics in formatted tables."""
    stats = results.statistics

    console.print(f"\n[bold]Scan Results[/bold]")
    console.print(f"Files scanned: {stats.total_files_scanned}")
    console.print(f"Files with PII: {stats.files_with_pii}")
    console.print(f"Total PII found: {stats.total_pii_found}\n")

    if stats.total_pii_found == 0:
        console.print("[green]No PII detected![/green]")
        return

    console.print("[bold]PII by Type:[/bold]")
    type_table = Table()
    type_table.add_column("PII Type", style="bold")
    type_table.add_column("Count", justify="right")
    type_table.add_column("%", justify="right")

    for pii_type, count in stats.pii_by_type.items():
        type_table.add_row(pii_type, str(count), f"{count * 100.0 / stats.total_pii_found:.1f}")

    console.print(type_table)

    console.print("\n[bold]Top Risky Files:[/bold]")
    files_table = Table(show_lines=True)
    files_table.add_column("Risk")
    files_table.add_column("File", style="cyan", max_width=60)
    files_table.add_column("PII", justify="right")
    files_table.add_column("Staleness")
    files_table.add_column("Exposure")

    for risky in stats.top_risky_files:
        color = _get_risk_color(risky.risk_level)
        files_table.add_row(
            f"[{color}]{risky.risk_level.value}[/{color}]",
            risky.file_path,
            str(risky.pii_count),
            risky.staleness_level.value,
            risky.exposure_level.value,
        )

    console.print(files_table)


def _get_risk_color(risk_level: RiskLevel) -> str:
    colors = {
        RiskLevel.ELEVE: "red bold",
        RiskLevel.MOYEN: "yellow",
        RiskLevel.FAIBLE: "green",
    }
    return colors.get(risk_level, "white")


def _save_results(results: ScanResults, output_path: str, show_values: bool = False) -> None:
    """Save scan results to a JSON file."""
    output_data = JSONReporter().build(results.detections, results.statistics)

    if not show_values:
        for detection in output_data["detections"]:
            detection["match"] = "[REDACTED]"

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(output_data, f, indent=2, ensure_ascii=False, default=str)


@app.command()
def next_run(
    frequency: ScanFrequency = typer.Argument(..., help="Daily, Weekly, Monthly or Quarterly"),
    hour: int = typer.Option(0, "--hour", help="Hour of day (UTC, 0-23)"),
    day_of_week: Optional[int] = typer.Option(None, "--day-of-week", help="0 = Sunday ... 6 = Saturday"),
    day_of_month: Optional[int] = typer.Option(None, "--day-of-month", help="Day of month (1-31, capped at 28)"),
    from_time: Optional[datetime] = typer.Option(None, "--from", help="Reference time (UTC), defaults to now"),
) -> None:
    """
    Show when a scheduled scan would next run.

    Example:
        pii-scanner next-run Weekly --day-of-week 1 --hour 2
    """
    try:
        rule = ScheduledScan(
            frequency=frequency,
            hour_of_day=hour,
            day_of_week=day_of_week,
            day_of_month=day_of_month,
        )
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    scheduler = get_scheduler()
    if from_time is None:
        scheduler.initialize_next_run(rule)
    else:
        rule.next_run_at = scheduler.compute_next_run(rule, from_time)

    console.print(f"Next run: [bold]{rule.next_run_at:%Y-%m-%d %H:%M} UTC[/bold]")


@app.command()
def schedule(
    rules_file: str = typer.Argument(..., help="JSON file holding a list of scheduled scans"),
    once: bool = typer.Option(False, "--once", help="Check due scans once, wait for them and exit"),
    interval: float = typer.Option(60, "--interval", help="Seconds between checks"),
) -> None:
    """
    Run scheduled scans defined in a rules file.

    Run times and scan ids are written back to the file.

    Example:
        pii-scanner schedule rules.json --interval 300
    """
    try:
        rules = _load_rules(rules_file)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] Cannot read {rules_file}: {e}")
        raise typer.Exit(1)

    try:
        started = asyncio.run(_schedule_async(rules_file, rules, once, interval))
    except KeyboardInterrupt:
        started = []

    console.print(f"Scheduled scans started: {len(started)}")


async def _schedule_async(rules_file, rules, once, interval) -> List[str]:
    runner = get_scheduled_scan_runner()
    for rule in rules:
        if rule.next_run_at is None:
            runner.scheduler.initialize_next_run(rule)

    if once:
        started = await runner.run_due(rules)
        for scan_id in started:
            await runner.session_manager.wait_for(scan_id)
        _save_rules(rules_file, rules)
        return started

    def load_rules():
        # Persist what the previous round changed
        _save_rules(rules_file, rules)
        return rules

    try:
        await runner.run_forever(load_rules, interval_seconds=interval)
    finally:
        _save_rules(rules_file, rules)
    return []


def _load_rules(path: str) -> List[ScheduledScan]:
    with open(path, "r", encoding="utf-8") as f:
        return [ScheduledScan.model_validate(item) for item in json.load(f)]


def _save_rules(path: str, rules: List[ScheduledScan]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump([rule.model_dump(mode="json") for rule in rules], f, indent=2, ensure_ascii=False)


@app.command()
def types() -> None:
    """List the PII types the scanner recognises."""
    table = Table()
    table.add_column("Type", style="bold")
    table.add_column("Description")

    for pii_type in BeninPIIPatterns.get_supported_types():
        table.add_row(pii_type.value, BeninPIIPatterns.get_description(pii_type))

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]PII Scanner[/bold] v{__version__}")
    console.print("Beninese personal data detection and exposure assessment")


if __name__ == "__main__":
    app()
