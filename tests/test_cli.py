"""Tests for the command-line interface."""

import json
import pytest
from pathlib import Path
from typer.testing import CliRunner

from pii_scanner import __version__
from pii_scanner.cli import main as cli
from pii_scanner.core import get_container, get_session_manager, reset_container
from pii_scanner.models import ScanFrequency, ScheduledScan, Settings

runner = CliRunner()


@pytest.fixture
def isolated_cli(monkeypatch, settings: Settings):
    """Register test settings in a fresh container and leave logging untouched."""
    reset_container()
    get_container().register_singleton("Settings", settings)
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
    yield settings
    reset_container()


def test_version():
    result = runner.invoke(cli.app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_types_lists_registry():
    result = runner.invoke(cli.app, ["types"])

    assert result.exit_code == 0
    assert "IBAN" in result.stdout
    assert "NPI" in result.stdout


@pytest.mark.parametrize(
    "args, expected",
    [
        (["Daily", "--hour", "2"], "2026-10-18 02:00"),
        (["Weekly", "--day-of-week", "1", "--hour", "9"], "2026-10-19 09:00"),
        (["Quarterly", "--day-of-month", "15"], "2027-01-15 00:00"),
    ],
)
def test_next_run(args, expected):
    result = runner.invoke(cli.app, ["next-run", *args, "--from", "2026-10-17T10:00:00"])

    assert result.exit_code == 0
    assert expected in result.stdout


def test_next_run_rejects_incomplete_rule():
    result = runner.invoke(cli.app, ["next-run", "Weekly"])

    assert result.exit_code == 1


def test_scan_missing_directory(isolated_cli, temp_dir: Path):
    result = runner.invoke(cli.app, ["scan", str(temp_dir / "missing")])

    assert result.exit_code == 1
    assert "Directory not found" in result.stdout


def test_scan_unknown_pii_type(isolated_cli, pii_tree: Path):
    result = runner.invoke(cli.app, ["scan", str(pii_tree), "-t", "Unknown"])

    assert result.exit_code == 1


def test_scan_writes_redacted_json(isolated_cli, pii_tree: Path, temp_dir: Path):
    output = temp_dir / "out.json"

    result = runner.invoke(cli.app, ["scan", str(pii_tree), "-o", str(output)])

    assert result.exit_code == 0
    report = json.loads(output.read_text(encoding="utf-8"))
    assert report["metadata"]["totalFilesScanned"] == 3
    assert report["detections"]
    assert all(d["match"] == "[REDACTED]" for d in report["detections"])


def test_scan_show_values(isolated_cli, pii_tree: Path, temp_dir: Path):
    output = temp_dir / "out.json"

    result = runner.invoke(cli.app, ["scan", str(pii_tree), "-o", str(output), "--show-values", "-t", "IBAN"])

    assert result.exit_code == 0
    report = json.loads(output.read_text(encoding="utf-8"))
    assert [d["match"] for d in report["detections"]] == ["BJ66BJ0610100100144390000769"]


def test_scan_uses_shared_session_manager(isolated_cli, pii_tree: Path):
    result = runner.invoke(cli.app, ["scan", str(pii_tree), "--workers", "3"])

    assert result.exit_code == 0
    manager = get_session_manager()
    assert manager.settings.max_workers == 3
    assert manager.settings.reports_root == isolated_cli.reports_root
    assert len(get_container().resolve("SessionStore")) == 1


def test_schedule_once_runs_due_rules(isolated_cli, pii_tree: Path, temp_dir: Path):
    rules_file = temp_dir / "rules.json"
    rule = ScheduledScan(
        name="nightly",
        directory_path=str(pii_tree),
        frequency=ScanFrequency.DAILY,
        hour_of_day=2,
        next_run_at="2000-01-01T00:00:00Z",
    )
    rules_file.write_text(json.dumps([rule.model_dump(mode="json")]), encoding="utf-8")

    result = runner.invoke(cli.app, ["schedule", str(rules_file), "--once"])

    assert result.exit_code == 0
    saved = json.loads(rules_file.read_text(encoding="utf-8"))[0]
    assert saved["last_scan_id"] not in (None, "ERROR")
    assert saved["next_run_at"] > "2000-01-01"

    results = get_session_manager().get_results(saved["last_scan_id"])
    assert results.statistics.total_files_scanned == 3


def test_schedule_rejects_unreadable_rules(isolated_cli, temp_dir: Path):
    rules_file = temp_dir / "rules.json"
    rules_file.write_text('[{"frequency": "Weekly"}]', encoding="utf-8")

    result = runner.invoke(cli.app, ["schedule", str(rules_file), "--once"])

    assert result.exit_code == 1
