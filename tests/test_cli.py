# tests/test_cli.py
"""
Tests for the prophistory command-line interface (CLI).

Scope
-----
1.  **Command Registration**: `show`, `objects` and `--help`.
2.  **Pipeline Integration**: `run_property_history` is mocked so the CLI's
    argument handling and rendering are tested without git.
3.  **Error Handling**: invalid queries exit 2, history errors exit 1.

We use `typer.testing.CliRunner` to invoke the app in-process.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from prophistory.cli import app
from prophistory.core.contracts.query import PropertyQuery
from prophistory.core.contracts.revision import RevisionRecord
from prophistory.core.contracts.timeline import TimelineEntry, ValueStatus
from prophistory.history.git import GitHistoryError
from prophistory.pipelines.property_history import PropertyHistoryResult

FIXTURE = Path(__file__).parent / "fixtures" / "Player.prefab"


@pytest.fixture  # type: ignore[misc]
def runner() -> CliRunner:
    """Create a fresh CliRunner for each test."""
    return CliRunner()


@pytest.fixture  # type: ignore[misc]
def history_result() -> PropertyHistoryResult:
    """A three-row timeline: present, error, absent."""

    def rev(identifier: str, summary: str) -> RevisionRecord:
        return RevisionRecord(
            identifier=identifier, author="Ana", summary=summary, raw_content="--- &1\nA: 1\n"
        )

    return {
        "query": PropertyQuery.from_path("400000", "m_LocalPosition.x"),
        "asset_path": "Assets/Player.prefab",
        "revisions_scanned": 9,
        "entries": [
            TimelineEntry(revision=rev("a" * 40, "Move player"), formatted_value="1.5"),
            TimelineEntry(
                revision=rev("b" * 40, "Bad merge"),
                status=ValueStatus.ERROR,
                reason="parse_failure: broken",
            ),
            TimelineEntry(
                revision=rev("c" * 40, "Initial"),
                status=ValueStatus.ABSENT,
                reason="content_absent: no content",
            ),
        ],
    }


def test_cli_help_shows_commands(runner: CliRunner) -> None:
    """Invoking --help should list both commands and exit 0."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0, f"Help failed: {result.output}"
    assert "show" in result.output
    assert "objects" in result.output


def test_show_requires_anchor_and_path(runner: CliRunner) -> None:
    """Missing required options are usage errors."""
    result = runner.invoke(app, ["show", "Assets/Player.prefab"])
    assert result.exit_code == 2


def test_show_renders_table(runner: CliRunner, history_result: PropertyHistoryResult) -> None:
    """The happy path prints one row per entry with short ids."""
    with patch("prophistory.cli.run_property_history", return_value=history_result) as mock_run:
        result = runner.invoke(
            app,
            ["show", "Assets/Player.prefab", "-a", "400000", "-p", "m_LocalPosition.x", "-n", "9"],
        )

    assert result.exit_code == 0, f"CLI Failed with Output:\n{result.output}"
    assert "Property History" in result.output
    assert "aaaaaaa" in result.output
    assert "a" * 8 not in result.output
    assert "1.5" in result.output
    assert "[absent]" in result.output
    assert "3 change(s) across 9 revision(s)" in result.output

    mock_run.assert_called_once()
    args, kwargs = mock_run.call_args
    assert args[1:] == ("400000", "m_LocalPosition.x")
    assert kwargs["limit"] == 9
    assert kwargs["repo_root"] is None


def test_show_json_output(runner: CliRunner, history_result: PropertyHistoryResult) -> None:
    """`--json` prints a machine-readable timeline without raw content."""
    with patch("prophistory.cli.run_property_history", return_value=history_result):
        result = runner.invoke(
            app, ["show", "x.prefab", "-a", "400000", "-p", "m_LocalPosition.x", "--json"]
        )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["field_path"] == "m_LocalPosition.x"
    assert payload["revisions_scanned"] == 9
    assert [e["status"] for e in payload["entries"]] == ["present", "error", "absent"]
    assert payload["entries"][0]["value"] == "1.5"
    assert payload["entries"][1]["reason"] == "parse_failure: broken"
    assert "raw_content" not in payload["entries"][0]["revision"]


def test_show_empty_history(runner: CliRunner, history_result: PropertyHistoryResult) -> None:
    """No revisions prints a friendly note."""
    history_result["entries"] = []
    with patch("prophistory.cli.run_property_history", return_value=history_result):
        result = runner.invoke(app, ["show", "x.prefab", "-a", "1", "-p", "x"])

    assert result.exit_code == 0
    assert "No history found" in result.output


def test_show_invalid_path_exits_2(runner: CliRunner) -> None:
    """A malformed property path is reported as an invalid query."""
    result = runner.invoke(app, ["show", "x.prefab", "-a", "1", "-p", "a..b"])
    assert result.exit_code == 2, result.output
    assert "Invalid query" in result.output


def test_show_history_error_exits_1(runner: CliRunner) -> None:
    """History errors are caught and displayed nicely."""
    with patch("prophistory.cli.run_property_history") as mock_run:
        mock_run.side_effect = GitHistoryError("/tmp is not inside a git repository")
        result = runner.invoke(app, ["show", "x.prefab", "-a", "1", "-p", "x"])

    assert result.exit_code == 1, f"Expected 1, got {result.exit_code}. Output:\n{result.output}"
    assert "History Error" in result.output
    assert "not inside a git repository" in result.output


def test_objects_lists_working_tree_file(runner: CliRunner) -> None:
    """`objects` reads the file from disk when no revision is given."""
    result = runner.invoke(app, ["objects", str(FIXTURE)])
    assert result.exit_code == 0, result.output
    for anchor, kind in [("400000", "Transform"), ("11400000", "MonoBehaviour")]:
        assert anchor in result.output
        assert kind in result.output


def test_objects_at_revision_reads_git(runner: CliRunner) -> None:
    """`--rev` reads the snapshot through git."""
    fake = MagicMock()
    fake.repo_relative.return_value = "Assets/Player.prefab"
    fake.read_content.return_value = FIXTURE.read_text(encoding="utf-8")
    with patch("prophistory.cli.GitHistory") as git_cls:
        git_cls.discover.return_value = fake
        result = runner.invoke(app, ["objects", "Assets/Player.prefab", "--rev", "HEAD~1"])

    assert result.exit_code == 0, result.output
    fake.read_content.assert_called_once_with("HEAD~1", "Assets/Player.prefab")
    assert "PrefabInstance" in result.output


def test_objects_missing_file(runner: CliRunner, tmp_path: Path) -> None:
    """A file that does not exist on disk exits 1."""
    result = runner.invoke(app, ["objects", str(tmp_path / "ghost.prefab")])
    assert result.exit_code == 1
    assert "File not found" in result.output


@pytest.mark.parametrize("content", ["", "a: [1, 2\n"])  # type: ignore[misc]
def test_objects_unreadable_file(runner: CliRunner, tmp_path: Path, content: str) -> None:
    """Empty or malformed files are reported, not raised."""
    target = tmp_path / "bad.prefab"
    target.write_text(content, encoding="utf-8")
    result = runner.invoke(app, ["objects", str(target)])
    assert result.exit_code == 1
    assert "Cannot read objects" in result.output


def test_objects_without_anchors(runner: CliRunner, tmp_path: Path) -> None:
    """Plain YAML with no anchors lists nothing."""
    target = tmp_path / "plain.yaml"
    target.write_text("a: 1\n", encoding="utf-8")
    result = runner.invoke(app, ["objects", str(target)])
    assert result.exit_code == 0
    assert "No anchored objects found" in result.output
