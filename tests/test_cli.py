"""
Tests for the Mood Tracker CLI commands.

The CLI's HTTP client is pointed at an in-process TestClient so commands
exercise the real API without a running server.
"""

import sys

import httpx
import pytest
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from mood_tracker import cli, server
from mood_tracker.config import StoreConfig
from mood_tracker.server import create_app
from mood_tracker.store import MoodStore

runner = CliRunner()


def _run_entry_point(entry_point, monkeypatch, *args):
    """Run a console-script entry point with the given arguments."""
    monkeypatch.setattr(sys, "argv", [entry_point.__name__, *args])
    try:
        entry_point()
    except SystemExit as e:
        return e.code
    return 0


class TestCLI:
    """Test suite for the CLI against a live app."""

    @pytest.fixture(autouse=True)
    def setup_cli(self, tmp_path, monkeypatch):
        self.store = MoodStore(StoreConfig(base_dir=tmp_path))
        self.app = create_app(self.store)
        monkeypatch.setattr(
            cli, "_client", lambda base_url: TestClient(self.app, base_url=base_url)
        )

    def test_get_default(self):
        result = runner.invoke(cli.app, ["get"])
        assert result.exit_code == 0
        assert result.output.strip() == "3 (Neutral)"

    def test_set_then_get(self):
        result = runner.invoke(cli.app, ["set", "4"])
        assert result.exit_code == 0
        assert "Mood saved successfully!" in result.output
        assert "Mood: 4 (Happy)" in result.output

        result = runner.invoke(cli.app, ["get"])
        assert result.output.strip() == "4 (Happy)"
        assert self.store.load().value == 4

    def test_get_json(self):
        self.store.save(2)
        result = runner.invoke(cli.app, ["get", "--json"])
        assert result.exit_code == 0
        assert '"value": 2' in result.output

    def test_where(self):
        result = runner.invoke(cli.app, ["where"])
        assert result.exit_code == 0
        assert str(self.store.resolve_path().path) in result.output
        assert "working directory" not in result.output

    def test_journal_commands(self):
        result = runner.invoke(cli.app, ["log", "5", "--date", "2025-05-01"])
        assert result.exit_code == 0
        assert result.output.strip() == "2025-05-01 > 5 (Excited)"
        runner.invoke(cli.app, ["log", "1", "--date", "2025-05-02"])

        result = runner.invoke(cli.app, ["history", "--start", "2025-05-02"])
        assert result.output.strip() == "2025-05-02 > 1 (Sad)"

        result = runner.invoke(cli.app, ["stats"])
        assert "Entries: 2" in result.output
        assert "Average: 3.00" in result.output
        assert "Most common: 1 (Sad)" in result.output

    def test_log_emotions_and_notes(self):
        result = runner.invoke(
            cli.app,
            ["log", "2", "-d", "2025-05-03", "-e", "anxious", "-e", "tired",
             "--notes", "Exam week"],
        )
        assert result.exit_code == 0
        expected = "2025-05-03 > 2 (Worried) | anxious, tired | Exam week"
        assert result.output.strip() == expected

        result = runner.invoke(cli.app, ["history"])
        assert "anxious, tired | Exam week" in result.output

    def test_mood_set_entry_point(self, monkeypatch, capsys):
        assert _run_entry_point(cli.cli_set_mood, monkeypatch, "5") in (0, None)
        assert "Mood: 5 (Excited)" in capsys.readouterr().out
        assert self.store.load().value == 5

    def test_mood_get_entry_point(self, monkeypatch, capsys):
        self.store.save(1)
        assert _run_entry_point(cli.cli_get_mood, monkeypatch) in (0, None)
        assert capsys.readouterr().out.strip() == "1 (Sad)"

    def test_history_empty(self):
        result = runner.invoke(cli.app, ["history"])
        assert result.output.strip() == "No moods recorded"

    def test_server_error_detail(self):
        """Test a failed load prints the server's message and exits 1."""
        path = self.store.resolve_path().path
        path.parent.mkdir(parents=True)
        path.write_text("oops", encoding="utf-8")

        result = runner.invoke(cli.app, ["get"])
        assert result.exit_code == 1
        assert "Error: HTTP 500: Failed to load mood:" in result.output


def test_connection_error(monkeypatch):
    def refuse(base_url):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        return httpx.Client(base_url=base_url, transport=httpx.MockTransport(handler))

    monkeypatch.setattr(cli, "_client", refuse)

    result = runner.invoke(cli.app, ["get", "--url", "http://localhost:9"])
    assert result.exit_code == 1
    assert "Error: Could not connect to http://localhost:9" in result.output


class TestServerEntryPoint:
    """Tests for the mood-tracker-server command."""

    @pytest.fixture(autouse=True)
    def capture_uvicorn(self, monkeypatch):
        self.calls = []
        monkeypatch.setattr(
            server.uvicorn, "run", lambda app, **kwargs: self.calls.append(kwargs)
        )

    def test_defaults(self, monkeypatch):
        assert _run_entry_point(server.main, monkeypatch) in (0, None)
        assert self.calls == [{"host": "127.0.0.1", "port": 8000, "log_level": "info"}]

    def test_options(self, monkeypatch):
        code = _run_entry_point(
            server.main,
            monkeypatch,
            "--host", "0.0.0.0", "--port", "9000", "--log-level", "debug",
        )
        assert code in (0, None)
        assert self.calls == [{"host": "0.0.0.0", "port": 9000, "log_level": "debug"}]
