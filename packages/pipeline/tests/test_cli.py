"""
tests/test_cli.py — Tests for the htw click commands.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from htw_shared.exceptions import BackendError
from htw_pipeline.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestImportCommand:
    def test_dry_run(self, runner, fixture_path):
        with patch("htw_pipeline.cli.get_datastore") as get_store:
            result = runner.invoke(
                main, ["import", "industries", str(fixture_path / "industries_sample.csv"), "--dry-run"]
            )
        assert result.exit_code == 0, result.output
        assert "[dry run] 3 industries uploaded successfully." in result.output
        assert "1 malformed row(s) skipped" in result.output
        get_store.assert_not_called()

    def test_writes_through_service_role_store(self, runner, fixture_path, store):
        with patch("htw_pipeline.cli.get_datastore", return_value=store) as get_store:
            result = runner.invoke(
                main, ["import", "MEMBERS", str(fixture_path / "members_sample.csv")]
            )
        assert result.exit_code == 0, result.output
        get_store.assert_called_once_with(service_role=True)
        assert len(store.rows("members")) == 2

    def test_failure_exits_non_zero(self, runner, tmp_path):
        bad = tmp_path / "bad.csv"
        bad.write_text("name,icon\nTech,💻\n", encoding="utf-8")
        result = runner.invoke(main, ["import", "industries", str(bad), "--dry-run"])
        assert result.exit_code == 1
        assert "Missing required columns" in result.output

    def test_unknown_record_type(self, runner, fixture_path):
        result = runner.invoke(main, ["import", "unicorns", str(fixture_path / "industries_sample.csv")])
        assert result.exit_code == 2


class TestTemplateCommand:
    def test_stdout(self, runner):
        result = runner.invoke(main, ["template", "industries"])
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == (
            "name,description,member_count,company_count,growth_rate,color,icon"
        )

    def test_output_file(self, runner, tmp_path):
        out = tmp_path / "events.csv"
        result = runner.invoke(main, ["template", "events", "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8").startswith("name,description,event_type")


class TestAnalyticsCommand:
    def test_summary(self, runner, seeded_store):
        with patch("htw_pipeline.cli.get_datastore", return_value=seeded_store):
            result = runner.invoke(main, ["analytics", "--timeframe", "yearly", "--top", "2"])
        assert result.exit_code == 0, result.output
        assert "Members:        4" in result.output
        assert "Technology" in result.output
        assert "Python" in result.output

    def test_json(self, runner, seeded_store):
        with patch("htw_pipeline.cli.get_datastore", return_value=seeded_store):
            result = runner.invoke(main, ["--log-level", "ERROR", "analytics", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["total_industries"] == 3
        assert len(data["member_trend"]) == 12

    def test_backend_failure(self, runner):
        failing = MagicMock()
        failing.fetch.side_effect = BackendError(detail="refused")
        with patch("htw_pipeline.cli.get_datastore", return_value=failing):
            result = runner.invoke(main, ["analytics"])
        assert result.exit_code == 1
        assert "Failed to fetch data" in result.output
