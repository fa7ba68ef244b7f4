"""Smoke tests for the command-line entry points."""

import pytest
from retirement_sim import chart_cli, cli, scenario_cli


@pytest.fixture(autouse=True)
def _no_local_config(tmp_path, monkeypatch):
    # Keep a developer's config.toml out of the tests
    monkeypatch.chdir(tmp_path)


class TestProjectionCli:
    def test_report(self, capsys):
        cli.main(["--start-year", "2025", "--every", "10"])
        out = capsys.readouterr().out
        assert "Retirement projection (age 40-95, 56 years)" in out
        assert "Retirement: 2050 (age 65)" in out
        assert "[Improvement analysis]" in out
        assert "Reduce investment fees" in out
        assert "[Yearly schedule]" in out
        assert "$" in out

    def test_sorted_decumulation_rows(self, capsys):
        cli.main([
            "--start-year", "2025", "--phase", "decumulation",
            "--sort", "capital", "--descending", "--currency", "eur",
        ])
        out = capsys.readouterr().out
        assert "€" in out
        assert "saving " not in out

    def test_invalid_parameters_exit_1(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["--current-age", "70", "--retirement", "65"])
        assert exc.value.code == 1
        assert "Cannot run projection" in capsys.readouterr().err

    def test_config_file_used(self, tmp_path, capsys):
        (tmp_path / "config.toml").write_text("current_age = 50\nretirement = 2045\nstart_year = 2025\n")
        cli.main([])
        assert "Retirement: 2045 (age 70)" in capsys.readouterr().out


class TestScenarioCli:
    def test_table(self, capsys):
        scenario_cli.main(["--start-year", "2025"])
        out = capsys.readouterr().out
        for name in ("Low growth", "Standard", "High growth", "Stagflation"):
            assert name in out


class TestChartCli:
    def test_writes_pngs(self, tmp_path):
        chart_cli.main(["--start-year", "2025", "--output", str(tmp_path / "charts"), "--name", "t"])
        assert (tmp_path / "charts" / "trajectory-t.png").exists()
        assert (tmp_path / "charts" / "have-vs-need-t.png").exists()

    def test_scenario_overlay(self, tmp_path):
        chart_cli.main(["--start-year", "2025", "--output", str(tmp_path), "--scenarios"])
        assert (tmp_path / "trajectory.png").exists()

    def test_invalid_exit_1(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            chart_cli.main(["--current-age", "70", "--retirement", "65", "--output", str(tmp_path)])
        assert exc.value.code == 1
