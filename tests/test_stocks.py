"""End-to-end tests for the stocks CLI — fetcher mocked, real config dir."""

import json

import pytest
from unittest.mock import patch

from stocks import main


@pytest.fixture
def cli(tmp_path):
    """Run the CLI against a config dir in tmp_path."""
    def _run(*args):
        return main(["--config-dir", str(tmp_path), *args])
    return _run


@pytest.fixture
def patched_fetcher(mock_fetcher):
    with patch("watchlist.YahooFetcher", return_value=mock_fetcher):
        yield mock_fetcher


class TestSetup:
    def test_requires_init(self, cli, capsys):
        assert cli("list") == 1
        assert "Run 'init' first" in capsys.readouterr().out

    def test_init_file_mode(self, cli, tmp_path, capsys):
        assert cli("init", "--mode", "file") == 0
        assert (tmp_path / "stocks.txt").exists()
        capsys.readouterr()

        assert cli("mode") == 0
        assert capsys.readouterr().out.strip() == "file"

    def test_init_database_mode(self, cli, tmp_path):
        db_path = str(tmp_path / "db" / "stocks.db")
        assert cli("init", "--mode", "database", "--database-path", db_path) == 0
        assert (tmp_path / "db" / "stocks.db").exists()

    def test_set_and_show_db(self, cli, tmp_path, capsys):
        cli("init", "--mode", "database", "--database-path", str(tmp_path / "a.db"))
        assert cli("set-db", str(tmp_path / "b.db")) == 0
        capsys.readouterr()

        assert cli("show-db") == 0
        assert capsys.readouterr().out.strip() == str(tmp_path / "b.db")
        raw = json.loads((tmp_path / "settings.json").read_text())
        assert raw["mode"] == "database"

    def test_info(self, cli, capsys):
        assert cli("info", "pe_ratio") == 0
        assert cli("info", "nothing") == 1
        assert "No term was found" in capsys.readouterr().out


class TestWatchlistCommands:
    def test_add_list_search_drop(self, cli, patched_fetcher, capsys):
        cli("init", "--mode", "file")
        assert cli("add", "aapl") == 0
        capsys.readouterr()

        cli("list")
        assert capsys.readouterr().out.strip() == "AAPL"

        cli("search", "aapl")
        out = capsys.readouterr().out
        assert "Market Cap: " in out
        assert "2.95T" in out

        cli("drop", "aapl")
        assert "Stock was deleted" in capsys.readouterr().out

    def test_fetch_error_exit_code(self, cli, patched_fetcher):
        from sources.yahoo.fetcher import FetchError
        cli("init", "--mode", "file")
        patched_fetcher.fetch_summary.side_effect = FetchError("down")
        assert cli("add", "aapl") == 1

    def test_history(self, cli, patched_fetcher, tmp_path, capsys):
        cli("init", "--mode", "database", "--database-path", str(tmp_path / "stocks.db"))
        cli("add", "aapl")
        capsys.readouterr()

        assert cli("history", "aapl", "05.03.2024") == 0
        out = capsys.readouterr().out
        assert "Stock: AAPL" in out
        assert "Date 5.3.2024, Tuesday" in out
        assert "Increase until today: 89.50%" in out

    def test_history_bad_date(self, cli, patched_fetcher, capsys):
        cli("init", "--mode", "file")
        cli("add", "aapl")
        capsys.readouterr()

        assert cli("history", "aapl", "5.fortnights") == 1
        assert "DMY" in capsys.readouterr().out
        patched_fetcher.fetch_series.assert_not_called()
