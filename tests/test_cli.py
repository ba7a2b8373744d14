"""
CLI and Settings Tests

Tests environment settings, flag overrides and the non-interactive commands.
"""

import json
import logging

import pytest

import cli
from packages.escape.config import DEFAULT_LOG_LEVEL, DEFAULT_SEED, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ESCAPE_SEED", "ESCAPE_LOG_LEVEL", "ESCAPE_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    # Keep a stray .env in the working directory out of the tests
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)
    monkeypatch.setattr(cli, "configure_logging", lambda settings: None)


# =============================================================================
# SETTINGS
# =============================================================================

class TestSettings:
    """ESCAPE_* environment variables."""

    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.seed == DEFAULT_SEED
        assert settings.log_level == DEFAULT_LOG_LEVEL
        assert settings.log_file is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ESCAPE_SEED", "ABC")
        monkeypatch.setenv("ESCAPE_LOG_LEVEL", "debug")
        monkeypatch.setenv("ESCAPE_LOG_FILE", "escape.log")
        settings = Settings.from_env()
        assert settings.seed == "ABC"
        assert settings.log_level == "DEBUG"
        assert settings.numeric_log_level == logging.DEBUG
        assert settings.log_file == "escape.log"

    def test_unknown_level_falls_back(self):
        assert Settings(log_level="LOUD").numeric_log_level == logging.WARNING

    def test_flags_override_env(self, monkeypatch):
        monkeypatch.setenv("ESCAPE_SEED", "ABC")
        args = cli.build_parser().parse_args(["--log-level", "info", "map", "--seed", "XYZ"])
        settings = cli.resolve_settings(args)
        assert settings.seed == "XYZ"
        assert settings.log_level == "INFO"

    def test_env_used_without_flags(self, monkeypatch):
        monkeypatch.setenv("ESCAPE_SEED", "ABC")
        args = cli.build_parser().parse_args(["map"])
        assert cli.resolve_settings(args).seed == "ABC"


# =============================================================================
# COMMANDS
# =============================================================================

class TestCommands:
    """Non-interactive commands."""

    def test_no_command(self, capsys):
        assert cli.main([]) == 1

    def test_map(self, capsys):
        assert cli.main(["map"]) == 0
        out = capsys.readouterr().out
        assert "Cells" in out
        assert "Engine Room" in out

    def test_simulate_json(self, capsys):
        cli.main(["simulate", "--seed", "ESCAPE", "--max-turns", "20", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["seed"] == "ESCAPE"
        assert data["turns"] >= 1

    def test_simulate_text(self, capsys):
        code = cli.main(["simulate", "--seed", "ESCAPE", "--max-turns", "20"])
        out = capsys.readouterr().out
        assert "Turns:" in out
        assert code in (0, 1)

    def test_auto_battle(self, capsys):
        code = cli.main(["battle", "--enemy", "Guard", "--weapon", "Cleaver", "--auto", "--seed", "B1"])
        out = capsys.readouterr().out
        assert "Result:" in out
        assert code in (0, 1)

    def test_unknown_enemy_rejected(self):
        with pytest.raises(SystemExit):
            cli.main(["battle", "--enemy", "Dragon"])

    @pytest.mark.parametrize("flag,item_id", [("--weapon", "Apple"), ("--food", "Cleaver")])
    def test_item_kind_checked(self, flag, item_id):
        with pytest.raises(SystemExit):
            cli.main(["battle", "--enemy", "Guard", flag, item_id])

    def test_item_choices_split_by_kind(self):
        parser = cli.build_parser()
        args = parser.parse_args(["battle", "--enemy", "Guard", "--weapon", "Cleaver", "--food", "Apple"])
        assert (args.weapon, args.food) == ("Cleaver", "Apple")

    def test_rng(self, capsys):
        cli.main(["rng", "--seed", "ESCAPE", "--count", "5", "--json"])
        first = json.loads(capsys.readouterr().out)
        cli.main(["rng", "--seed", "ESCAPE", "--count", "5", "--json", "--loop", "1"])
        second = json.loads(capsys.readouterr().out)
        assert len(first["values"]) == 5
        assert first["values"] != second["values"]
