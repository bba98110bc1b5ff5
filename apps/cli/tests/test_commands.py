"""Tests for the history, settings and version commands."""

import json

from src.main import app
from src.utils import config as cli_config


class TestVersion:
    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "Sign Translator CLI v0.1.0" in result.stdout


class TestMethodsCommand:
    def test_lists_methods(self, cli_runner):
        result = cli_runner.invoke(app, ["methods"])

        assert result.exit_code == 0
        assert "Translation Methods" in result.stdout
        assert "s2g_greedy_g2t" in result.stdout
        assert "reranked_s2g_beam_g2t" in result.stdout


class TestLanguageCommand:
    def test_show_default(self, cli_runner):
        result = cli_runner.invoke(app, ["language"])

        assert result.exit_code == 0
        assert "Language: en" in result.stdout

    def test_switch_language(self, cli_runner):
        result = cli_runner.invoke(app, ["language", "DE"])

        assert result.exit_code == 0
        assert "Language set to de" in result.stdout
        assert cli_config.get_store().get("preferredLanguage") == "de"

    def test_unsupported_language(self, cli_runner):
        result = cli_runner.invoke(app, ["language", "fr"])

        assert result.exit_code == 1
        assert "Unsupported language" in result.stdout


class TestHistoryCommand:
    def test_empty(self, cli_runner):
        result = cli_runner.invoke(app, ["history"])

        assert result.exit_code == 0
        assert "No translation history" in result.stdout

    def test_table(self, cli_runner, saved_entries):
        result = cli_runner.invoke(app, ["history"])

        assert result.exit_code == 0
        assert "Translation History" in result.stdout
        assert result.stdout.index("Danke") < result.stdout.index("Hallo")

    def test_json_limit(self, cli_runner, saved_entries):
        result = cli_runner.invoke(app, ["history", "--json", "--limit", "1"])

        assert result.exit_code == 0
        records = json.loads(result.stdout)
        assert [r["translation"] for r in records] == ["Danke"]


class TestClearHistoryCommand:
    def test_already_empty(self, cli_runner):
        result = cli_runner.invoke(app, ["clear-history", "--force"])

        assert result.exit_code == 0
        assert "already empty" in result.stdout

    def test_force(self, cli_runner, saved_entries):
        result = cli_runner.invoke(app, ["clear-history", "--force"])

        assert result.exit_code == 0
        assert "History cleared" in result.stdout
        assert len(saved_entries) == 0

    def test_declined_confirmation(self, cli_runner, saved_entries):
        result = cli_runner.invoke(app, ["clear-history"], input="n\n")

        assert result.exit_code == 0
        assert len(saved_entries) == 2
