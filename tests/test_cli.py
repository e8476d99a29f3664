"""Tests for the command-line interface."""

import json
from pathlib import Path

import httpx
import pytest
import respx
from typer.testing import CliRunner

from vocab_notes.cli import app

runner = CliRunner()

LLM_BASE = "https://llm.test/v1"


@pytest.fixture
def config_file(tmp_path: Path, vault: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        f"vault_path: {vault}\n"
        "openai_api_key: sk-test\n"
        f"openai_base_url: {LLM_BASE}\n"
        "log_level: WARNING\n",
        encoding="utf-8",
    )
    return path


class TestWordCommands:
    """process-table, process-folder and update-note."""

    def test_process_table(self, config_file, vault, table_note) -> None:
        result = runner.invoke(
            app, ["process-table", str(table_note), "--config", str(config_file), "--no-remote"]
        )

        assert result.exit_code == 0, result.output
        assert "Written" in result.output
        assert (vault / "CzechGrammarWords" / "dělat.md").is_file()
        assert (vault / "CzechGrammarWords" / "mluvit.md").is_file()

    def test_process_table_without_table(self, config_file, vault) -> None:
        note = vault / "plain.md"
        note.write_text("# nothing here\n", encoding="utf-8")

        result = runner.invoke(app, ["process-table", str(note), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "No suitable table found" in result.output

    def test_remote_without_server_urls(self, config_file, table_note) -> None:
        result = runner.invoke(
            app, ["process-table", str(table_note), "--config", str(config_file), "--remote"]
        )

        assert result.exit_code == 1
        assert "no server URLs" in result.output

    def test_process_folder(self, config_file, table_note) -> None:
        inbox = table_note.parent

        result = runner.invoke(app, ["process-folder", str(inbox), "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert (inbox / "processed word tables" / "lesson3.md").is_file()

    def test_update_note(self, config_file, vault) -> None:
        note = vault / "kniha.md"
        note.write_text('---\nslovo: "kniha"\ntranslation: "book"\n---\n', encoding="utf-8")

        result = runner.invoke(app, ["update-note", str(note), "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Updated" in result.output
        assert "kniha !speak[kniha] ::: book" in note.read_text(encoding="utf-8")

    def test_update_note_without_headword(self, config_file, vault) -> None:
        note = vault / "x.md"
        note.write_text('---\ntranslation: "book"\n---\n', encoding="utf-8")

        result = runner.invoke(app, ["update-note", str(note), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "slovo" in result.output


class TestGeneratePatterns:
    @respx.mock
    def test_generate_patterns(self, config_file, vault) -> None:
        request = vault / "request.md"
        request.write_text("---\npartsOfSpeechList: []\n---\n", encoding="utf-8")
        patterns = [{"czech": "Mám rád kávu.", "russian": "Я люблю кофе."}]
        content = json.dumps(patterns, ensure_ascii=False)
        respx.post(f"{LLM_BASE}/chat/completions").mock(
            return_value=httpx.Response(200, json={"choices": [{"message": {"content": content}}]})
        )

        result = runner.invoke(
            app, ["generate-patterns", str(request), "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        assert "Wrote 1 patterns" in result.output
        assert len(list((vault / "a2_grammar_patterns").glob("*.md"))) == 1
        assert len(list((vault / "a2_pattern_collections").glob("*.md"))) == 1

    def test_missing_api_key(self, tmp_path, vault) -> None:
        config_file = tmp_path / "no_key.yaml"
        config_file.write_text(f"vault_path: {vault}\n", encoding="utf-8")
        request = vault / "request.md"
        request.write_text("---\n---\n", encoding="utf-8")

        result = runner.invoke(
            app, ["generate-patterns", str(request), "--config", str(config_file)]
        )

        assert result.exit_code == 1
        assert "API key" in result.output
