"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from vocab_notes.config import Config, load_config
from vocab_notes.exceptions import ConfigurationError


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    """YAML file discovery and parsing."""

    def test_yaml_values(self, tmp_path, vault) -> None:
        config_file = _write(
            tmp_path / "config.yaml",
            f"vault_path: {vault}\n"
            "new_words_folder: Slovíčka\n"
            "use_remote_grammar_analysis: true\n"
            "server_urls:\n"
            "  - http://one.test/\n"
            "  - http://two.test\n"
            "log_level: debug\n",
        )

        config = load_config(config_file)

        assert config.vault_path == vault
        assert config.words_folder_path == vault / "Slovíčka"
        assert config.server_urls == ["http://one.test", "http://two.test"]
        assert config.log_level == "DEBUG"

    def test_explicit_path_must_exist(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_config(tmp_path / "nope.yaml")

    def test_env_var_location(self, tmp_path, vault, monkeypatch) -> None:
        config_file = _write(tmp_path / "elsewhere.yaml", f"vault_path: {vault}\n")
        monkeypatch.setenv("VOCAB_NOTES_CONFIG", str(config_file))

        assert load_config().vault_path == vault

    def test_defaults_without_file(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("VOCAB_NOTES_CONFIG", raising=False)

        config = load_config()

        assert config.new_words_folder == "CzechGrammarWords"
        assert config.flashcards_note_section == "Flashcards"
        assert config.use_remote_grammar_analysis is False

    def test_invalid_yaml(self, tmp_path) -> None:
        config_file = _write(tmp_path / "config.yaml", "vault_path: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_config(config_file)

    def test_yaml_must_be_a_mapping(self, tmp_path) -> None:
        config_file = _write(tmp_path / "config.yaml", "- a\n- b\n")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_config(config_file)

    def test_invalid_value(self, tmp_path) -> None:
        config_file = _write(tmp_path / "config.yaml", "log_level: loud\n")

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(config_file)

    def test_non_strict_mode_only_warns(self, tmp_path) -> None:
        config_file = _write(tmp_path / "config.yaml", "use_remote_grammar_analysis: true\n")

        config = load_config(config_file, strict_config=False)

        assert config.use_remote_grammar_analysis is True

    def test_environment_overrides(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("VOCAB_NOTES_PATTERN_MODEL", "gpt-4o-mini")
        config_file = _write(tmp_path / "config.yaml", "pattern_count: 5\n")

        config = load_config(config_file)

        assert config.pattern_model == "gpt-4o-mini"
        assert config.pattern_count == 5


class TestValidateConfig:
    """Cross-field checks."""

    def test_remote_without_urls(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            Config(use_remote_grammar_analysis=True).validate_config()

        assert exc_info.value.error_code == "CFG-KEY-001"

    def test_missing_vault(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError, match="Vault path does not exist"):
            Config(vault_path=tmp_path / "missing").validate_config()

    def test_same_word_and_translation_column(self) -> None:
        with pytest.raises(ConfigurationError):
            Config(word_column="X", translation_column="X").validate_config()

    def test_comma_separated_server_urls(self) -> None:
        config = Config(server_urls="http://a.test/, http://b.test")

        assert config.server_urls == ["http://a.test", "http://b.test"]

    def test_column_names(self) -> None:
        assert Config().column_names["phrase_translation"] == "Překlad Výrazu"

    def test_require_openai_key(self) -> None:
        with pytest.raises(ConfigurationError):
            Config(openai_api_key="").require_openai_key()

        assert Config(openai_api_key="sk-1").require_openai_key() == "sk-1"
