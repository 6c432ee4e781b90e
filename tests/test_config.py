"""Configuration tests."""

import logging

import pytest

from lexicon_index_mcp.config import LexiconConfig, get_config, reset_config
from lexicon_index_mcp.core.lexicon import Lexicon


class TestLexiconConfig:
    def test_defaults(self):
        config = LexiconConfig()
        assert config.write_timeout_seconds == 30.0
        assert config.read_timeout_seconds == 30.0
        assert config.max_query_length == 256
        assert config.max_term_length == 256
        assert config.dataset_path is None
        assert config.get_log_level() == logging.ERROR

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("LEXICON_INDEX_WRITE_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("LEXICON_INDEX_MAX_QUERY_LENGTH", "16")
        monkeypatch.setenv("LEXICON_INDEX_DATASET_PATH", "/srv/glossary.json")
        monkeypatch.setenv("LEXICON_INDEX_LOG_LEVEL", "info")

        config = LexiconConfig()
        assert config.write_timeout_seconds == 2.5
        assert config.max_query_length == 16
        assert config.dataset_path == "/srv/glossary.json"
        assert config.get_log_level() == logging.INFO

    def test_malformed_numbers_fall_back(self, monkeypatch):
        monkeypatch.setenv("LEXICON_INDEX_READ_TIMEOUT_SECONDS", "soon")
        monkeypatch.setenv("LEXICON_INDEX_MAX_TERM_LENGTH", "many")
        config = LexiconConfig()
        assert config.read_timeout_seconds == LexiconConfig.DEFAULT_READ_TIMEOUT_SECONDS
        assert config.max_term_length == LexiconConfig.DEFAULT_MAX_TERM_LENGTH

    @pytest.mark.parametrize("key, value", [
        ("LEXICON_INDEX_WRITE_TIMEOUT_SECONDS", "0"),
        ("LEXICON_INDEX_READ_TIMEOUT_SECONDS", "-1"),
        ("LEXICON_INDEX_WRITE_TIMEOUT_SECONDS", "inf"),
        ("LEXICON_INDEX_READ_TIMEOUT_SECONDS", "nan"),
        ("LEXICON_INDEX_MAX_QUERY_LENGTH", "0"),
        ("LEXICON_INDEX_LOG_LEVEL", "chatty"),
    ])
    def test_invalid_values_raise(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)
        with pytest.raises(ValueError):
            LexiconConfig()

    def test_global_instance(self, monkeypatch):
        first = get_config()
        assert get_config() is first

        monkeypatch.setenv("LEXICON_INDEX_MAX_QUERY_LENGTH", "8")
        reset_config()
        assert get_config().max_query_length == 8

    def test_lexicon_uses_config(self, monkeypatch):
        monkeypatch.setenv("LEXICON_INDEX_WRITE_TIMEOUT_SECONDS", "1.5")
        monkeypatch.setenv("LEXICON_INDEX_MAX_QUERY_LENGTH", "8")
        reset_config()

        lex = Lexicon()
        assert lex.gate.write_timeout == 1.5
        assert lex.query.max_query_length == 8
