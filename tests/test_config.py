"""
Tests for settings
"""
import re

import pytest

from recursive_regex.config import SafeSettings, Settings


class TestSettings:
    """Tests for Settings validation and environment loading"""

    def test_defaults(self):
        configured = Settings()

        assert configured.log_level == "WARNING"
        assert configured.regex_flags == 0
        assert "true" in configured.bool_true_values

    def test_regex_flags(self):
        configured = Settings(default_regex_flags=["multiline", "DOTALL"])

        assert configured.regex_flags == re.MULTILINE | re.DOTALL

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            Settings(log_level="LOUD")

    def test_unknown_regex_flag(self):
        with pytest.raises(ValueError):
            Settings(default_regex_flags=["BOGUS"])

    def test_overlapping_bool_words(self):
        with pytest.raises(ValueError):
            Settings(bool_true_values=["on", "yes"], bool_false_values=["off", "YES"])

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("RECURSIVE_REGEX_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("RECURSIVE_REGEX_PATTERNS_DIR", "/tmp/trees")

        configured = Settings()

        assert configured.log_level == "DEBUG"
        assert configured.patterns_dir == "/tmp/trees"


class TestSafeSettings:
    """Tests for the fallback wrapper"""

    def test_proxies_values(self):
        safe = SafeSettings(Settings(patterns_dir="trees"))

        assert safe.patterns_dir == "trees"
        assert safe.raw.patterns_dir == "trees"

    def test_falls_back_to_defaults(self):
        safe = SafeSettings(Settings(log_file=None))

        assert safe.log_file is None
        assert safe.get("log_level") == "WARNING"
        assert safe.get("not_a_setting", 7) == 7
