"""
Tests for briefmark/config.py
"""

from briefmark.config import _int_env, _level_env, settings
from briefmark.types import RenderOptions


class TestIntEnv:
    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("BRIEFMARK_TEST_INT", raising=False)
        assert _int_env("BRIEFMARK_TEST_INT", 60) == 60

    def test_reads_value(self, monkeypatch):
        monkeypatch.setenv("BRIEFMARK_TEST_INT", "30")
        assert _int_env("BRIEFMARK_TEST_INT", 60) == 30

    def test_malformed_falls_back(self, monkeypatch):
        for raw in ["abc", "", "0", "-5", "1.5"]:
            monkeypatch.setenv("BRIEFMARK_TEST_INT", raw)
            assert _int_env("BRIEFMARK_TEST_INT", 60) == 60


class TestLevelEnv:
    def test_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("BRIEFMARK_TEST_LEVEL", "debug")
        assert _level_env("BRIEFMARK_TEST_LEVEL", "WARNING") == "DEBUG"

    def test_unknown_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("BRIEFMARK_TEST_LEVEL", "loud")
        assert _level_env("BRIEFMARK_TEST_LEVEL", "WARNING") == "WARNING"


class TestRenderOptionsDefaults:
    def test_defaults_follow_settings(self):
        opts = RenderOptions()
        assert opts.max_mention_length == settings.MAX_MENTION_LENGTH
        assert opts.max_note_title_length == settings.MAX_NOTE_TITLE_LENGTH
        assert opts.channel == "html"

    def test_defaults_read_at_construction(self, monkeypatch):
        monkeypatch.setattr(settings, "MAX_MENTION_LENGTH", 7)
        assert RenderOptions().max_mention_length == 7
