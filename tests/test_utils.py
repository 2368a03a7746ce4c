"""Tests for recordgen.utils module."""
from __future__ import annotations

import tempfile
from pathlib import Path

from recordgen.utils import get_logger, module_stem, preview_json, write_text


class TestModuleStem:
    """Tests for module_stem function."""

    def test_plain_name_unchanged(self):
        assert module_stem("checkout") == "checkout"

    def test_replaces_dashes_and_dots(self):
        assert module_stem("my-flow.v2") == "my_flow_v2"

    def test_leading_digit(self):
        assert module_stem("2024-login") == "_2024_login"

    def test_empty_name(self):
        assert module_stem("") == "_"


class TestPreviewJson:
    """Tests for preview_json function."""

    def test_short_value_unchanged(self):
        assert preview_json({"locale": "en-US"}) == '{"locale": "en-US"}'

    def test_keys_sorted_and_non_ascii_kept(self):
        assert preview_json({"b": 1, "a": "中文"}) == '{"a": "中文", "b": 1}'

    def test_truncates_long_value(self):
        result = preview_json("x" * 100, limit=50)
        assert len(result) == 51  # 50 chars + ellipsis
        assert result.endswith("…")


class TestWriteText:
    """Tests for write_text function."""

    def test_creates_parent_directories(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "dir" / "test_out.py"
            write_text(path, "print('hi')\n")
            assert path.read_text(encoding="utf-8") == "print('hi')\n"


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_logger(self):
        logger = get_logger("test")
        assert logger.name == "test"

    def test_same_name_returns_same_logger(self):
        logger1 = get_logger("same_name")
        logger2 = get_logger("same_name")
        assert logger1 is logger2
        assert len(logger1.handlers) == 1

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("RECORDGEN_LOG_LEVEL", "debug")
        logger = get_logger("env_level_logger")
        assert logger.level == 10
