"""Tests for recordgen.cli module."""
from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from recordgen.cli import app

runner = CliRunner()

HEADER = {"browserName": "firefox", "launchOptions": {"headless": True}, "contextOptions": {"locale": "en-US"}}


def make_jsonl(*records) -> str:
    return "\n".join(json.dumps(r) for r in records)


RECORDING = make_jsonl(
    HEADER,
    {"name": "openPage", "url": "about:blank"},
    {"name": "click", "selector": "#a", "signals": [{"name": "popup"}]},
    {"name": "assertVisible", "selector": "#b"},
    {"name": "closePage"},
)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RECORDGEN_FORMAT", raising=False)
    monkeypatch.delenv("RECORDGEN_OUTPUT_DIR", raising=False)
    path = tmp_path / "my-flow.jsonl"
    path.write_text(RECORDING, encoding="utf-8")
    return path


class TestGenerateCommand:
    """Tests for `recordgen generate`."""

    def test_body_to_stdout(self, workdir):
        result = runner.invoke(app, ["generate", str(workdir), "--format", "body"])
        assert result.exit_code == 0
        assert result.stdout == (
            "# New page: pg\n"
            "with pg.expect_popup() as popup_info:\n"
            '    pg.locator("#a").click()\n'
            "popup_pg = popup_info.value\n"
            "# popup_pg is now available for further actions\n"
            'expect(pg.locator("#b")).to_be_visible()\n'
            "pg.close()\n"
        )

    def test_default_format_is_test(self, workdir):
        result = runner.invoke(app, ["generate", str(workdir)])
        assert result.exit_code == 0
        assert "class TestGenerated:" in result.stdout
        assert "pw.firefox.launch(headless=True)" in result.stdout

    def test_format_from_env(self, workdir, monkeypatch):
        monkeypatch.setenv("RECORDGEN_FORMAT", "script")
        result = runner.invoke(app, ["generate", str(workdir)])
        assert result.exit_code == 0
        assert result.stdout.startswith("# Auto-generated by recordgen\n")
        assert "class TestGenerated" not in result.stdout

    def test_explicit_format_wins_over_env(self, workdir, monkeypatch):
        monkeypatch.setenv("RECORDGEN_FORMAT", "script")
        result = runner.invoke(app, ["generate", str(workdir), "-f", "body"])
        assert result.exit_code == 0
        assert result.stdout.startswith("# New page: pg\n")

    def test_reads_stdin(self, workdir):
        result = runner.invoke(app, ["generate", "-f", "body"], input=RECORDING)
        assert result.exit_code == 0
        assert result.stdout.endswith("pg.close()\n")

    def test_out_writes_file(self, workdir, tmp_path):
        out = tmp_path / "nested" / "flow.py"
        result = runner.invoke(app, ["generate", str(workdir), "-f", "script", "-o", str(out)])
        assert result.exit_code == 0
        content = out.read_text(encoding="utf-8")
        assert content.startswith("# Auto-generated by recordgen\n")
        assert content.endswith("pg.close()\n")

    def test_save_uses_output_dir(self, workdir, tmp_path, monkeypatch):
        monkeypatch.setenv("RECORDGEN_OUTPUT_DIR", str(tmp_path / "out"))
        result = runner.invoke(app, ["generate", str(workdir), "--save"])
        assert result.exit_code == 0
        assert (tmp_path / "out" / "test_my_flow.py").exists()

    def test_save_script_name(self, workdir, tmp_path, monkeypatch):
        monkeypatch.setenv("RECORDGEN_OUTPUT_DIR", str(tmp_path / "out"))
        result = runner.invoke(app, ["generate", str(workdir), "--save", "-f", "script"])
        assert result.exit_code == 0
        assert (tmp_path / "out" / "my_flow.py").exists()

    def test_bad_format(self, workdir):
        result = runner.invoke(app, ["generate", str(workdir), "-f", "markdown"])
        assert result.exit_code == 2

    def test_unknown_action_exits_1(self, workdir):
        workdir.write_text(make_jsonl(HEADER, {"name": "teleport"}), encoding="utf-8")
        result = runner.invoke(app, ["generate", str(workdir), "-f", "body"])
        assert result.exit_code == 1
        assert "pg." not in result.stdout

    def test_header_only_exits_1(self, workdir):
        workdir.write_text(json.dumps(HEADER), encoding="utf-8")
        result = runner.invoke(app, ["generate", str(workdir)])
        assert result.exit_code == 1


class TestInspectCommand:
    """Tests for `recordgen inspect`."""

    def test_summary(self, workdir):
        result = runner.invoke(app, ["inspect", str(workdir)])
        assert result.exit_code == 0
        assert "- 浏览器: firefox" in result.stdout
        assert "- headless: True" in result.stdout
        assert '"locale": "en-US"' in result.stdout
        assert "- 动作: 4 个" in result.stdout
        assert "  - click: 1" in result.stdout
        assert "  - popup: 1" in result.stdout

    def test_malformed_recording(self, workdir):
        workdir.write_text("{broken", encoding="utf-8")
        result = runner.invoke(app, ["inspect", str(workdir)])
        assert result.exit_code == 1
        assert "line 1" in result.stdout
