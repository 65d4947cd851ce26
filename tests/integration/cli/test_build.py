"""Integration tests for the CLI commands"""

import json

import pytest
from typer.testing import CliRunner

from mdblog.cli.cli import app


POST = "```\ntitle: Hello\npublishDate: 2024-03-01\n```\n# Hello\n\n- one\n- two\n"


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MDBLOG_OUTPUT_DIR", raising=False)
    monkeypatch.delenv("MDBLOG_BULLETS", raising=False)


def test_build_cmd_writes_site(tmp_path):
    """build produces a page, a sidecar and the index."""
    (tmp_path / "posts").mkdir()
    (tmp_path / "posts" / "hello.md").write_text(POST, encoding="utf-8")

    result = CliRunner().invoke(app, ["build", "posts", "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 0, result.output
    assert "Built 1 post(s)" in result.output
    assert (tmp_path / "dist" / "hello.html").exists()
    assert (tmp_path / "dist" / "hello.json").exists()
    assert (tmp_path / "dist" / "index.html").exists()


def test_build_cmd_no_files(tmp_path):
    (tmp_path / "empty").mkdir()
    result = CliRunner().invoke(app, ["build", "empty"])
    assert result.exit_code == 1
    assert "No markdown files" in result.output


def test_build_cmd_bad_config(tmp_path):
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    (tmp_path / "hello.md").write_text(POST, encoding="utf-8")
    result = CliRunner().invoke(app, ["build", "hello.md"])
    assert result.exit_code == 1


def test_render_cmd_prints_body_and_meta(tmp_path):
    (tmp_path / "hello.md").write_text(POST, encoding="utf-8")
    result = CliRunner().invoke(app, ["render", "hello.md", "--meta"])
    assert result.exit_code == 0, result.output
    assert "<h1>Hello</h1>\n<ul>\n<li>one</li>\n<li>two</li>\n</ul>" in result.output
    meta = json.loads(result.output[result.output.index("{"):])
    assert meta["title"] == "Hello"
    assert meta["publishDate"] == "2024-03-01"


def test_render_cmd_star_bullets(tmp_path):
    (tmp_path / "stars.md").write_text("* a\n* b\n", encoding="utf-8")
    result = CliRunner().invoke(app, ["render", "stars.md", "--bullets", "-+*"])
    assert result.exit_code == 0, result.output
    assert "<ul>\n<li>a</li>\n<li>b</li>\n</ul>" in result.output


def test_list_cmd(tmp_path):
    (tmp_path / "hello.md").write_text(POST, encoding="utf-8")
    result = CliRunner().invoke(app, ["list", "."])
    assert result.exit_code == 0, result.output
    assert "2024-03-01  hello  Hello" in result.output
