# =============================================================================
# test_cli.py - lumelex Command-Line Tests
# =============================================================================
# Tests for the token dump tool, its output formats and exit codes.
# =============================================================================

import json
import logging

import pytest
from click.testing import CliRunner

from lume.cli.errors import ExitCode
from lume.cli.lumelex import format_token, main, token_to_dict
from lume.lexer import lex


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Undo logging.basicConfig() done by the command between tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "main.lume"
    path.write_text('let s = "hi";\n', encoding="utf-8")
    return path


# =============================================================================
# Formatting Helper Tests
# =============================================================================

class TestFormatting:
    """Tests for token formatting helpers."""

    def test_format_value_token(self):
        line = format_token(lex("42")[0])
        assert line.startswith("0..2 ")
        assert line.endswith("INT  42")

    def test_format_plain_token(self):
        assert format_token(lex(";")[0]).split() == ["0..1", "SEMICOLON"]

    def test_format_prefixed_token(self):
        assert format_token(lex('r"x"')[0]).endswith("PREFIXED_STRING  r 'x'")

    def test_token_to_dict(self):
        assert token_to_dict(lex('sql"q"')[0]) == {
            "type": "PREFIXED_STRING",
            "value": "q",
            "prefix": "sql",
            "start": 0,
            "end": 6,
        }

    def test_token_to_dict_overflowing_float(self):
        token = lex("1e400")[0]
        assert token.value == float("inf")
        assert token_to_dict(token)["value"] == "inf"


# =============================================================================
# CLI Tests
# =============================================================================

class TestLumelexCLI:
    """Tests for the lumelex CLI tool."""

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Print the token stream" in result.output

    def test_cli_version(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_cli_listing(self, source_file):
        runner = CliRunner()
        result = runner.invoke(main, [str(source_file)])

        assert result.exit_code == ExitCode.SUCCESS
        lines = result.output.splitlines()
        assert [line.split()[1] for line in lines] == [
            "LET", "IDENTIFIER", "ASSIGN", "STRING", "SEMICOLON", "EOF",
        ]

    def test_cli_no_eof(self, source_file):
        runner = CliRunner()
        result = runner.invoke(main, [str(source_file), "--no-eof"])

        assert result.exit_code == 0
        assert "EOF" not in result.output

    def test_cli_json(self, source_file):
        runner = CliRunner()
        result = runner.invoke(main, [str(source_file), "--json"])

        assert result.exit_code == 0
        tokens = json.loads(result.output)
        assert tokens[3] == {"type": "STRING", "value": "hi", "prefix": None, "start": 8, "end": 12}
        assert tokens[-1]["type"] == "EOF"

    def test_cli_json_keeps_unicode(self, tmp_path):
        path = tmp_path / "u.lume"
        path.write_text("let café = '中';", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, [str(path), "--json"])

        assert result.exit_code == 0
        assert "café" in result.output
        assert json.loads(result.output)[3]["value"] == "中"

    def test_cli_shebang(self, tmp_path):
        path = tmp_path / "script.lume"
        path.write_text("#!/usr/bin/env lume\nreturn 0;\n", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, [str(path), "--no-eof"])

        assert result.exit_code == 0
        assert result.output.splitlines()[0].split() == ["0..6", "RETURN"]

    def test_cli_lexical_error(self, tmp_path):
        path = tmp_path / "bad.lume"
        path.write_text('let a = 1;\nlet s = "abc\n', encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, [str(path), "--name", "bad.lume"])

        assert result.exit_code == ExitCode.SOURCE_ERROR
        assert "bad.lume:2:9: error: unterminated string literal" in result.output
        assert "hint:" in result.output

    def test_cli_error_uses_path_by_default(self, tmp_path):
        path = tmp_path / "bang.lume"
        path.write_text("if !done {}", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, [str(path)])

        assert result.exit_code == ExitCode.SOURCE_ERROR
        assert f"{path}:1:4: error: unexpected '!'" in result.output

    def test_cli_invalid_utf8(self, tmp_path):
        path = tmp_path / "binary.lume"
        path.write_bytes(b"let x = \xff;")

        runner = CliRunner()
        result = runner.invoke(main, [str(path)])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "not valid UTF-8" in result.output

    def test_cli_missing_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "missing.lume")])

        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_cli_verbose(self, source_file):
        runner = CliRunner()
        result = runner.invoke(main, [str(source_file), "-v"])

        assert result.exit_code == 0
        assert "Lexed" in result.output

    def test_cli_crlf_spans_match_file_bytes(self, tmp_path):
        path = tmp_path / "crlf.lume"
        path.write_bytes(b"let a = 1;\r\nlet b = 2;\r\n")
        data = path.read_bytes()

        runner = CliRunner()
        result = runner.invoke(main, [str(path), "--json"])

        assert result.exit_code == 0
        tokens = json.loads(result.output)
        b = tokens[6]
        assert b["value"] == "b"
        assert data[b["start"]:b["end"]] == b"b"
        assert tokens[-1]["start"] == len(data)

    def test_cli_crlf_listing(self, tmp_path):
        path = tmp_path / "crlf.lume"
        path.write_bytes(b"let a = 1;\r\nlet b = 2;\r\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(path)])

        assert result.exit_code == 0
        assert result.output.splitlines()[5].split() == ["12..15", "LET"]

    def test_cli_json_overflowing_float(self, tmp_path):
        path = tmp_path / "big.lume"
        path.write_text("let x = 1e400;", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, [str(path), "--json"])

        assert result.exit_code == 0
        assert "Infinity" not in result.output
        assert json.loads(result.output)[3] == {
            "type": "FLOAT", "value": "inf", "prefix": None, "start": 8, "end": 13,
        }
