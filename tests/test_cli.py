"""
Tests for c1check - Command-Line Interface
==========================================

These tests verify output and exit codes of the c1check tool.
"""

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from c1_syntax.cli.c1check import main
from c1_syntax.cli.errors import ExitCode, handle_cli_exception
from c1_syntax.errors import C1SyntaxError


DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def good_file(tmp_path):
    path = tmp_path / "good.c-1"
    path.write_text("int main() { return 0; }\n")
    return path


@pytest.fixture
def bad_file(tmp_path):
    path = tmp_path / "bad.c-1"
    path.write_text("int main() {\n    a = 1\n}\n")
    return path


# =============================================================================
# Basic Invocation
# =============================================================================

class TestCheckCLI:
    """Tests for the c1check command."""

    def test_cli_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Check C1 source files" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "c1check" in result.output

    def test_no_arguments(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "nope.c-1")])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_valid_file(self, runner, good_file):
        result = runner.invoke(main, [str(good_file)])
        assert result.exit_code == ExitCode.SUCCESS
        assert f"{good_file}: OK" in result.output

    def test_sample_file(self, runner):
        result = runner.invoke(main, [str(DATA_DIR / "beispiel.c-1")])
        assert result.exit_code == ExitCode.SUCCESS

    def test_invalid_file(self, runner, bad_file):
        result = runner.invoke(main, [str(bad_file)])
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "expected ';', got '}', line 3" in result.output

    def test_mixed_files(self, runner, good_file, bad_file):
        """Every file is checked; one failure fails the run."""
        result = runner.invoke(main, [str(bad_file), str(good_file)])
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert f"{good_file}: OK" in result.output

    def test_unknown_encoding(self, runner, good_file):
        result = runner.invoke(main, ["--encoding", "bogus", str(good_file)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "unknown encoding: bogus" in result.output

    def test_other_encoding(self, runner, tmp_path):
        path = tmp_path / "latin.c-1"
        path.write_bytes(b"// gr\xfc\xdfe\nint main() { return 0; }\n")
        result = runner.invoke(main, ["--encoding", "latin-1", str(path)])
        assert result.exit_code == ExitCode.SUCCESS

    def test_undecodable_file_does_not_stop_run(self, runner, tmp_path, good_file):
        """An unreadable file is reported and the remaining files are checked."""
        path = tmp_path / "latin.c-1"
        path.write_bytes(b"// gr\xfc\xdfe\nint main() { return 0; }\n")
        result = runner.invoke(main, [str(path), str(good_file)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert f"Error: {path}" in result.output
        assert f"{good_file}: OK" in result.output

    def test_unreadable_file_outranks_syntax_error(self, runner, tmp_path, bad_file):
        path = tmp_path / "latin.c-1"
        path.write_bytes(b"\xff\xfe")
        result = runner.invoke(main, [str(bad_file), str(path)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "expected ';'" in result.output

    def test_quiet(self, runner, good_file):
        result = runner.invoke(main, ["-q", str(good_file)])
        assert result.exit_code == ExitCode.SUCCESS
        assert "OK" not in result.output

    def test_no_context(self, runner, bad_file):
        result = runner.invoke(main, ["--no-context", str(bad_file)])
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "^" not in result.output

    def test_tokens(self, runner, good_file):
        result = runner.invoke(main, ["--tokens", str(good_file)])
        assert result.exit_code == ExitCode.SUCCESS
        assert "Token(KW_INT, 'int', 1:1)" in result.output
        assert "Token(EOF" in result.output

    def test_tokens_with_lexical_error(self, runner, tmp_path):
        path = tmp_path / "lex.c-1"
        path.write_text("int main() { x = 1 @ 2; }")
        result = runner.invoke(main, ["-t", str(path)])
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "Token(CONST_INT, 1, 1:18)" in result.output
        assert "invalid character '@'" in result.output

    def test_verbose(self, runner, good_file):
        result = runner.invoke(main, ["-v", str(good_file)])
        assert result.exit_code == ExitCode.SUCCESS
        assert f"Checking {good_file}" in result.output
        assert "Parsed 9 tokens" in result.output


# =============================================================================
# Exception Handling
# =============================================================================

class TestHandleCliException:
    """Tests for handle_cli_exception()."""

    def test_syntax_error(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(C1SyntaxError("broken"))
        assert exc_info.value.code == ExitCode.SYNTAX_ERROR

    def test_bad_parameter(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(click.BadParameter("nope"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS

    def test_file_not_found(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(FileNotFoundError("gone"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS

    def test_unknown_encoding(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(LookupError("unknown encoding: bogus"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS

    def test_internal_error(self):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(RuntimeError("boom"))
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR
