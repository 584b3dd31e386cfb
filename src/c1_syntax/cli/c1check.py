"""
c1check - C1 Syntax Checker Command-Line Interface
==================================================

This module implements the command-line interface for the C1 syntax
checker.

Usage Examples
--------------
Check a program:
    $ c1check program.c-1

Check several programs, print only errors:
    $ c1check -q *.c-1

Dump the token stream before checking:
    $ c1check --tokens program.c-1

Verbose mode:
    $ c1check -v program.c-1
"""

import codecs
import logging
import sys
from pathlib import Path

import click

from c1_syntax import __version__
from c1_syntax.checker import SyntaxChecker, CheckerOptions
from c1_syntax.errors import C1SyntaxError
from c1_syntax.lexer import C1Lexer
from c1_syntax.cli.errors import ExitCode, handle_cli_exception


def _validate_encoding(ctx: click.Context, param: click.Parameter, value: str) -> str:
    """Reject encodings Python does not know before any file is read."""
    try:
        codecs.lookup(value)
    except LookupError:
        raise click.BadParameter(f"unknown encoding: {value}")
    return value


def _dump_tokens(input_file: Path, encoding: str) -> None:
    """Print one token per line, stopping quietly at a lexical error."""
    source = input_file.read_text(encoding=encoding)
    try:
        for token in C1Lexer(source, str(input_file)).tokenize():
            click.echo(repr(token))
    except C1SyntaxError:
        # Reported by the syntax check that follows
        pass


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-t", "--tokens",
    is_flag=True,
    help="Print the token stream of each file before checking it",
)
@click.option(
    "-q", "--quiet",
    is_flag=True,
    help="Only report files with errors",
)
@click.option(
    "--encoding",
    default="utf-8",
    show_default=True,
    callback=_validate_encoding,
    help="Source file encoding",
)
@click.option(
    "--no-context",
    is_flag=True,
    help="Do not quote the offending source line in error messages",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="c1check")
def main(
    input_files: tuple[Path, ...],
    tokens: bool,
    quiet: bool,
    encoding: str,
    no_context: bool,
    verbose: bool,
) -> None:
    """
    Check C1 source files for syntax errors.

    INPUT_FILES are the C1 source files (.c-1) to check.

    Each file is reported as OK or with its first syntax error. The
    exit status is 0 when every file is valid, 1 if any file has a
    syntax error and 2 if any file could not be read.

    \b
    Examples:
        c1check program.c-1          # Check one file
        c1check -q *.c-1             # Only print errors
        c1check -t program.c-1       # Dump tokens first
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
        )

    options = CheckerOptions(
        encoding=encoding,
        source_context=not no_context,
    )
    checker = SyntaxChecker(options)
    exit_code = ExitCode.SUCCESS

    for input_file in input_files:
        try:
            if verbose:
                click.echo(f"Checking {input_file}...")

            if tokens:
                _dump_tokens(input_file, encoding)

            result = checker.check_file(input_file)

        except (OSError, UnicodeDecodeError) as e:
            # Unreadable file: report it and go on with the others
            click.echo(f"Error: {input_file}: {e}", err=True)
            exit_code = max(exit_code, ExitCode.INVALID_ARGS)
            continue
        except Exception as e:
            handle_cli_exception(e, verbose)

        if result.success:
            if not quiet:
                click.echo(f"{input_file}: OK")
            if verbose:
                click.echo(f"Parsed {result.token_count} tokens")
        else:
            click.echo(result.message, err=True)
            exit_code = max(exit_code, ExitCode.SYNTAX_ERROR)

    if exit_code != ExitCode.SUCCESS:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
