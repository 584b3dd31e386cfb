"""
C1 Syntax Checker Main Module
=============================

This module provides the main interface of the package. It runs the
two stages over one source text and turns the outcome into a value:

    Source → Lex → Parse → CheckResult

Usage
-----
Command line:
    $ c1check program.c-1

Programmatic:
    >>> from c1_syntax import check_source
    >>> result = check_source('int main() { return 0; }')
    >>> result.success
    True

Error Handling
--------------
A syntax error is an expected outcome, not a fault: check_source()
catches C1SyntaxError and reports it through CheckResult. Any other
exception propagates to the caller.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from c1_syntax.lexer import C1Lexer, C1Token, TokenStream
from c1_syntax.parser import C1Parser
from c1_syntax.errors import C1SyntaxError

logger = logging.getLogger(__name__)


@dataclass
class CheckerOptions:
    """
    Checker configuration options.

    Attributes:
        encoding: Text encoding used when reading source files
        source_context: Quote the offending source line (with a caret
            under the error column) in error messages
    """
    encoding: str = "utf-8"
    source_context: bool = True


@dataclass
class CheckResult:
    """
    Outcome of checking one source text.

    Attributes:
        filename: Name the source was checked under
        success: True if the source is a valid C1 program
        error: The first syntax error, when success is False
        token_count: Tokens consumed before the parse ended
    """
    filename: str = "<input>"
    success: bool = False
    error: Optional[C1SyntaxError] = None
    token_count: int = 0

    @property
    def message(self) -> Optional[str]:
        """Formatted error message, or None on success."""
        if self.error is None:
            return None
        return str(self.error)

    def __bool__(self) -> bool:
        return self.success


class SyntaxChecker:
    """
    Syntax checker for C1 programs.

    Example:
        checker = SyntaxChecker()
        result = checker.check_file("program.c-1")
        if not result:
            print(result.message)

    Attributes:
        options: Checker configuration options
    """

    def __init__(self, options: Optional[CheckerOptions] = None):
        self.options = options or CheckerOptions()

    def check_source(self, source: str, filename: str = "<input>") -> CheckResult:
        """
        Check C1 source code.

        Args:
            source: C1 source code string
            filename: Source filename for error messages

        Returns:
            CheckResult describing success or the first syntax error
        """
        result = CheckResult(filename=filename)
        source_lines = source.splitlines() if self.options.source_context else None
        stream = None

        try:
            stream = TokenStream.from_source(source, filename)
            C1Parser(stream, source_lines).parse()
            result.success = True
        except C1SyntaxError as e:
            if not self.options.source_context:
                e.with_source_line(None)
            result.error = e

        if stream is not None:
            result.token_count = stream.consumed

        if result.success:
            logger.debug(f"{filename}: OK ({result.token_count} tokens)")
        else:
            logger.debug(f"{filename}: rejected at line {result.error.line}")

        return result

    def check_file(self, filepath: str | Path) -> CheckResult:
        """
        Check a C1 source file.

        Args:
            filepath: Path to the source file

        Returns:
            CheckResult describing success or the first syntax error

        Raises:
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        logger.debug(f"Checking {path}")
        source = path.read_text(encoding=self.options.encoding)
        return self.check_source(source, str(path))

    def tokenize_source(self, source: str, filename: str = "<input>") -> list[C1Token]:
        """
        Tokenize source without parsing it.

        Returns:
            All tokens, including the trailing EOF token

        Raises:
            C1SyntaxError: If the source contains a lexical error
        """
        return list(C1Lexer(source, filename).tokenize())


# =============================================================================
# Convenience Functions
# =============================================================================

def check_source(source: str, filename: str = "<input>") -> CheckResult:
    """
    Check C1 source with default options.

    Args:
        source: C1 source code
        filename: Source filename for error messages

    Returns:
        CheckResult describing success or the first syntax error
    """
    return SyntaxChecker().check_source(source, filename)
