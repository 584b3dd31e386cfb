"""
C1 Syntax Checker
=================

This package implements a syntax recognizer for C1, a small C-like
language used for teaching compiler construction. It decides whether a
source text is a valid C1 program and, if it is not, reports the first
violation with the expected construct and its line number.

Main Components
---------------
- **lexer**: Scanner and the two-token lookahead TokenStream
- **parser**: Recursive descent recognizer, one method per grammar rule
- **checker**: SyntaxChecker facade returning a CheckResult
- **cli**: The c1check command-line tool

Language Subset
---------------
Supported:
- Function definitions without parameters (int, float, void, boolean)
- Nested blocks, if (without else), return, printf
- Assignments (chained), function calls
- Arithmetic, relational and boolean expressions, unary minus
- Integer, float and boolean literals

Not supported:
- Parameters, variable declarations, arrays, strings, user types

Quick Start
-----------
    >>> from c1_syntax import parse, check_source
    >>> parse('int main() { return 0; }')
    >>> check_source('int main() { a = 1 }').success
    False

Or use the command-line tool:
    $ c1check program.c-1
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from c1_syntax.errors import (
    C1Error,
    C1SyntaxError,
    UnexpectedTokenError,
    InvalidCharacterError,
    UnterminatedCommentError,
    SourceLocation,
)
from c1_syntax.lexer import C1Lexer, C1Token, C1TokenType, TokenStream
from c1_syntax.parser import C1Parser, parse
from c1_syntax.checker import (
    SyntaxChecker,
    CheckerOptions,
    CheckResult,
    check_source,
)

__all__ = [
    "__version__",
    # Errors
    "C1Error",
    "C1SyntaxError",
    "UnexpectedTokenError",
    "InvalidCharacterError",
    "UnterminatedCommentError",
    "SourceLocation",
    # Lexer
    "C1Lexer",
    "C1Token",
    "C1TokenType",
    "TokenStream",
    # Parser
    "C1Parser",
    "parse",
    # Checker
    "SyntaxChecker",
    "CheckerOptions",
    "CheckResult",
    "check_source",
]
