"""
C1 Command-Line Interface
=========================

- **c1check**: check C1 source files for syntax errors

The tool is a Click-based CLI application with help and consistent
exit codes (see c1_syntax.cli.errors).
"""

__all__ = ["c1check"]
