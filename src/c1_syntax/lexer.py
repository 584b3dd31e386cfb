"""
C1 Lexer (Tokenizer)
====================

This module implements the scanner for the C1 language and the token
stream cursor the parser reads from.

Token Categories
----------------
- Type keywords: int, float, void, boolean
- Statement keywords: if, return, printf
- Identifiers: function and variable names
- Literals: integers, floats, booleans (true/false)
- Punctuation: ( ) { } ; =
- Operators: + - * / && || == != < > <= >=

Number Formats
--------------
| Format   | Example          | Token       |
|----------|------------------|-------------|
| Integer  | 42               | CONST_INT   |
| Float    | 3.14, .5         | CONST_FLOAT |
| Exponent | 1.5e-3, 2E10     | CONST_FLOAT |

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */

Example Usage
-------------
>>> from c1_syntax.lexer import C1Lexer
>>> source = 'int main() { return 42; }'
>>> for token in C1Lexer(source, "main.c-1").tokenize():
...     print(token)
Token(KW_INT, 'int', 1:1)
Token(IDENTIFIER, 'main', 1:5)
Token(LPAREN, '(', 1:9)
Token(RPAREN, ')', 1:10)
Token(LBRACE, '{', 1:12)
Token(KW_RETURN, 'return', 1:14)
Token(CONST_INT, 42, 1:21)
Token(SEMICOLON, ';', 1:23)
Token(RBRACE, '}', 1:25)
Token(EOF, 1:26)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import string

from c1_syntax.errors import (
    SourceLocation,
    InvalidCharacterError,
    UnterminatedCommentError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class C1TokenType(Enum):
    """
    Token types for the C1 language.

    The vocabulary is closed: the lexer and the parser must agree on
    exactly these names.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of input

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Variable/function names
    CONST_INT = auto()      # 42
    CONST_FLOAT = auto()    # 3.14, .5, 1e10
    CONST_BOOLEAN = auto()  # true, false

    # === Keywords - Type Specifiers ===
    KW_INT = auto()         # int
    KW_FLOAT = auto()       # float
    KW_VOID = auto()        # void
    KW_BOOLEAN = auto()     # boolean

    # === Keywords - Statements ===
    KW_IF = auto()          # if
    KW_RETURN = auto()      # return
    KW_PRINTF = auto()      # printf

    # === Punctuation ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    SEMICOLON = auto()      # ;
    ASSIGN = auto()         # =

    # === Arithmetic Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    ASTERISK = auto()       # *
    SLASH = auto()          # /

    # === Logical Operators ===
    AND = auto()            # &&
    OR = auto()             # ||

    # === Comparison Operators ===
    EQ = auto()             # ==
    NE = auto()             # !=
    LT = auto()             # <
    GT = auto()             # >
    LE = auto()             # <=
    GE = auto()             # >=


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, C1TokenType] = {
    # Type specifiers
    "int": C1TokenType.KW_INT,
    "float": C1TokenType.KW_FLOAT,
    "void": C1TokenType.KW_VOID,
    "boolean": C1TokenType.KW_BOOLEAN,

    # Statements
    "if": C1TokenType.KW_IF,
    "return": C1TokenType.KW_RETURN,
    "printf": C1TokenType.KW_PRINTF,
}

BOOLEAN_LITERALS: dict[str, bool] = {
    "true": True,
    "false": False,
}

TYPE_KEYWORDS = frozenset({
    C1TokenType.KW_INT,
    C1TokenType.KW_FLOAT,
    C1TokenType.KW_VOID,
    C1TokenType.KW_BOOLEAN,
})

RELATIONAL_OPERATORS = frozenset({
    C1TokenType.EQ,
    C1TokenType.NE,
    C1TokenType.LT,
    C1TokenType.GT,
    C1TokenType.LE,
    C1TokenType.GE,
})

# Names used when a token is described in a diagnostic
_LITERAL_NAMES = {
    C1TokenType.CONST_INT: "integer literal",
    C1TokenType.CONST_FLOAT: "float literal",
    C1TokenType.CONST_BOOLEAN: "boolean literal",
    C1TokenType.IDENTIFIER: "identifier",
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class C1Token:
    """
    Represents a single token from C1 source code.

    Attributes:
        type: The C1TokenType classification
        value: Converted literal value (int, float, bool) or the lexeme
        text: The raw source text of the token
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: C1TokenType
    value: str | int | float | bool | None
    text: str
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value is None:
            return f"Token({self.type.name}, {self.line}:{self.column})"
        if isinstance(self.value, str):
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.text}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_relational_operator(self) -> bool:
        """Return True if this token is one of == != < > <= >=."""
        return self.type in RELATIONAL_OPERATORS

    def describe(self) -> str:
        """
        Human readable description for diagnostics.

        Literals and identifiers name their category, everything else
        is shown as its quoted source text.
        """
        if self.type == C1TokenType.EOF:
            return "end of input"
        if self.type in _LITERAL_NAMES:
            return f"{_LITERAL_NAMES[self.type]} '{self.text}'"
        return f"'{self.text}'"


# =============================================================================
# Lexer Implementation
# =============================================================================

class C1Lexer:
    """
    Tokenizes C1 source code.

    Usage:
        lexer = C1Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Tokens are produced lazily, so a lexical error is raised only when
    the consumer asks for the token at the offending position.

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters + "_"

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    # ASCII only
    DIGITS = string.digits

    WHITESPACE = " \t\r\n\f"

    # Operators that are a single character and never a prefix of another
    SINGLE_TOKENS = {
        "(": C1TokenType.LPAREN,
        ")": C1TokenType.RPAREN,
        "{": C1TokenType.LBRACE,
        "}": C1TokenType.RBRACE,
        ";": C1TokenType.SEMICOLON,
        "+": C1TokenType.PLUS,
        "-": C1TokenType.MINUS,
        "*": C1TokenType.ASTERISK,
        "/": C1TokenType.SLASH,
    }

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: The C1 source code to tokenize
            filename: Name of the source file (for error messages)
        """
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1

        # Track line start position for error reporting
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[C1Token]:
        """
        Generate tokens from the source code.

        Yields:
            C1Token objects, always ending with a single EOF token

        Raises:
            C1SyntaxError: If invalid input is encountered
        """
        while True:
            self._skip_whitespace_and_comments()
            if self._at_end():
                break
            yield self._scan_token()

        yield self._make_token(C1TokenType.EOF, None, "")

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line/column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume next character if it matches expected."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        token_type: C1TokenType,
        value: str | int | float | bool | None,
        text: str,
        start_line: Optional[int] = None,
        start_column: Optional[int] = None,
    ) -> C1Token:
        return C1Token(
            type=token_type,
            value=value,
            text=text,
            line=start_line or self._line,
            column=start_column or self._column,
            filename=self.filename,
        )

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in self.WHITESPACE:
                self._advance()
                continue

            if char == "/" and self._peek(1) == "/":
                self._skip_single_line_comment()
                continue

            if char == "/" and self._peek(1) == "*":
                self._skip_multi_line_comment()
                continue

            break

    def _skip_single_line_comment(self) -> None:
        self._advance()
        self._advance()
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _skip_multi_line_comment(self) -> None:
        """
        Skip a multi-line comment (/* ... */).

        Raises:
            UnterminatedCommentError: If comment is not terminated
        """
        start_line = self._line
        start_col = self._column
        source_line = self._get_current_line()

        self._advance()
        self._advance()

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()

        raise UnterminatedCommentError(
            SourceLocation(self.filename, start_line, start_col),
            source_line,
        )

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> C1Token:
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if self._is_digit(char) or (char == "." and self._is_digit(self._peek(1))):
            return self._scan_number(start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> C1Token:
        """
        Scan an identifier, keyword or boolean literal.

        Keywords and the literals true/false are distinguished by
        checking against the keyword tables.
        """
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)

        if name in KEYWORDS:
            return self._make_token(KEYWORDS[name], name, name, start_line, start_column)

        if name in BOOLEAN_LITERALS:
            return self._make_token(
                C1TokenType.CONST_BOOLEAN,
                BOOLEAN_LITERALS[name],
                name,
                start_line,
                start_column,
            )

        return self._make_token(C1TokenType.IDENTIFIER, name, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> C1Token:
        """
        Scan an integer or float literal.

        Handles:
        - Integer: 123
        - Float with fraction: 1.5, .5 (exponent optional)
        - Float without fraction: 1e10 (exponent required)

        A trailing '.' without digits is not part of the number.
        """
        chars = self._scan_digits()
        is_float = False

        if self._peek() == "." and self._is_digit(self._peek(1)):
            chars.append(self._advance())
            chars.extend(self._scan_digits())
            is_float = True

        if self._at_exponent():
            chars.append(self._advance())
            if self._peek() in ("+", "-"):
                chars.append(self._advance())
            chars.extend(self._scan_digits())
            is_float = True

        text = "".join(chars)
        if is_float:
            return self._make_token(
                C1TokenType.CONST_FLOAT, float(text), text, start_line, start_column
            )
        return self._make_token(
            C1TokenType.CONST_INT, int(text), text, start_line, start_column
        )

    def _is_digit(self, char: str) -> bool:
        return char != "" and char in self.DIGITS

    def _scan_digits(self) -> list[str]:
        chars = []
        while self._is_digit(self._peek()):
            chars.append(self._advance())
        return chars

    def _at_exponent(self) -> bool:
        """True if the upcoming characters form [eE][+-]?digit."""
        if self._peek() not in ("e", "E"):
            return False
        if self._is_digit(self._peek(1)):
            return True
        return self._peek(1) in ("+", "-") and self._is_digit(self._peek(2))

    def _scan_operator(self, start_line: int, start_column: int) -> C1Token:
        """
        Scan an operator or punctuation mark.

        '&', '|' and '!' only exist as part of '&&', '||' and '!='.
        """
        char = self._advance()

        def make(token_type: C1TokenType, text: str) -> C1Token:
            return self._make_token(token_type, text, text, start_line, start_column)

        if char in self.SINGLE_TOKENS:
            return make(self.SINGLE_TOKENS[char], char)

        if char == "=":
            if self._match("="):
                return make(C1TokenType.EQ, "==")
            return make(C1TokenType.ASSIGN, "=")

        if char == "<":
            if self._match("="):
                return make(C1TokenType.LE, "<=")
            return make(C1TokenType.LT, "<")

        if char == ">":
            if self._match("="):
                return make(C1TokenType.GE, ">=")
            return make(C1TokenType.GT, ">")

        if char == "!" and self._match("="):
            return make(C1TokenType.NE, "!=")

        if char == "&" and self._match("&"):
            return make(C1TokenType.AND, "&&")

        if char == "|" and self._match("|"):
            return make(C1TokenType.OR, "||")

        hint = None
        if char in ("&", "|"):
            hint = f"did you mean '{char}{char}'?"
        elif char == "!":
            hint = "did you mean '!='?"

        raise InvalidCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
            hint=hint,
        )

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]


# =============================================================================
# Token Stream
# =============================================================================

class TokenStream:
    """
    Forward-only cursor over the tokens of one source text.

    Offers the token at the cursor plus one token of pre-lookahead,
    which is all the C1 grammar ever needs. Tokens are pulled from the
    lexer only when inspected, never more than two ahead.

    At end of input current_token() and peek_token() return None; the
    EOF token of the lexer is never handed out.
    """

    def __init__(self, tokens: Iterator[C1Token], filename: str = "<input>"):
        self.filename = filename
        self._tokens = iter(tokens)
        self._current: Optional[C1Token] = None
        self._next: Optional[C1Token] = None
        self._next_loaded = False
        self._last_line = 1
        self._consumed = 0
        self._current = self._pull()

    @classmethod
    def from_source(cls, source: str, filename: str = "<input>") -> "TokenStream":
        """Create a stream that scans the given source text."""
        return cls(C1Lexer(source, filename).tokenize(), filename)

    def _pull(self) -> Optional[C1Token]:
        token = next(self._tokens, None)
        if token is None or token.type == C1TokenType.EOF:
            return None
        return token

    @property
    def consumed(self) -> int:
        """Number of tokens advanced past so far."""
        return self._consumed

    def current_token(self) -> Optional[C1Token]:
        """The token at the cursor, or None at end of input."""
        return self._current

    def peek_token(self) -> Optional[C1Token]:
        """The token one past the cursor, or None if there is none."""
        if self._current is None:
            return None
        if not self._next_loaded:
            self._next = self._pull()
            self._next_loaded = True
        return self._next

    def advance(self) -> None:
        """Move the cursor forward by one token."""
        if self._current is None:
            return

        self._last_line = self._current.line
        self._consumed += 1

        if self._next_loaded:
            self._current = self._next
            self._next = None
            self._next_loaded = False
        else:
            self._current = self._pull()

    def current_line_number(self) -> int:
        """Line of the token at the cursor, or the last known line at the end."""
        if self._current is not None:
            return self._current.line
        return self._last_line

    def current_location(self) -> SourceLocation:
        """Location of the cursor; column 0 at end of input."""
        if self._current is not None:
            return self._current.location
        return SourceLocation(self.filename, self._last_line, 0)
