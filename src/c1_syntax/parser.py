"""
C1 Recursive Descent Parser
===========================

This module implements a recursive descent recognizer for the C1
language. It reads tokens from a TokenStream and decides whether they
form a valid program. No syntax tree is built: success is the absence
of an exception, failure is a C1SyntaxError describing the first token
that does not fit the grammar.

Grammar (EBNF)
--------------
program            ::= functiondefinition*
functiondefinition ::= type IDENTIFIER '(' ')' '{' statementlist '}'
type               ::= 'int' | 'float' | 'void' | 'boolean'
statementlist      ::= block*
block              ::= '{' statementlist '}' | statement
statement          ::= ifstatement
                     | 'return' assignment? ';'
                     | 'printf' '(' assignment ')' ';'
                     | statassignment ';'
                     | functioncall ';'
ifstatement        ::= 'if' '(' assignment ')' block
statassignment     ::= IDENTIFIER '=' assignment
functioncall       ::= IDENTIFIER '(' ')'
assignment         ::= IDENTIFIER '=' assignment | expr
expr               ::= simpexpr (relop simpexpr)?
relop              ::= '==' | '!=' | '<' | '>' | '<=' | '>='
simpexpr           ::= '-'? term (('+' | '-' | '||') term)*
term               ::= factor (('*' | '/' | '&&') factor)*
factor             ::= functioncall | IDENTIFIER | INT | FLOAT | BOOLEAN
                     | '(' assignment ')'

Lookahead
---------
The grammar is not LL(1). Three decisions look one token past the
current one:

| Position             | Current    | Next | Choice                |
|----------------------|------------|------|-----------------------|
| statement            | IDENTIFIER | '='  | statassignment        |
| statement            | IDENTIFIER | '('  | functioncall          |
| assignment           | IDENTIFIER | '='  | nested assignment     |
| factor               | IDENTIFIER | '('  | functioncall          |

Example Usage
-------------
>>> from c1_syntax.parser import parse
>>> parse('int main() { a = b = 1; return a; }')
>>> parse('int main() { a = 1 }')
Traceback (most recent call last):
    ...
c1_syntax.errors.UnexpectedTokenError: <input>:1:20: error: expected ';', got '}', line 1
"""

import logging
from typing import Optional

from c1_syntax.lexer import (
    C1Token,
    C1TokenType,
    TokenStream,
    TYPE_KEYWORDS,
)
from c1_syntax.errors import UnexpectedTokenError

logger = logging.getLogger(__name__)


# Operators of the two precedence levels handled by loops
ADDITIVE_OPERATORS = frozenset({
    C1TokenType.PLUS,
    C1TokenType.MINUS,
    C1TokenType.OR,
})

MULTIPLICATIVE_OPERATORS = frozenset({
    C1TokenType.ASTERISK,
    C1TokenType.SLASH,
    C1TokenType.AND,
})

LITERALS = frozenset({
    C1TokenType.CONST_INT,
    C1TokenType.CONST_FLOAT,
    C1TokenType.CONST_BOOLEAN,
})

STATEMENT_START = "if, return, printf, assignment or function call"


class C1Parser:
    """
    Recursive descent recognizer for C1.

    Each grammar rule maps to one method that consumes exactly one
    instance of its production and leaves the cursor on the first token
    after it. The first mismatch raises and aborts the whole parse; the
    parser performs no error recovery.

    A parser instance is meant for a single parse() call.

    Attributes:
        stream: Token cursor the parser reads from
        source_lines: Original source lines for error context
    """

    def __init__(
        self,
        stream: TokenStream,
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            stream: Token stream positioned at the start of the program
            source_lines: Original source lines, used to quote the
                offending line in error messages
        """
        self.stream = stream
        self.source_lines = source_lines or []

    def parse(self) -> None:
        """
        Recognize a complete program.

        Raises:
            C1SyntaxError: At the first token that violates the grammar
        """
        self._program()
        logger.debug(
            f"{self.stream.filename}: parsed {self.stream.consumed} tokens"
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _current(self) -> Optional[C1Token]:
        return self.stream.current_token()

    def _peek(self) -> Optional[C1Token]:
        return self.stream.peek_token()

    def _check(self, *types: C1TokenType) -> bool:
        """Check if the current token is one of the given types."""
        token = self._current()
        return token is not None and token.type in types

    def _check_next(self, *types: C1TokenType) -> bool:
        """Check if the token after the current one is one of the given types."""
        token = self._peek()
        return token is not None and token.type in types

    def _expect(
        self,
        expected: C1TokenType | frozenset[C1TokenType],
        description: str,
    ) -> C1Token:
        """
        Expect and consume a token of the given type(s).

        Args:
            expected: A token type, or a set of acceptable types
            description: How the expected construct is named in errors

        Returns:
            The consumed token

        Raises:
            UnexpectedTokenError: If the current token does not match
        """
        token = self._current()
        types = expected if isinstance(expected, frozenset) else (expected,)

        if token is None or token.type not in types:
            raise self._error(description)

        self.stream.advance()
        return token

    def _error(self, expected: str) -> UnexpectedTokenError:
        """Build an error for the token at the cursor."""
        token = self._current()
        found = token.describe() if token is not None else "end of input"
        location = self.stream.current_location()

        return UnexpectedTokenError(
            expected,
            found,
            location=location,
            source_line=self._get_source_line(location.line),
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Program Structure
    # =========================================================================

    def _program(self) -> None:
        """program ::= functiondefinition*"""
        while self._current() is not None:
            self._function_definition()

    def _function_definition(self) -> None:
        """functiondefinition ::= type IDENTIFIER '(' ')' '{' statementlist '}'"""
        self._type()
        name = self._expect(C1TokenType.IDENTIFIER, "function name")
        self._expect(C1TokenType.LPAREN, "'('")
        self._expect(C1TokenType.RPAREN, "')'")
        self._expect(C1TokenType.LBRACE, "'{'")
        self._statement_list()
        self._expect(C1TokenType.RBRACE, "'}'")
        logger.debug(f"{name.location}: function '{name.value}'")

    def _type(self) -> None:
        self._expect(TYPE_KEYWORDS, "type")

    def _statement_list(self) -> None:
        """
        statementlist ::= block*

        Stops in front of the '}' that closes the enclosing block; the
        caller consumes it. Running out of input here means that '}' is
        missing.
        """
        while not self._check(C1TokenType.RBRACE):
            if self._current() is None:
                raise self._error("closing bracket '}'")
            self._block()

    def _block(self) -> None:
        """block ::= '{' statementlist '}' | statement"""
        if self._check(C1TokenType.LBRACE):
            self.stream.advance()
            self._statement_list()
            self._expect(C1TokenType.RBRACE, "'}'")
        else:
            self._statement()

    # =========================================================================
    # Statements
    # =========================================================================

    def _statement(self) -> None:
        """Dispatch on the first token of a statement."""
        token = self._current()
        if token is None:
            raise self._error(STATEMENT_START)

        if token.type == C1TokenType.KW_IF:
            self._if_statement()
        elif token.type == C1TokenType.KW_RETURN:
            self._return_statement()
            self._expect(C1TokenType.SEMICOLON, "';'")
        elif token.type == C1TokenType.KW_PRINTF:
            self._printf_statement()
            self._expect(C1TokenType.SEMICOLON, "';'")
        elif token.type == C1TokenType.IDENTIFIER:
            # Pre-lookahead decides between assignment and call
            if self._check_next(C1TokenType.ASSIGN):
                self._stat_assignment()
            elif self._check_next(C1TokenType.LPAREN):
                self._function_call()
            else:
                raise self._error_after_identifier()
            self._expect(C1TokenType.SEMICOLON, "';'")
        else:
            raise self._error(STATEMENT_START)

    def _error_after_identifier(self) -> UnexpectedTokenError:
        """
        Error for an identifier followed by neither '=' nor '('.

        Reported at the token after the identifier, since that is the
        one that does not fit.
        """
        self.stream.advance()
        return self._error("assignment or function call")

    def _if_statement(self) -> None:
        """ifstatement ::= 'if' '(' assignment ')' block"""
        self._expect(C1TokenType.KW_IF, "'if'")
        self._expect(C1TokenType.LPAREN, "'('")
        self._assignment()
        self._expect(C1TokenType.RPAREN, "')'")
        self._block()

    def _return_statement(self) -> None:
        """'return' assignment?  (the ';' is consumed by the caller)"""
        self._expect(C1TokenType.KW_RETURN, "'return'")
        if not self._check(C1TokenType.SEMICOLON):
            self._assignment()

    def _printf_statement(self) -> None:
        """'printf' '(' assignment ')'  (the ';' is consumed by the caller)"""
        self._expect(C1TokenType.KW_PRINTF, "'printf'")
        self._expect(C1TokenType.LPAREN, "'('")
        self._assignment()
        self._expect(C1TokenType.RPAREN, "')'")

    def _stat_assignment(self) -> None:
        """statassignment ::= IDENTIFIER '=' assignment"""
        self._expect(C1TokenType.IDENTIFIER, "variable name")
        self._expect(C1TokenType.ASSIGN, "'='")
        self._assignment()

    def _function_call(self) -> None:
        """functioncall ::= IDENTIFIER '(' ')'"""
        self._expect(C1TokenType.IDENTIFIER, "function name")
        self._expect(C1TokenType.LPAREN, "'('")
        self._expect(C1TokenType.RPAREN, "')'")

    # =========================================================================
    # Expressions
    # =========================================================================

    def _assignment(self) -> None:
        """
        assignment ::= IDENTIFIER '=' assignment | expr

        Right-recursive, so 'a = b = c' nests. Anything that does not
        start with IDENTIFIER '=' is an ordinary expression.
        """
        if self._check(C1TokenType.IDENTIFIER) and self._check_next(C1TokenType.ASSIGN):
            self.stream.advance()
            self.stream.advance()
            self._assignment()
        else:
            self._expr()

    def _expr(self) -> None:
        """expr ::= simpexpr (relop simpexpr)?  (not chainable)"""
        self._simp_expr()
        token = self._current()
        if token is not None and token.is_relational_operator():
            self.stream.advance()
            self._simp_expr()

    def _simp_expr(self) -> None:
        """simpexpr ::= '-'? term (('+' | '-' | '||') term)*"""
        if self._check(C1TokenType.MINUS):
            self.stream.advance()
        self._term()

        while self._check(*ADDITIVE_OPERATORS):
            self.stream.advance()
            self._term()

    def _term(self) -> None:
        """term ::= factor (('*' | '/' | '&&') factor)*"""
        self._factor()

        while self._check(*MULTIPLICATIVE_OPERATORS):
            self.stream.advance()
            self._factor()

    def _factor(self) -> None:
        """factor ::= functioncall | IDENTIFIER | literal | '(' assignment ')'"""
        token = self._current()
        if token is None:
            raise self._error("factor")

        if token.type == C1TokenType.IDENTIFIER and self._check_next(C1TokenType.LPAREN):
            self._function_call()
        elif token.type == C1TokenType.IDENTIFIER or token.type in LITERALS:
            self.stream.advance()
        elif token.type == C1TokenType.LPAREN:
            self.stream.advance()
            self._assignment()
            self._expect(C1TokenType.RPAREN, "')'")
        else:
            raise self._error("factor")


# =============================================================================
# Convenience Functions
# =============================================================================

def parse(source: str, filename: str = "<input>") -> None:
    """
    Check that source is a syntactically valid C1 program.

    Each call scans and parses with its own stream; nothing is shared
    between calls.

    Args:
        source: The C1 source code
        filename: Source filename for error messages

    Raises:
        C1SyntaxError: At the first syntax error
    """
    stream = TokenStream.from_source(source, filename)
    C1Parser(stream, source.splitlines()).parse()
