"""
Dummy language Parser.

A recursive descent parser that transforms a token stream into the
immutable syntax tree consumed by the checkers. It also hosts the
tree-building entry points `transform` (from a path) and
`transform_source` (from a string).
"""

from pathlib import Path
from typing import Optional, Union

from dummylang.compiler.ast_nodes import (
    Assignment,
    Block,
    BooleanConst,
    Expression,
    File,
    FunctionCall,
    FunctionDeclaration,
    IfStatement,
    IntegerConst,
    ReturnStatement,
    Statement,
    VariableAccess,
    VariableDeclaration,
)
from dummylang.compiler.lexer import Lexer
from dummylang.compiler.tokens import Token, TokenType
from dummylang.utils.errors import ParserError, SourceLocation


class Parser:
    """
    Recursive descent parser for Dummy programs.

    Grammar:
        file       := function*
        function   := 'fun' IDENT '(' [IDENT (',' IDENT)*] ')' block
        block      := '{' (statement [';'])* '}'
        statement  := 'var' IDENT ['=' expression]
                    | 'if' '(' expression ')' block ['else' block]
                    | 'return' [expression]
                    | IDENT '=' expression
                    | expression
        expression := IDENT '(' [expression (',' expression)*] ')'
                    | IDENT | INTEGER | 'true' | 'false' | '(' expression ')'

    Usage:
        parser = Parser(tokens)
        tree = parser.parse()
    """

    def __init__(self, tokens: list[Token], source: str = "",
                 filename: str = "<input>") -> None:
        """
        Initialize the parser.

        Args:
            tokens: List of tokens from the lexer
            source: Optional source code for error context
            filename: Optional filename for error reporting
        """
        self.tokens = tokens
        self.pos = 0
        self._source_lines: list[str] = source.splitlines() if source else []
        self._filename = filename

    @property
    def _current(self) -> Token:
        """Get the current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    @property
    def _previous(self) -> Token:
        """Get the previous token."""
        return self.tokens[self.pos - 1] if self.pos > 0 else self.tokens[0]

    def _peek(self, offset: int = 1) -> Token:
        """Peek at a token ahead of the current position."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[pos]

    def _is_at_end(self) -> bool:
        """Check if we've reached the end of tokens."""
        return self._current.type == TokenType.EOF

    def _check(self, *types: TokenType) -> bool:
        """Check if the current token is one of the given types."""
        return self._current.type in types

    def _advance(self) -> Token:
        """Consume and return the current token."""
        token = self._current
        if not self._is_at_end():
            self.pos += 1
        return token

    def _match(self, *types: TokenType) -> bool:
        """Consume current token if it matches one of the given types."""
        if self._check(*types):
            self._advance()
            return True
        return False

    def _expect(self, token_type: TokenType, message: str) -> Token:
        """Consume current token if it matches, else raise error."""
        if self._check(token_type):
            return self._advance()
        raise self._error(message)

    def _error(self, message: str, location: Optional[SourceLocation] = None) -> ParserError:
        """Create a parser error with location and source line."""
        token = self._current
        loc = location or token.location
        found = "end of file" if token.type == TokenType.EOF else repr(str(token.value))
        source_line = None
        if self._source_lines and 1 <= loc.line <= len(self._source_lines):
            source_line = self._source_lines[loc.line - 1]
        return ParserError(f"{message}, found {found}", loc, source_line)

    # -------------------------------------------------------------------------
    # File and Function Parsing
    # -------------------------------------------------------------------------

    def parse(self) -> File:
        """
        Parse the entire file.

        Returns:
            The root File node.
        """
        loc = self._current.location
        functions: list[FunctionDeclaration] = []

        while not self._is_at_end():
            functions.append(self._parse_function())

        return File(tuple(functions), location=loc)

    def _parse_function(self) -> FunctionDeclaration:
        """Parse a function declaration: fun name(a, b) { ... }"""
        loc = self._expect(TokenType.FUN, "Expected 'fun' to start a function declaration").location
        name = self._expect(TokenType.IDENTIFIER, "Expected function name").value
        self._expect(TokenType.LPAREN, "Expected '(' after function name")
        parameters = self._parse_parameters()
        self._expect(TokenType.RPAREN, "Expected ')' after parameters")
        body = self._parse_block()

        return FunctionDeclaration(
            name=name,
            parameters=tuple(parameters),
            body=body,
            location=loc,
        )

    def _parse_parameters(self) -> list[str]:
        """Parse function parameter names."""
        params: list[str] = []

        if self._check(TokenType.RPAREN):
            return params

        while True:
            params.append(self._expect(TokenType.IDENTIFIER, "Expected parameter name").value)
            if not self._match(TokenType.COMMA):
                break

        return params

    def _parse_block(self) -> Block:
        """
        Parse a block of statements enclosed in braces.

        Handles:
            { stmt1; stmt2 ... }
        """
        open_loc = self._current.location
        self._expect(TokenType.LBRACE, "Expected '{' to start block")

        statements: list[Statement] = []
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            statements.append(self._parse_statement())
            # Optional semicolons between statements
            while self._match(TokenType.SEMICOLON):
                pass

        if self._check(TokenType.EOF):
            raise self._error(
                f"Unclosed delimiter '{{' opened on line {open_loc.line}"
            )

        self._expect(TokenType.RBRACE, "Expected '}' to end block")
        return Block(tuple(statements), location=open_loc)

    # -------------------------------------------------------------------------
    # Statement Parsing
    # -------------------------------------------------------------------------

    def _parse_statement(self) -> Statement:
        """Parse a single statement."""
        if self._check(TokenType.VAR):
            return self._parse_variable_declaration()
        if self._check(TokenType.IF):
            return self._parse_if()
        if self._check(TokenType.RETURN):
            return self._parse_return()
        if self._check(TokenType.IDENTIFIER) and self._peek().type == TokenType.ASSIGN:
            return self._parse_assignment()

        return self._parse_expression()

    def _parse_variable_declaration(self) -> VariableDeclaration:
        """Parse: var name [= expression]"""
        loc = self._advance().location  # consume 'var'
        name = self._expect(TokenType.IDENTIFIER, "Expected variable name after 'var'").value

        initializer: Optional[Expression] = None
        if self._match(TokenType.ASSIGN):
            initializer = self._parse_expression()

        return VariableDeclaration(name=name, initializer=initializer, location=loc)

    def _parse_if(self) -> IfStatement:
        """
        Parse an if statement with an optional else clause.

        Handles:
            if (cond) { body }
            if (cond) { body } else { body }
        """
        loc = self._advance().location  # consume 'if'

        self._expect(TokenType.LPAREN, "Expected '(' after 'if'")
        condition = self._parse_expression()
        self._expect(TokenType.RPAREN, "Expected ')' after condition")
        then_block = self._parse_block()

        else_block: Optional[Block] = None
        if self._match(TokenType.ELSE):
            else_block = self._parse_block()

        return IfStatement(
            condition=condition,
            then_block=then_block,
            else_block=else_block,
            location=loc,
        )

    def _parse_return(self) -> ReturnStatement:
        """Parse a return statement; the value must start on the same line."""
        token = self._advance()  # consume 'return'

        result: Optional[Expression] = None
        if self._current.starts_expression and self._current.line == token.line:
            result = self._parse_expression()

        return ReturnStatement(result=result, location=token.location)

    def _parse_assignment(self) -> Assignment:
        """Parse: name = expression"""
        name_token = self._advance()
        self._advance()  # consume '='
        rhs = self._parse_expression()
        return Assignment(variable=name_token.value, rhs=rhs, location=name_token.location)

    # -------------------------------------------------------------------------
    # Expression Parsing
    # -------------------------------------------------------------------------

    def _parse_expression(self) -> Expression:
        """Parse an expression (call, variable, literal or parenthesized)."""
        loc = self._current.location

        if self._match(TokenType.IDENTIFIER):
            name = self._previous.value
            if self._match(TokenType.LPAREN):
                arguments = self._parse_arguments()
                self._expect(TokenType.RPAREN, f"Expected ')' to close call of '{name}'")
                return FunctionCall(function=name, arguments=tuple(arguments), location=loc)
            return VariableAccess(name=name, location=loc)

        if self._match(TokenType.INTEGER):
            return IntegerConst(value=self._previous.value, location=loc)

        if self._match(TokenType.TRUE, TokenType.FALSE):
            return BooleanConst(value=self._previous.value, location=loc)

        if self._match(TokenType.LPAREN):
            inner = self._parse_expression()
            self._expect(TokenType.RPAREN, "Expected ')' after expression")
            return inner

        raise self._error("Expected expression")

    def _parse_arguments(self) -> list[Expression]:
        """Parse call arguments up to (not including) the closing paren."""
        arguments: list[Expression] = []

        if self._check(TokenType.RPAREN):
            return arguments

        while True:
            arguments.append(self._parse_expression())
            if not self._match(TokenType.COMMA):
                break

        return arguments


def transform_source(source: str, filename: str = "<input>") -> File:
    """
    Build the syntax tree of a source string.

    Raises:
        LexerError: On an invalid character or unterminated comment
        ParserError: On the first syntax error
    """
    tokens = Lexer(source, filename).tokenize()
    return Parser(tokens, source, filename).parse()


def transform(path: Union[str, Path]) -> File:
    """
    Build the syntax tree of a source file.

    Raises:
        FileNotFoundError: If the path does not exist
        LexerError: On an invalid character or unterminated comment
        ParserError: On the first syntax error
    """
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    return transform_source(source, str(path))
