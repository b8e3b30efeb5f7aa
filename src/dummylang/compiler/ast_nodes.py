"""
Abstract Syntax Tree (AST) node definitions for the Dummy language.

This module defines the node types of a parsed Dummy program: a file of
function declarations whose bodies are blocks of statements. Each node is
immutable and carries source location information for diagnostics. The
checkers only ever read these nodes; all derived state lives in the
checkers themselves.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Union

from dummylang.utils.errors import SourceLocation


class ASTNode(ABC):
    """Base class for all AST nodes."""

    location: Optional[SourceLocation]

    @property
    def line(self) -> int:
        """1-indexed source line of this node, 0 when unknown."""
        return self.location.line if self.location else 0

    @abstractmethod
    def accept(self, visitor: "ASTVisitor") -> Any:
        """Accept a visitor for tree traversal."""
        pass


class ASTVisitor(ABC):
    """
    Visitor pattern base class for AST traversal.

    Implement this to create custom AST processors (checkers, printers).
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to the appropriate visit method."""
        return node.accept(self)


# -----------------------------------------------------------------------------
# Statements and Expressions
# -----------------------------------------------------------------------------


class Statement(ASTNode):
    """Base class for statements."""

    pass


class Expression(Statement):
    """
    Base class for expressions.

    Expressions are statements too: a bare call or variable read may stand
    on its own line inside a block.
    """

    pass


@dataclass(frozen=True, slots=True)
class VariableAccess(Expression):
    """
    A read of a variable.

    Example:
        x
    """

    name: str
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_variable_access(self)


@dataclass(frozen=True, slots=True)
class FunctionCall(Expression):
    """
    A call of a function by name.

    Example:
        foo(x, bar(1))
    """

    function: str
    arguments: tuple[Expression, ...] = ()
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function_call(self)


@dataclass(frozen=True, slots=True)
class IntegerConst(Expression):
    """An integer literal: 42"""

    value: int
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_integer_const(self)


@dataclass(frozen=True, slots=True)
class BooleanConst(Expression):
    """A boolean literal: true, false"""

    value: bool
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_boolean_const(self)


@dataclass(frozen=True, slots=True)
class Block(ASTNode):
    """
    A block of statements enclosed in braces.

    Statement order is execution order.

    Example:
        { var x = 1; return x }
    """

    statements: tuple[Statement, ...] = ()
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_block(self)


@dataclass(frozen=True, slots=True)
class Assignment(Statement):
    """
    An assignment to an already declared variable.

    Example:
        x = foo(y)
    """

    variable: str
    rhs: Expression
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_assignment(self)


@dataclass(frozen=True, slots=True)
class IfStatement(Statement):
    """
    An if statement with an optional else branch.

    Example:
        if (x) {
            return 1
        } else {
            return 2
        }
    """

    condition: Expression
    then_block: Block
    else_block: Optional[Block] = None
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_if_statement(self)


@dataclass(frozen=True, slots=True)
class VariableDeclaration(Statement):
    """
    A variable declaration with an optional initializer.

    Example:
        var x
        var y = foo(x)
    """

    name: str
    initializer: Optional[Expression] = None
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_variable_declaration(self)


@dataclass(frozen=True, slots=True)
class ReturnStatement(Statement):
    """
    A return statement, bare or with a value.

    Example:
        return
        return x
    """

    result: Optional[Expression] = None
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_return_statement(self)


# -----------------------------------------------------------------------------
# Declarations
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FunctionDeclaration(ASTNode):
    """
    A function declaration.

    The parameter names are the only bindings initialized on entry.

    Example:
        fun add(a, b) {
            return plus(a, b)
        }
    """

    name: str
    parameters: tuple[str, ...]
    body: Block
    location: Optional[SourceLocation] = None

    @property
    def arity(self) -> int:
        """Number of formal parameters."""
        return len(self.parameters)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function_declaration(self)


@dataclass(frozen=True, slots=True)
class File(ASTNode):
    """
    The root node of a Dummy program.

    Functions appear in declaration order; names are not required to be unique.
    """

    functions: tuple[FunctionDeclaration, ...] = ()
    location: Optional[SourceLocation] = None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_file(self)


Element = Union[File, FunctionDeclaration, Block, Statement]


# -----------------------------------------------------------------------------
# Visitor with default implementations
# -----------------------------------------------------------------------------


class BaseASTVisitor(ASTVisitor):
    """
    Base visitor with default implementations that traverse children.

    Subclass this and override specific visit_* methods as needed.
    """

    def visit_file(self, node: File) -> Any:
        for function in node.functions:
            self.visit(function)

    def visit_function_declaration(self, node: FunctionDeclaration) -> Any:
        self.visit(node.body)

    def visit_block(self, node: Block) -> Any:
        for stmt in node.statements:
            self.visit(stmt)

    # Statements
    def visit_assignment(self, node: Assignment) -> Any:
        self.visit(node.rhs)

    def visit_if_statement(self, node: IfStatement) -> Any:
        self.visit(node.condition)
        self.visit(node.then_block)
        if node.else_block is not None:
            self.visit(node.else_block)

    def visit_variable_declaration(self, node: VariableDeclaration) -> Any:
        if node.initializer is not None:
            self.visit(node.initializer)

    def visit_return_statement(self, node: ReturnStatement) -> Any:
        if node.result is not None:
            self.visit(node.result)

    # Expressions
    def visit_variable_access(self, node: VariableAccess) -> Any:
        pass

    def visit_function_call(self, node: FunctionCall) -> Any:
        for arg in node.arguments:
            self.visit(arg)

    def visit_integer_const(self, node: IntegerConst) -> Any:
        pass

    def visit_boolean_const(self, node: BooleanConst) -> Any:
        pass
