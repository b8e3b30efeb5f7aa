"""
Return coverage checker.

Each block folds its statements into a ReturnStatus telling whether every
path through it has returned, and with which kind of return. From that the
checker reports:

- code following a fully covering return (once per block, then the rest
  of the block is skipped)
- a bare `return` mixed with `return <value>`
- value-returning functions with a path that falls off the end
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional

from dummylang.compiler.ast_nodes import (
    Block,
    FunctionDeclaration,
    IfStatement,
    ReturnStatement,
    Statement,
)
from dummylang.compiler.checker import AbstractChecker
from dummylang.compiler.rules import (
    INCOMPLETE_RETURN,
    RETURN_KIND_COLLISION,
    UNREACHABLE_CODE,
)


class ReturnKind(Enum):
    """Kind of the returns seen along a path."""

    NONE = auto()   # no return seen yet
    EMPTY = auto()  # return
    VALUE = auto()  # return <expr>


@dataclass(frozen=True, slots=True)
class ReturnStatus:
    """
    Coverage state of a path.

    Attributes:
        covered: Every path reaching this point has returned
        kind: Kind of the first return seen
        exemplar: The first return seen, referenced by kind collisions
    """

    covered: bool = False
    kind: ReturnKind = ReturnKind.NONE
    exemplar: Optional[ReturnStatement] = None

    @classmethod
    def of(cls, statement: ReturnStatement) -> ReturnStatus:
        kind = ReturnKind.EMPTY if statement.result is None else ReturnKind.VALUE
        return cls(True, kind, statement)

    def collides_with(self, other: ReturnStatus) -> bool:
        """Check whether two statuses carry different kinds of returns."""
        return (
            self.kind is not ReturnKind.NONE
            and other.kind is not ReturnKind.NONE
            and self.kind is not other.kind
        )

    def accept_one(self, next_status: ReturnStatus) -> ReturnStatus:
        """
        Fold the status of a following statement into this one.

        The first kind and exemplar seen win; coverage is upgraded when the
        following status is covered.
        """
        if self.kind is ReturnKind.NONE:
            return next_status
        if next_status.kind is ReturnKind.NONE:
            return self
        if next_status.covered:
            return replace(self, covered=True)
        return self

    def with_covered(self, covered: bool) -> ReturnStatus:
        return replace(self, covered=covered and self.kind is not ReturnKind.NONE)


NEUTRAL = ReturnStatus()


class ReturnCoverageChecker(AbstractChecker):
    """
    Checks that return statements cover every path consistently.

    Example:
        fun sign(x) {
            if (x) {
                return 1
            }
        }           // incomplete return: no else branch
    """

    name = "returns"

    def visit_function_declaration(self, node: FunctionDeclaration) -> None:
        status = self._evaluate_block(node.body)
        if status.kind is ReturnKind.VALUE and not status.covered:
            self._emit(INCOMPLETE_RETURN, node, node.name)

    def _evaluate_block(self, block: Block) -> ReturnStatus:
        status = NEUTRAL
        for stmt in block.statements:
            if status.covered:
                self._emit(UNREACHABLE_CODE, stmt)
                # Only a directly unreachable return is compared by kind;
                # returns nested in an unreachable if are never visited
                if isinstance(stmt, ReturnStatement):
                    self._merge(status, ReturnStatus.of(stmt))
                break
            status = self._evaluate_statement(stmt, status)
        return status

    def _evaluate_statement(self, stmt: Statement, status: ReturnStatus) -> ReturnStatus:
        if isinstance(stmt, ReturnStatement):
            return self._merge(status, ReturnStatus.of(stmt))

        if isinstance(stmt, IfStatement):
            then_status = self._evaluate_block(stmt.then_block)
            if stmt.else_block is None:
                return self._merge(status, then_status.with_covered(False))

            else_status = self._evaluate_block(stmt.else_block)
            both_covered = then_status.covered and else_status.covered
            merged = self._merge(self._merge(status, then_status), else_status)
            return merged.with_covered(both_covered)

        return status

    def _merge(self, status: ReturnStatus, next_status: ReturnStatus) -> ReturnStatus:
        if status.collides_with(next_status):
            self._emit(
                RETURN_KIND_COLLISION, next_status.exemplar, status.exemplar.line,
                related_line=status.exemplar.line,
            )
        return status.accept_one(next_status)
