"""
Variable lifecycle checker.

Tracks every variable of a function through declare -> initialize ->
access and reports:

- reads and assignments of undeclared names
- reads of declared but never assigned variables
- redeclarations on the same level
- declarations shadowing an enclosing binding
- variables that are never read before their block ends

Parameters are bound on the function entry level as already initialized
and are never reported unused.
"""

from __future__ import annotations

from typing import Optional

from dummylang.compiler.ast_nodes import (
    Assignment,
    Block,
    FunctionDeclaration,
    Statement,
    VariableAccess,
    VariableDeclaration,
)
from dummylang.compiler.checker import AbstractChecker, did_you_mean
from dummylang.compiler.diagnostics import DiagnosticReporter
from dummylang.compiler.rules import (
    ACCESS_BEFORE_INITIALIZATION,
    UNDECLARED_VARIABLE_ACCESS,
    UNDECLARED_VARIABLE_ASSIGNMENT,
    UNUSED_VARIABLE,
    VARIABLE_REDECLARATION,
    VARIABLE_SHADOWING,
    CheckConfiguration,
)
from dummylang.compiler.scope import (
    ArgumentOrigin,
    Binding,
    ExplicitOrigin,
    LeveledScope,
    VariableStatus,
)


class VariableLifecycleChecker(AbstractChecker):
    """
    Checks declaration, initialization and use of local variables.

    Example:
        fun f() {
            var x
            return x        // access before initialization
        }
    """

    name = "variables"

    def __init__(
        self,
        reporter: DiagnosticReporter,
        config: Optional[CheckConfiguration] = None,
    ) -> None:
        super().__init__(reporter, config)
        self._scope = LeveledScope()

    # =========================================================================
    # Scope Operations
    # =========================================================================

    def _declare(self, name: str, declaration: VariableDeclaration) -> bool:
        """
        Bind a freshly declared variable on the current level.

        Returns:
            False if the declaration was rejected as a redeclaration
        """
        existing = self._scope.lookup(name)
        if existing is not None:
            on_this_level = self._scope.is_on_current_level(name) and not existing.is_copy
            if on_this_level or self.config.strict_scoping:
                self._emit(
                    VARIABLE_REDECLARATION, declaration, name, existing.origin.line,
                    related_line=existing.origin.line,
                )
                return False
            self._emit(
                VARIABLE_SHADOWING, declaration, name, existing.origin.line,
                related_line=existing.origin.line,
            )

        self._scope.bind(name, Binding(VariableStatus.DECLARED, ExplicitOrigin(declaration)))
        return True

    def _initialize(self, name: str, statement: Statement) -> None:
        binding = self._scope.lookup(name)
        if binding is None:
            self._emit(
                UNDECLARED_VARIABLE_ASSIGNMENT, statement, name,
                suggestion=did_you_mean(name, self._scope.visible_names()),
            )
            return
        if binding.is_initialized:
            return
        if self._scope.is_on_current_level(name):
            binding.initialize()
        else:
            # Enclosing bindings stay uninitialized outside this level
            self._scope.bind(name, binding.initialized_copy())

    def _access(self, name: str, expression: VariableAccess) -> None:
        binding = self._scope.lookup(name)
        if binding is None:
            self._emit(
                UNDECLARED_VARIABLE_ACCESS, expression, name,
                suggestion=did_you_mean(name, self._scope.visible_names()),
            )
            return

        if not binding.is_initialized:
            self._emit(ACCESS_BEFORE_INITIALIZATION, expression, name)
        # A faulty read still counts as a use
        binding.record_access()

    def _report_unused(self, bindings: list[Binding]) -> None:
        for binding in bindings:
            if binding.is_copy or binding.accesses > 0:
                continue
            if isinstance(binding.origin, ExplicitOrigin):
                self._emit(UNUSED_VARIABLE, binding.origin.declaration, binding.name)

    # =========================================================================
    # Visitors
    # =========================================================================

    def visit_function_declaration(self, node: FunctionDeclaration) -> None:
        self._scope = LeveledScope()
        for parameter in node.parameters:
            self._scope.bind(
                parameter,
                Binding(VariableStatus.INITIALIZED, ArgumentOrigin(node, parameter)),
            )
        self.visit(node.body)

    def visit_block(self, node: Block) -> None:
        self._scope.enter_level()
        for stmt in node.statements:
            self.visit(stmt)
        self._report_unused(self._scope.exit_level())

    def visit_assignment(self, node: Assignment) -> None:
        # Target first, then the right-hand side
        self._initialize(node.variable, node)
        self.visit(node.rhs)

    def visit_variable_declaration(self, node: VariableDeclaration) -> None:
        # A rejected declaration never visits its initializer
        if not self._declare(node.name, node):
            return
        if node.initializer is not None:
            self._initialize(node.name, node)
            self.visit(node.initializer)

    def visit_variable_access(self, node: VariableAccess) -> None:
        self._access(node.name, node)
