"""
Function signature checker.

Functions are identified by name and arity, so `f(a)` and `f(a, b)` are
two distinct declarations. The checker registers every declaration of the
file, then walks all bodies matching call sites against the registry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from dummylang.compiler.ast_nodes import File, FunctionCall, FunctionDeclaration
from dummylang.compiler.checker import AbstractChecker, did_you_mean
from dummylang.compiler.diagnostics import DiagnosticReporter
from dummylang.compiler.rules import (
    FUNCTION_REDECLARATION,
    MISMATCHED_ARGUMENTS,
    UNDECLARED_FUNCTION_CALL,
    UNUSED_FUNCTION,
    CheckConfiguration,
)

ENTRY_POINT_NAME = "main"
ENTRY_POINT_ARITY = 0


@dataclass
class FunctionInfo:
    """A registered declaration and the number of calls resolved to it."""

    declaration: FunctionDeclaration
    calls: int = 0

    @property
    def name(self) -> str:
        return self.declaration.name

    @property
    def arity(self) -> int:
        return self.declaration.arity

    @property
    def is_entry_point(self) -> bool:
        return self.name == ENTRY_POINT_NAME and self.arity == ENTRY_POINT_ARITY


class FunctionSignatureChecker(AbstractChecker):
    """
    Checks function declarations against their call sites.

    Reports redeclared signatures, calls of unknown names, calls with an
    argument count no declaration accepts, and declarations never called.
    `main()` is the program entry and is exempt from the unused check.
    """

    name = "functions"

    def __init__(
        self,
        reporter: DiagnosticReporter,
        config: Optional[CheckConfiguration] = None,
    ) -> None:
        super().__init__(reporter, config)
        self._registry: dict[str, dict[int, FunctionInfo]] = {}
        self._declared: list[FunctionInfo] = []

    def inspect(self, file: File) -> None:
        self._registry = {}
        self._declared = []

        self._register(file)
        for function in file.functions:
            self.visit(function)
        self._check_unused()

    def _register(self, file: File) -> None:
        """Populate the registry in declaration order."""
        for declaration in file.functions:
            overloads = self._registry.setdefault(declaration.name, {})
            original = overloads.get(declaration.arity)
            if original is not None:
                self._emit(
                    FUNCTION_REDECLARATION, declaration,
                    declaration.name, declaration.arity, original.declaration.line,
                    related_line=original.declaration.line,
                )
                continue

            info = FunctionInfo(declaration)
            overloads[declaration.arity] = info
            self._declared.append(info)

    def _check_unused(self) -> None:
        for info in self._declared:
            if info.calls == 0 and not info.is_entry_point:
                self._emit(UNUSED_FUNCTION, info.declaration, info.name)

    def visit_function_call(self, node: FunctionCall) -> None:
        arity = len(node.arguments)
        overloads = self._registry.get(node.function)

        if overloads is None:
            self._emit(
                UNDECLARED_FUNCTION_CALL, node, node.function,
                suggestion=did_you_mean(node.function, list(self._registry)),
            )
        elif arity not in overloads:
            accepted = ", ".join(str(n) for n in sorted(overloads))
            self._emit(
                MISMATCHED_ARGUMENTS, node, node.function, arity,
                suggestion=f"'{node.function}' accepts {accepted} argument(s)",
            )
        else:
            overloads[arity].calls += 1

        for arg in node.arguments:
            self.visit(arg)
