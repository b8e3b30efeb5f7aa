"""
Leveled scope for the variable lifecycle checker.

Levels are kept as an arena: a list of per-level dictionaries indexed by
level id (0 is the function entry level holding the parameters). Next to
it every visible name owns a stack of the level ids where it is currently
bound, so lookup of the innermost binding is a dictionary hit plus a list
peek, and shadowing needs no parent-chain walk.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from dummylang.compiler.ast_nodes import FunctionDeclaration, VariableDeclaration


class VariableStatus(Enum):
    """
    Lifecycle state of a bound variable.

    A name without a binding is undeclared, so there is no member for it.
    """

    DECLARED = auto()
    INITIALIZED = auto()


@dataclass(frozen=True, slots=True)
class ExplicitOrigin:
    """The binding was introduced by a `var` declaration."""

    declaration: VariableDeclaration

    @property
    def name(self) -> str:
        return self.declaration.name

    @property
    def line(self) -> int:
        return self.declaration.line


@dataclass(frozen=True, slots=True)
class ArgumentOrigin:
    """The binding is a parameter of the enclosing function."""

    function: FunctionDeclaration
    parameter: str

    @property
    def name(self) -> str:
        return self.parameter

    @property
    def line(self) -> int:
        return self.function.line


DeclarationOrigin = Union[ExplicitOrigin, ArgumentOrigin]


@dataclass(slots=True)
class Binding:
    """
    A variable binding on one level.

    Attributes:
        status: DECLARED until the first assignment, then INITIALIZED
        origin: Where the binding came from, used for line attribution
        accesses: Number of reads, faulty reads included
        outer: For an initialized copy of an enclosing binding, the binding
            it was copied from; reads are counted on both
    """

    status: VariableStatus
    origin: DeclarationOrigin
    accesses: int = 0
    outer: Optional[Binding] = None

    @property
    def name(self) -> str:
        return self.origin.name

    @property
    def is_initialized(self) -> bool:
        return self.status is VariableStatus.INITIALIZED

    @property
    def is_copy(self) -> bool:
        return self.outer is not None

    def initialize(self) -> None:
        """Mark the binding initialized; repeated calls are no-ops."""
        self.status = VariableStatus.INITIALIZED

    def initialized_copy(self) -> Binding:
        """
        An initialized stand-in for this binding on a nested level.

        The copy lives only as long as its level, so the initialization
        never reaches sibling branches or the enclosing level.
        """
        return Binding(VariableStatus.INITIALIZED, self.origin, self.accesses, outer=self)

    def record_access(self) -> None:
        self.accesses += 1
        if self.outer is not None:
            self.outer.record_access()


class LeveledScope:
    """
    Stack of lexical levels with shadow-aware lookup.

    Example:
        scope = LeveledScope()
        scope.bind("a", Binding(VariableStatus.INITIALIZED, origin))
        scope.enter_level()
        scope.lookup("a")            # the parameter binding
        scope.is_on_current_level("a")  # False
        unused = [b for b in scope.exit_level() if b.accesses == 0]
    """

    def __init__(self) -> None:
        self._levels: list[dict[str, Binding]] = [{}]
        self._active: dict[str, list[int]] = {}

    @property
    def level(self) -> int:
        """Id of the current (innermost) level."""
        return len(self._levels) - 1

    def enter_level(self) -> None:
        """Open a new innermost level."""
        self._levels.append({})

    def exit_level(self) -> list[Binding]:
        """
        Close the innermost level.

        Returns:
            The bindings introduced on that level, in insertion order

        Raises:
            RuntimeError: When called on the function entry level
        """
        if self.level == 0:
            raise RuntimeError("Cannot exit the function entry level")

        exiting = self._levels.pop()
        for name in exiting:
            stack = self._active[name]
            stack.pop()
            if not stack:
                del self._active[name]
        return list(exiting.values())

    def lookup(self, name: str) -> Optional[Binding]:
        """Find the innermost visible binding of a name."""
        stack = self._active.get(name)
        if not stack:
            return None
        return self._levels[stack[-1]][name]

    def is_on_current_level(self, name: str) -> bool:
        """Check whether the visible binding of a name lives on the current level."""
        stack = self._active.get(name)
        return bool(stack) and stack[-1] == self.level

    def bind(self, name: str, binding: Binding) -> None:
        """
        Install a binding on the current level.

        A binding already on the current level is replaced; one on an
        enclosing level is shadowed until this level exits.
        """
        current = self._levels[-1]
        if name not in current:
            self._active.setdefault(name, []).append(self.level)
        current[name] = binding

    def visible_names(self) -> list[str]:
        """All names with a visible binding."""
        return list(self._active)

    def __contains__(self, name: str) -> bool:
        return name in self._active


__all__ = [
    "VariableStatus",
    "ExplicitOrigin",
    "ArgumentOrigin",
    "DeclarationOrigin",
    "Binding",
    "LeveledScope",
]
