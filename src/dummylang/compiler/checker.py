"""
Common base for the tree-walking checkers.
"""

from __future__ import annotations

from typing import Optional

from dummylang.compiler.ast_nodes import BaseASTVisitor, File
from dummylang.compiler.diagnostics import (
    DiagnosticReporter,
    Locatable,
    find_best_match,
)
from dummylang.compiler.rules import CheckConfiguration, CheckLevel, CheckRule


class AbstractChecker(BaseASTVisitor):
    """
    A checker visits every function of a file and emits diagnostics.

    Subclasses override the visit_* methods they care about. All state a
    checker builds is reset by `inspect`, so one instance may be reused on
    several files.

    Example:
        reporter = DiagnosticReporter()
        VariableLifecycleChecker(reporter).inspect(tree)
        for diagnostic in reporter.diagnostics:
            print(diagnostic)
    """

    name = "checker"

    def __init__(
        self,
        reporter: DiagnosticReporter,
        config: Optional[CheckConfiguration] = None,
    ) -> None:
        self.reporter = reporter
        self.config = config or CheckConfiguration()

    def inspect(self, file: File) -> None:
        """Check every function of the file in declaration order."""
        for function in file.functions:
            self.visit(function)

    def _emit(
        self,
        rule: CheckRule,
        element: Locatable,
        *format_args: object,
        suggestion: Optional[str] = None,
        related_line: Optional[int] = None,
    ) -> None:
        """
        Send a diagnostic to the reporter if the rule is enabled.

        Args:
            rule: The rule being violated
            element: The tree node the diagnostic is attributed to
            format_args: Arguments to format into the rule message
            suggestion: Fix suggestion overriding the rule's default one
            related_line: Line of a declaration the message refers to
        """
        level = self.config.get_level(rule)
        if level == CheckLevel.ALLOW:
            return

        message = rule.format(*format_args)
        suggestion_text = suggestion
        if suggestion_text is None and rule.suggestion:
            try:
                suggestion_text = rule.suggestion.format(*format_args)
            except (IndexError, KeyError):
                suggestion_text = rule.suggestion

        sink = self.reporter.report if level == CheckLevel.DENY else self.reporter.warn
        sink(
            element,
            message,
            code=rule.code,
            rule_name=rule.name,
            suggestion=suggestion_text,
            related_line=related_line,
        )


def did_you_mean(name: str, candidates: list[str]) -> Optional[str]:
    """Build a "did you mean" hint from the closest candidate, if any."""
    match = find_best_match(name, candidates)
    return f"did you mean '{match}'?" if match else None
