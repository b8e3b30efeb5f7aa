"""
Diagnostic reporting for the Dummy language checkers.

The reporter is the single sink every checker writes to. It accepts
`(element, message)` pairs at two severities, error and warning, records
them in emission order and optionally echoes them to a text stream in the
compact form

    ERROR: (3) Variable 'x' is accessed before initialization
    WARNING: (7) Function 'helper' is declared but is never used

It can also render a diagnostic the way Rust's compiler does:

    error[E0103]: Variable 'x' is accessed before initialization
      --> example.dummy:3:12
       |
     3 |     return x
       |            ^
       |
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, TextIO

from dummylang.utils.errors import SourceLocation


# =============================================================================
# Diagnostic Severity Levels
# =============================================================================


class DiagnosticSeverity(Enum):
    """
    Severity level for diagnostic messages.

    ERROR marks an invalid program, WARNING a suspicious but valid one.
    """

    ERROR = "error"
    WARNING = "warning"

    def color_code(self) -> str:
        """Get ANSI color code for terminal output."""
        colors = {
            DiagnosticSeverity.ERROR: "\033[91m",  # Red
            DiagnosticSeverity.WARNING: "\033[93m",  # Yellow
        }
        return colors.get(self, "")

    @property
    def label(self) -> str:
        """Get the label for this severity."""
        return self.value


class Locatable(Protocol):
    """Anything a diagnostic can point at: every tree node qualifies."""

    @property
    def line(self) -> int: ...


# =============================================================================
# Core Diagnostic Type
# =============================================================================


@dataclass(frozen=True)
class Diagnostic:
    """
    A single reported problem.

    Attributes:
        severity: ERROR or WARNING
        message: The free-text message
        line: 1-indexed source line of the offending element (0 when unknown)
        location: Full source location, when the element carries one
        code: Rule code such as "E0103"
        rule_name: Rule name such as "access-before-initialization"
        suggestion: Optional "did you mean" hint, never part of the message
        related_line: Line of the declaration the message refers back to
    """

    severity: DiagnosticSeverity
    message: str
    line: int = 0
    location: Optional[SourceLocation] = None
    code: Optional[str] = None
    rule_name: Optional[str] = None
    suggestion: Optional[str] = None
    related_line: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.severity == DiagnosticSeverity.ERROR

    def __str__(self) -> str:
        return f"{self.severity.name}: ({self.line}) {self.message}"

    def to_dict(self) -> dict[str, object]:
        """Plain-data form used for JSON output."""
        return {
            "severity": self.severity.value,
            "line": self.line,
            "column": self.location.column if self.location else None,
            "code": self.code,
            "rule": self.rule_name,
            "message": self.message,
            "suggestion": self.suggestion,
            "related_line": self.related_line,
        }


# =============================================================================
# Levenshtein Distance for "Did you mean?" Suggestions
# =============================================================================


def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Calculate the Levenshtein (edit) distance between two strings.

    Example:
        >>> levenshtein_distance("count", "cuont")
        2
    """
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    # Wagner-Fischer with O(n) space
    previous_row = list(range(len(s2) + 1))

    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def find_similar_names(
    name: str,
    candidates: list[str],
    max_distance: int = 2,
    max_suggestions: int = 3,
) -> list[str]:
    """
    Find similar names from a list of candidates for suggestions.

    Returns:
        List of similar names, closest first, ties broken alphabetically

    Example:
        >>> find_similar_names("fo", ["foo", "bar"])
        ['foo']
    """
    if not candidates:
        return []

    scored: list[tuple[int, str]] = []
    for candidate in candidates:
        if candidate == name:
            continue
        if abs(len(candidate) - len(name)) > max_distance:
            continue

        distance = levenshtein_distance(name.lower(), candidate.lower())
        if distance <= max_distance:
            scored.append((distance, candidate))

    scored.sort(key=lambda x: (x[0], x[1]))

    return [candidate for _, candidate in scored[:max_suggestions]]


def find_best_match(name: str, candidates: list[str], max_distance: int = 2) -> Optional[str]:
    """Find the single best matching name, or None if nothing is close enough."""
    similar = find_similar_names(name, candidates, max_distance, 1)
    return similar[0] if similar else None


# =============================================================================
# Diagnostic Reporter (the sink)
# =============================================================================


class DiagnosticReporter:
    """
    Collects diagnostics from the checkers and optionally writes them out.

    `report` and `warn` never raise and are safe to call from several
    threads at once; emission order within one thread is preserved.

    Example:
        reporter = DiagnosticReporter(sys.stdout)
        reporter.report(node, "Variable 'x' is accessed but is not declared")
        reporter.warn(node, "Variable 'y' is declared but is never used")
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        source: str = "",
        filename: str = "<input>",
    ) -> None:
        """
        Initialize the reporter.

        Args:
            stream: Optional text stream receiving one compact line per diagnostic
            source: The analyzed source, used for rich formatting
            filename: The filename for rich formatting
        """
        self.stream = stream
        self.source = source
        self.source_lines = source.splitlines() if source else []
        self.filename = filename
        self.diagnostics: list[Diagnostic] = []
        self._lock = threading.Lock()

    def report(
        self,
        element: Locatable,
        message: str,
        *,
        code: Optional[str] = None,
        rule_name: Optional[str] = None,
        suggestion: Optional[str] = None,
        related_line: Optional[int] = None,
    ) -> Diagnostic:
        """Record an error against an element."""
        return self._add(
            DiagnosticSeverity.ERROR, element, message,
            code, rule_name, suggestion, related_line,
        )

    def warn(
        self,
        element: Locatable,
        message: str,
        *,
        code: Optional[str] = None,
        rule_name: Optional[str] = None,
        suggestion: Optional[str] = None,
        related_line: Optional[int] = None,
    ) -> Diagnostic:
        """Record a warning against an element."""
        return self._add(
            DiagnosticSeverity.WARNING, element, message,
            code, rule_name, suggestion, related_line,
        )

    def _add(
        self,
        severity: DiagnosticSeverity,
        element: Locatable,
        message: str,
        code: Optional[str],
        rule_name: Optional[str],
        suggestion: Optional[str],
        related_line: Optional[int],
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            severity=severity,
            message=message,
            line=element.line,
            location=getattr(element, "location", None),
            code=code,
            rule_name=rule_name,
            suggestion=suggestion,
            related_line=related_line,
        )
        with self._lock:
            self.diagnostics.append(diagnostic)
            if self.stream is not None:
                self.stream.write(f"{diagnostic}\n")
                self.stream.flush()
        return diagnostic

    # =========================================================================
    # Queries
    # =========================================================================

    def has_errors(self) -> bool:
        """Check if any error diagnostics have been emitted."""
        return any(d.is_error for d in self.diagnostics)

    def error_count(self) -> int:
        """Count error diagnostics."""
        return sum(1 for d in self.diagnostics if d.is_error)

    def warning_count(self) -> int:
        """Count warning diagnostics."""
        return sum(1 for d in self.diagnostics if not d.is_error)

    def clear(self) -> None:
        """Clear all diagnostics."""
        with self._lock:
            self.diagnostics.clear()

    def reset(self, source: str = "", filename: str = "<input>") -> None:
        """Forget earlier diagnostics and attach a new source for formatting."""
        self.clear()
        self.source = source
        self.source_lines = source.splitlines() if source else []
        self.filename = filename

    # =========================================================================
    # Formatting
    # =========================================================================

    def format_diagnostic(self, diag: Diagnostic, use_color: bool = True) -> str:
        """
        Format a diagnostic like Rust's compiler output.

        Example output:
            warning[W0102]: Variable 'y' is declared but is never used
              --> example.dummy:4:5
               |
             4 |     var y = 2
               |     ^
               |
               = help: did you mean `x`?
        """
        lines: list[str] = []

        reset = "\033[0m" if use_color else ""
        bold = "\033[1m" if use_color else ""
        blue = "\033[94m" if use_color else ""
        green = "\033[92m" if use_color else ""
        severity_color = diag.severity.color_code() if use_color else ""

        code = f"[{diag.code}]" if diag.code else ""
        lines.append(
            f"{severity_color}{bold}{diag.severity.label}{code}{reset}: "
            f"{bold}{diag.message}{reset}"
        )

        column = diag.location.column if diag.location else 1
        filename = (diag.location.filename if diag.location else None) or self.filename
        lines.append(f"  {blue}-->{reset} {filename}:{diag.line}:{column}")

        if 1 <= diag.line <= len(self.source_lines):
            source_line = self.source_lines[diag.line - 1]
            lines.append(f"   {blue}|{reset}")
            lines.append(f"{blue}{diag.line:3} |{reset} {source_line}")
            padding = " " * (column - 1)
            lines.append(f"   {blue}|{reset} {padding}{severity_color}^{reset}")
            lines.append(f"   {blue}|{reset}")

        if diag.suggestion:
            lines.append(f"   {blue}={reset} {green}help:{reset} {diag.suggestion}")

        if diag.related_line is not None:
            lines.append(f"   {blue}={reset} {bold}note:{reset} see line {diag.related_line}")

        return "\n".join(lines)

    def format_all(self, use_color: bool = True) -> str:
        """Format all diagnostics as a single string."""
        return "\n\n".join(
            self.format_diagnostic(diag, use_color=use_color) for diag in self.diagnostics
        )


__all__ = [
    "DiagnosticSeverity",
    "Diagnostic",
    "DiagnosticReporter",
    "Locatable",
    "levenshtein_distance",
    "find_similar_names",
    "find_best_match",
]
