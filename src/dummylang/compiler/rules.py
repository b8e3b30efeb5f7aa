"""
Diagnostic rules and their configuration.

Every diagnostic the checkers can produce is described by a CheckRule: a
stable code, a kebab-case name, a category, a message template and a
default level. The level decides how the diagnostic reaches the sink:

    DENY  -> reporter.report (error)
    WARN  -> reporter.warn   (warning)
    ALLOW -> dropped

Example:
    config = CheckConfiguration()
    config.allow("unused-variable")
    config.set_level_by_category(CheckCategory.UNUSED, CheckLevel.DENY)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# =============================================================================
# Levels and Categories
# =============================================================================


class CheckLevel(Enum):
    """
    Severity level for a rule.

    ALLOW: Rule is disabled, no diagnostic produced
    WARN: Rule produces a warning
    DENY: Rule produces an error
    """

    ALLOW = "allow"
    WARN = "warn"
    DENY = "deny"


class CheckCategory(Enum):
    """Categories of rules for organization and filtering."""

    UNUSED = "unused"              # Unused variables and functions
    UNREACHABLE = "unreachable"    # Dead code after full return coverage
    STYLE = "style"                # Shadowing
    CORRECTNESS = "correctness"    # Invalid programs


@dataclass(frozen=True)
class CheckRule:
    """
    Definition of a single diagnostic rule.

    Attributes:
        code: Unique rule identifier (e.g., "E0101")
        name: Human-readable rule name (e.g., "undeclared-variable-access")
        category: The category this rule belongs to
        message: Template message for the diagnostic (use {} for placeholders)
        level: Default severity level
        suggestion: Optional template for a fix suggestion
    """

    code: str
    name: str
    category: CheckCategory
    message: str
    level: CheckLevel = CheckLevel.DENY
    suggestion: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.code} ({self.name})"

    def format(self, *args: object) -> str:
        """Render the message template with the given arguments."""
        return self.message.format(*args) if args else self.message


# =============================================================================
# Variable Lifecycle Rules
# =============================================================================

UNDECLARED_VARIABLE_ACCESS = CheckRule(
    code="E0101",
    name="undeclared-variable-access",
    category=CheckCategory.CORRECTNESS,
    message="Variable '{}' is accessed but is not declared",
)

UNDECLARED_VARIABLE_ASSIGNMENT = CheckRule(
    code="E0102",
    name="undeclared-variable-assignment",
    category=CheckCategory.CORRECTNESS,
    message="Variable '{}' is assigned but is not declared",
    suggestion="declare it first: var {}",
)

ACCESS_BEFORE_INITIALIZATION = CheckRule(
    code="E0103",
    name="access-before-initialization",
    category=CheckCategory.CORRECTNESS,
    message="Variable '{}' is accessed before initialization",
    suggestion="assign a value to '{}' before reading it",
)

VARIABLE_REDECLARATION = CheckRule(
    code="E0104",
    name="variable-redeclaration",
    category=CheckCategory.CORRECTNESS,
    message="Variable '{}' is already declared on line {} in visible scope",
)

VARIABLE_SHADOWING = CheckRule(
    code="W0101",
    name="variable-shadowing",
    category=CheckCategory.STYLE,
    message="Declaration of '{}' shadows the higher-level declaration on line {}",
    level=CheckLevel.WARN,
    suggestion="consider renaming '{}'",
)

UNUSED_VARIABLE = CheckRule(
    code="W0102",
    name="unused-variable",
    category=CheckCategory.UNUSED,
    message="Variable '{}' is declared but is never used",
    level=CheckLevel.WARN,
    suggestion="remove the declaration of '{}'",
)


# =============================================================================
# Function Signature Rules
# =============================================================================

UNDECLARED_FUNCTION_CALL = CheckRule(
    code="E0201",
    name="undeclared-function-call",
    category=CheckCategory.CORRECTNESS,
    message="Function '{}' is called but is not declared",
)

MISMATCHED_ARGUMENTS = CheckRule(
    code="E0202",
    name="mismatched-arguments",
    category=CheckCategory.CORRECTNESS,
    message="No function '{}' with exactly {} argument(s)",
)

FUNCTION_REDECLARATION = CheckRule(
    code="E0203",
    name="function-redeclaration",
    category=CheckCategory.CORRECTNESS,
    message="Function '{}' with exactly {} argument(s) is already declared on line {}",
)

UNUSED_FUNCTION = CheckRule(
    code="W0201",
    name="unused-function",
    category=CheckCategory.UNUSED,
    message="Function '{}' is declared but is never used",
    level=CheckLevel.WARN,
    suggestion="remove the function or add a call to it",
)


# =============================================================================
# Return Coverage Rules
# =============================================================================

RETURN_KIND_COLLISION = CheckRule(
    code="E0301",
    name="return-kind-collision",
    category=CheckCategory.CORRECTNESS,
    message="Different kinds of 'return' statements: diverges from line {}",
)

INCOMPLETE_RETURN = CheckRule(
    code="E0302",
    name="incomplete-return",
    category=CheckCategory.CORRECTNESS,
    message=(
        "Some of the 'if' cases are not covered with 'return' statement "
        "but '{}' should have a value-return"
    ),
    suggestion="add an 'else' branch or a final 'return' with a value",
)

UNREACHABLE_CODE = CheckRule(
    code="W0301",
    name="unreachable-code",
    category=CheckCategory.UNREACHABLE,
    message="Unreachable code after full coverage of 'return' statements",
    level=CheckLevel.WARN,
    suggestion="remove the unreachable code",
)


# =============================================================================
# Rule Registry
# =============================================================================


ALL_RULES: dict[str, CheckRule] = {
    # Variables
    UNDECLARED_VARIABLE_ACCESS.code: UNDECLARED_VARIABLE_ACCESS,
    UNDECLARED_VARIABLE_ASSIGNMENT.code: UNDECLARED_VARIABLE_ASSIGNMENT,
    ACCESS_BEFORE_INITIALIZATION.code: ACCESS_BEFORE_INITIALIZATION,
    VARIABLE_REDECLARATION.code: VARIABLE_REDECLARATION,
    VARIABLE_SHADOWING.code: VARIABLE_SHADOWING,
    UNUSED_VARIABLE.code: UNUSED_VARIABLE,
    # Functions
    UNDECLARED_FUNCTION_CALL.code: UNDECLARED_FUNCTION_CALL,
    MISMATCHED_ARGUMENTS.code: MISMATCHED_ARGUMENTS,
    FUNCTION_REDECLARATION.code: FUNCTION_REDECLARATION,
    UNUSED_FUNCTION.code: UNUSED_FUNCTION,
    # Returns
    RETURN_KIND_COLLISION.code: RETURN_KIND_COLLISION,
    INCOMPLETE_RETURN.code: INCOMPLETE_RETURN,
    UNREACHABLE_CODE.code: UNREACHABLE_CODE,
}

# Also index by name
RULES_BY_NAME: dict[str, CheckRule] = {
    rule.name: rule for rule in ALL_RULES.values()
}


def get_rule_by_code(code: str) -> Optional[CheckRule]:
    """Get a rule by its code (e.g., 'E0101')."""
    return ALL_RULES.get(code)


def get_rule_by_name(name: str) -> Optional[CheckRule]:
    """Get a rule by its name (e.g., 'unused-variable')."""
    return RULES_BY_NAME.get(name)


def get_rules_by_category(category: CheckCategory) -> list[CheckRule]:
    """Get all rules in a category."""
    return [rule for rule in ALL_RULES.values() if rule.category == category]


# =============================================================================
# Configuration
# =============================================================================


@dataclass
class CheckConfiguration:
    """
    Configuration for the checkers specifying rule levels.

    Attributes:
        rule_levels: Level overrides keyed by rule code or rule name
        strict_scoping: Treat a declaration hiding an enclosing binding as a
            redeclaration error instead of a shadowing warning

    Example:
        config = CheckConfiguration(strict_scoping=True)
        config.set_level("unused-variable", CheckLevel.ALLOW)
    """

    rule_levels: dict[str, CheckLevel] = field(default_factory=dict)
    strict_scoping: bool = False

    def get_level(self, rule: CheckRule) -> CheckLevel:
        """Get the effective level for a rule."""
        if rule.code in self.rule_levels:
            return self.rule_levels[rule.code]
        if rule.name in self.rule_levels:
            return self.rule_levels[rule.name]
        return rule.level

    def set_level(self, rule_id: str, level: CheckLevel) -> None:
        """
        Set the level for a rule by code or name.

        Raises:
            KeyError: If no rule has that code or name
        """
        if rule_id not in ALL_RULES and rule_id not in RULES_BY_NAME:
            raise KeyError(f"Unknown rule: {rule_id}")
        self.rule_levels[rule_id] = level

    def set_level_by_category(self, category: CheckCategory, level: CheckLevel) -> None:
        """Set the level for all rules in a category."""
        for rule in get_rules_by_category(category):
            self.rule_levels[rule.code] = level

    def allow(self, rule_id: str) -> None:
        """Disable a rule."""
        self.set_level(rule_id, CheckLevel.ALLOW)

    def warn(self, rule_id: str) -> None:
        """Set a rule to warning level."""
        self.set_level(rule_id, CheckLevel.WARN)

    def deny(self, rule_id: str) -> None:
        """Set a rule to error level."""
        self.set_level(rule_id, CheckLevel.DENY)

    def allow_all(self) -> None:
        """Disable all rules."""
        for rule in ALL_RULES.values():
            self.rule_levels[rule.code] = CheckLevel.ALLOW

    def warn_all(self) -> None:
        """Set all rules to warning level."""
        for rule in ALL_RULES.values():
            self.rule_levels[rule.code] = CheckLevel.WARN

    def deny_all(self) -> None:
        """Set all rules to error level."""
        for rule in ALL_RULES.values():
            self.rule_levels[rule.code] = CheckLevel.DENY


__all__ = [
    "CheckLevel",
    "CheckCategory",
    "CheckRule",
    "CheckConfiguration",
    "ALL_RULES",
    "RULES_BY_NAME",
    "get_rule_by_code",
    "get_rule_by_name",
    "get_rules_by_category",
    "UNDECLARED_VARIABLE_ACCESS",
    "UNDECLARED_VARIABLE_ASSIGNMENT",
    "ACCESS_BEFORE_INITIALIZATION",
    "VARIABLE_REDECLARATION",
    "VARIABLE_SHADOWING",
    "UNUSED_VARIABLE",
    "UNDECLARED_FUNCTION_CALL",
    "MISMATCHED_ARGUMENTS",
    "FUNCTION_REDECLARATION",
    "UNUSED_FUNCTION",
    "RETURN_KIND_COLLISION",
    "INCOMPLETE_RETURN",
    "UNREACHABLE_CODE",
]
