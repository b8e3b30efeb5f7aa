"""
dummylang Command-Line Interface.

Provides commands to check Dummy programs and inspect the front end.

Usage:
    dummylang check input.dummy             # Report diagnostics
    dummylang check input.dummy --pretty    # Rust-style rendering
    dummylang check input.dummy --json      # Machine-readable output
    dummylang rules                         # List all rules
    dummylang tokens input.dummy            # Dump tokens
    dummylang ast input.dummy               # Dump the syntax tree
"""

import argparse
import dataclasses
import json
import os
import sys
from pathlib import Path
from typing import Optional

from dummylang import __version__
from dummylang.compiler.analyzer import DummyLanguageAnalyzer
from dummylang.compiler.diagnostics import Diagnostic, DiagnosticReporter
from dummylang.compiler.lexer import Lexer
from dummylang.compiler.parser import transform_source
from dummylang.compiler.rules import (
    ALL_RULES,
    RULES_BY_NAME,
    CheckCategory,
    CheckConfiguration,
    CheckLevel,
)
from dummylang.utils.errors import DummyLangError


# =============================================================================
# ANSI Color Codes for Terminal Output
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"

    BOLD = "\033[1m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        cls.RED = ""
        cls.GREEN = ""
        cls.YELLOW = ""
        cls.CYAN = ""
        cls.GRAY = ""
        cls.BOLD = ""
        cls.RESET = ""


def _colors_enabled() -> bool:
    return sys.stdout.isatty() and not os.environ.get("NO_COLOR")


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    if not _colors_enabled():
        Colors.disable()


# Initialize on module load
_init_colors()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="dummylang",
        description="dummylang - semantic diagnostics for the Dummy language",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Check command
    check_parser = subparsers.add_parser(
        "check",
        help="Check a Dummy file and report diagnostics",
    )
    check_parser.add_argument(
        "input",
        type=Path,
        help="Input Dummy file",
    )
    check_parser.add_argument(
        "--json",
        action="store_true",
        help="Output diagnostics as JSON",
    )
    check_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Render diagnostics with source context",
    )
    check_parser.add_argument(
        "--deny",
        type=str,
        metavar="CATEGORY",
        help="Treat diagnostics in CATEGORY as errors (unused, unreachable, style, correctness)",
    )
    check_parser.add_argument(
        "--allow",
        type=str,
        metavar="RULE",
        action="append",
        help="Disable a specific rule (e.g., 'unused-variable' or 'W0102'); repeatable",
    )
    check_parser.add_argument(
        "--warn-all",
        action="store_true",
        help="Report every rule as a warning",
    )
    check_parser.add_argument(
        "--strict-scoping",
        action="store_true",
        help="Reject declarations that hide an enclosing variable",
    )
    check_parser.add_argument(
        "--concurrent",
        action="store_true",
        help="Run the checkers concurrently",
    )

    # Rules command
    subparsers.add_parser(
        "rules",
        help="List all diagnostic rules",
    )

    # Tokens command (debug)
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Show tokens (debug)",
    )
    tokens_parser.add_argument(
        "input",
        type=Path,
        help="Input Dummy file",
    )

    # AST command (debug)
    ast_parser = subparsers.add_parser(
        "ast",
        help="Show the syntax tree (debug)",
    )
    ast_parser.add_argument(
        "input",
        type=Path,
        help="Input Dummy file",
    )

    return parser


# =============================================================================
# Commands
# =============================================================================


def _build_config(args: argparse.Namespace) -> Optional[CheckConfiguration]:
    """Translate command-line switches into a configuration, None on bad input."""
    config = CheckConfiguration(strict_scoping=args.strict_scoping)

    if args.warn_all:
        config.warn_all()

    if args.deny:
        try:
            category = CheckCategory(args.deny.lower())
        except ValueError:
            print(f"Error: Unknown category '{args.deny}'", file=sys.stderr)
            valid = ", ".join(c.value for c in CheckCategory)
            print(f"Valid categories: {valid}", file=sys.stderr)
            return None
        config.set_level_by_category(category, CheckLevel.DENY)

    for rule_id in args.allow or []:
        if rule_id not in ALL_RULES and rule_id not in RULES_BY_NAME:
            print(f"Error: Unknown rule '{rule_id}'", file=sys.stderr)
            return None
        config.allow(rule_id)

    return config


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the check command."""
    input_path: Path = args.input

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    config = _build_config(args)
    if config is None:
        return 1

    try:
        source = input_path.read_text(encoding="utf-8")
        tree = transform_source(source, str(input_path))
    except DummyLangError as e:
        print(f"{Colors.RED}Error:{Colors.RESET} {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot read {input_path}: {e}", file=sys.stderr)
        return 1

    # Compact lines go straight to stdout as they are emitted
    stream = sys.stdout if not (args.json or args.pretty) else None
    reporter = DiagnosticReporter(stream, source, str(input_path))
    analyzer = DummyLanguageAnalyzer(reporter, config)

    if args.concurrent:
        diagnostics = analyzer.check_concurrently(tree)
    else:
        diagnostics = analyzer.check(tree)

    if args.json:
        _print_check_json(input_path, reporter)
    elif args.pretty:
        _print_check_report(input_path, reporter)

    return 1 if any(d.is_error for d in diagnostics) else 0


def _print_check_report(input_path: Path, reporter: DiagnosticReporter) -> None:
    """Print diagnostics with source context and a summary line."""
    if not reporter.diagnostics:
        print(f"{Colors.GREEN}OK:{Colors.RESET} {input_path} (no problems found)")
        return

    print(reporter.format_all(use_color=_colors_enabled()))
    print()

    errors = reporter.error_count()
    warnings = reporter.warning_count()
    parts = []
    if errors:
        parts.append(f"{Colors.RED}{errors} error(s){Colors.RESET}")
    if warnings:
        parts.append(f"{Colors.YELLOW}{warnings} warning(s){Colors.RESET}")
    print(f"{Colors.BOLD}{input_path}:{Colors.RESET} {', '.join(parts)}")


def _print_check_json(input_path: Path, reporter: DiagnosticReporter) -> None:
    """Print diagnostics as JSON."""
    diagnostics: list[Diagnostic] = reporter.diagnostics
    result = {
        "file": str(input_path),
        "diagnostics": [d.to_dict() for d in diagnostics],
        "errors": reporter.error_count(),
        "warnings": reporter.warning_count(),
    }
    print(json.dumps(result, indent=2))


def cmd_rules(args: argparse.Namespace) -> int:
    """Handle the rules command."""
    print(f"\n{Colors.BOLD}Available Rules{Colors.RESET}")
    print("=" * 60)

    for category in CheckCategory:
        rules = [rule for rule in ALL_RULES.values() if rule.category == category]
        if not rules:
            continue

        print(f"\n{Colors.CYAN}{category.value.upper()}{Colors.RESET}")
        for rule in sorted(rules, key=lambda r: r.code):
            level_str = (
                f"{Colors.YELLOW}warn{Colors.RESET}"
                if rule.level == CheckLevel.WARN
                else f"{Colors.RED}deny{Colors.RESET}"
            )
            print(f"  {rule.code} {rule.name:32s} [{level_str}]")
            msg = rule.message.replace("{}", "<?>")
            if len(msg) > 60:
                msg = msg[:57] + "..."
            print(f"    {Colors.GRAY}{msg}{Colors.RESET}")

    print()
    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command (debug)."""
    input_path: Path = args.input

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        source = input_path.read_text(encoding="utf-8")
        for token in Lexer(source, str(input_path)):
            print(token)
        return 0

    except DummyLangError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_ast(args: argparse.Namespace) -> int:
    """Handle the ast command (debug)."""
    input_path: Path = args.input

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        source = input_path.read_text(encoding="utf-8")
        _print_ast(transform_source(source, str(input_path)))
        return 0

    except DummyLangError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _print_ast(node, indent: int = 0) -> None:
    """Pretty print an AST node."""
    prefix = "  " * indent
    node_name = type(node).__name__
    attrs = {
        f.name: getattr(node, f.name)
        for f in dataclasses.fields(node)
        if f.name != "location"
    }

    print(f"{prefix}{node_name} (line {node.line}):")
    for key, value in attrs.items():
        if hasattr(value, "accept"):  # It's an AST node
            print(f"{prefix}  {key}:")
            _print_ast(value, indent + 2)
        elif isinstance(value, tuple) and value and hasattr(value[0], "accept"):
            print(f"{prefix}  {key}: [")
            for item in value:
                _print_ast(item, indent + 2)
            print(f"{prefix}  ]")
        else:
            print(f"{prefix}  {key}: {value!r}")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    command_handlers = {
        "check": cmd_check,
        "rules": cmd_rules,
        "tokens": cmd_tokens,
        "ast": cmd_ast,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
