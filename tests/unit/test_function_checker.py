"""
Unit tests for the function signature checker.
"""

from dummylang.compiler.diagnostics import DiagnosticSeverity
from dummylang.compiler.function_checker import FunctionInfo, FunctionSignatureChecker
from dummylang.compiler.rules import CheckConfiguration


class TestCallResolution:
    """Matching call sites against declarations."""

    def test_clean_program(self, run_checker):
        source = """
fun main() {
    helper(1)
}

fun helper(x) {
    return x
}
"""
        assert run_checker(FunctionSignatureChecker, source) == []

    def test_undeclared_function_call(self, run_checker):
        source = """
fun main() {
    missing()
}
"""
        (diag,) = run_checker(FunctionSignatureChecker, source)
        assert diag.code == "E0201"
        assert diag.severity == DiagnosticSeverity.ERROR
        assert diag.message == "Function 'missing' is called but is not declared"
        assert diag.line == 3

    def test_mismatched_arguments_not_undeclared(self, run_checker):
        """A known name with the wrong arity is an argument mismatch."""
        source = """
fun main() {
    f(1, 2)
}

fun f(a) {
}
"""
        diagnostics = run_checker(FunctionSignatureChecker, source)
        assert [d.code for d in diagnostics] == ["E0202", "W0201"]
        assert diagnostics[0].message == "No function 'f' with exactly 2 argument(s)"
        assert diagnostics[0].suggestion == "'f' accepts 1 argument(s)"

    def test_overloads_by_arity(self, run_checker):
        source = """
fun main() {
    f()
    f(1)
}

fun f() {
}

fun f(a) {
}
"""
        assert run_checker(FunctionSignatureChecker, source) == []

    def test_calls_found_in_every_position(self, run_checker):
        source = """
fun main() {
    var x = a()
    x = b()
    if (c()) {
        d()
    } else {
        return e(f())
    }
}

fun a() {}
fun b() {}
fun c() {}
fun d() {}
fun e(x) {}
fun f() {}
"""
        assert run_checker(FunctionSignatureChecker, source) == []

    def test_nested_call_arguments_checked(self, run_checker):
        source = """
fun main() {
    g(nope())
}

fun g(x) {}
"""
        diagnostics = run_checker(FunctionSignatureChecker, source)
        assert [d.code for d in diagnostics] == ["E0201"]

    def test_suggestion_for_misspelled_function(self, run_checker):
        source = """
fun main() {
    helpr()
}

fun helper() {}
"""
        diagnostics = run_checker(FunctionSignatureChecker, source)
        assert diagnostics[0].code == "E0201"
        assert diagnostics[0].suggestion == "did you mean 'helper'?"

    def test_calls_before_declaration_resolve(self, run_checker):
        """The registry covers the whole file before any body is walked."""
        source = """
fun main() {
    later()
}

fun later() {}
"""
        assert run_checker(FunctionSignatureChecker, source) == []


class TestRedeclaration:
    """Same name and arity declared twice."""

    def test_function_redeclaration(self, run_checker):
        source = """
fun main() {
    f(1)
}

fun f(a) {}

fun f(b) {}
"""
        (diag,) = run_checker(FunctionSignatureChecker, source)
        assert diag.code == "E0203"
        assert diag.message == (
            "Function 'f' with exactly 1 argument(s) is already declared on line 6"
        )
        assert diag.line == 8

    def test_redeclared_function_gets_no_usage_slot(self, run_checker):
        """The later declaration is never reported unused on its own."""
        source = """
fun main() {}

fun f() {}

fun f() {}
"""
        diagnostics = run_checker(FunctionSignatureChecker, source)
        assert [d.code for d in diagnostics] == ["E0203", "W0201"]
        assert diagnostics[1].line == 4

    def test_redeclared_body_still_checked(self, run_checker):
        source = """
fun main() {
    f()
}

fun f() {}

fun f() {
    missing()
}
"""
        diagnostics = run_checker(FunctionSignatureChecker, source)
        assert [d.code for d in diagnostics] == ["E0203", "E0201"]


class TestUnusedFunctions:
    """Declarations without call sites."""

    def test_main_without_parameters_is_exempt(self, run_checker):
        assert run_checker(FunctionSignatureChecker, "fun main() {}") == []

    def test_main_with_parameters_is_not_exempt(self, run_checker):
        (diag,) = run_checker(FunctionSignatureChecker, "fun main(args) {}")
        assert diag.code == "W0201"
        assert diag.message == "Function 'main' is declared but is never used"
        assert diag.severity == DiagnosticSeverity.WARNING

    def test_unused_in_declaration_order(self, run_checker):
        source = """
fun b() {}
fun a() {}
fun b(x) {}
"""
        diagnostics = run_checker(FunctionSignatureChecker, source)
        assert [d.line for d in diagnostics] == [2, 3, 4]

    def test_recursive_call_counts(self, run_checker):
        source = """
fun main() {}

fun loop(n) {
    return loop(n)
}
"""
        assert run_checker(FunctionSignatureChecker, source) == []

    def test_unused_rule_can_be_denied(self, run_checker):
        config = CheckConfiguration()
        config.deny("W0201")
        (diag,) = run_checker(FunctionSignatureChecker, "fun f() {}", config)
        assert diag.severity == DiagnosticSeverity.ERROR


class TestFunctionInfo:
    """Registry entries."""

    def test_entry_point_detection(self, parse):
        tree = parse("fun main() {}\nfun main(a) {}\nfun other() {}")
        infos = [FunctionInfo(f) for f in tree.functions]
        assert [i.is_entry_point for i in infos] == [True, False, False]
        assert infos[1].arity == 1
