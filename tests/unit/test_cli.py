"""
Unit tests for the command-line interface.
"""

import json

import pytest

from dummylang import __version__
from dummylang.cli import main

CLEAN = """
fun main() {
    var x = helper(1)
    return x
}

fun helper(a) {
    return a
}
"""

FAULTY = """
fun main() {
    var x
    return x
}

fun unused() {
}
"""


class TestCheckCommand:
    """`dummylang check`."""

    def test_clean_file(self, source_file, capsys):
        assert main(["check", str(source_file(CLEAN))]) == 0
        assert capsys.readouterr().out == ""

    def test_compact_output_and_exit_code(self, source_file, capsys):
        assert main(["check", str(source_file(FAULTY))]) == 1
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "ERROR: (4) Variable 'x' is accessed before initialization",
            "WARNING: (7) Function 'unused' is declared but is never used",
        ]

    def test_warnings_only_exit_zero(self, source_file, capsys):
        path = source_file("fun main() {\n    var y = 1\n}\n")
        assert main(["check", str(path)]) == 0
        assert "WARNING: (2)" in capsys.readouterr().out

    def test_json_output(self, source_file, capsys):
        path = source_file(FAULTY)
        assert main(["check", str(path), "--json"]) == 1
        result = json.loads(capsys.readouterr().out)
        assert result["file"] == str(path)
        assert result["errors"] == 1
        assert result["warnings"] == 1
        assert [d["code"] for d in result["diagnostics"]] == ["E0103", "W0201"]

    def test_pretty_output(self, source_file, capsys):
        assert main(["check", str(source_file(FAULTY)), "--pretty"]) == 1
        out = capsys.readouterr().out
        assert "error[E0103]" in out
        assert "warning[W0201]" in out
        assert "1 error(s)" in out

    def test_allow_rule(self, source_file, capsys):
        path = source_file(FAULTY)
        assert main(["check", str(path), "--allow", "unused-function"]) == 1
        assert "unused" not in capsys.readouterr().out

    def test_deny_category(self, source_file, capsys):
        path = source_file("fun main() {\n    var y = 1\n}\n")
        assert main(["check", str(path), "--deny", "unused"]) == 1
        assert "ERROR: (2)" in capsys.readouterr().out

    def test_warn_all(self, source_file, capsys):
        assert main(["check", str(source_file(FAULTY)), "--warn-all"]) == 0
        assert "ERROR" not in capsys.readouterr().out

    def test_strict_scoping(self, source_file, capsys):
        source = """
fun main() {
    var x = 1
    if (x) {
        var x = 2
        return x
    }
    return x
}
"""
        path = source_file(source)
        assert main(["check", str(path)]) == 0
        assert main(["check", str(path), "--strict-scoping"]) == 1
        assert "already declared on line 3" in capsys.readouterr().out

    def test_concurrent(self, source_file, capsys):
        assert main(["check", str(source_file(FAULTY)), "--concurrent"]) == 1
        out = capsys.readouterr().out.splitlines()
        assert sorted(out) == [
            "ERROR: (4) Variable 'x' is accessed before initialization",
            "WARNING: (7) Function 'unused' is declared but is never used",
        ]

    def test_unknown_category(self, source_file, capsys):
        assert main(["check", str(source_file(CLEAN)), "--deny", "bogus"]) == 1
        assert "Unknown category" in capsys.readouterr().err

    def test_unknown_rule(self, source_file, capsys):
        assert main(["check", str(source_file(CLEAN)), "--allow", "bogus"]) == 1
        assert "Unknown rule" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["check", str(tmp_path / "nope.dummy")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_syntax_error(self, source_file, capsys):
        assert main(["check", str(source_file("fun main( {"))]) == 1
        assert "Expected parameter name" in capsys.readouterr().err


class TestOtherCommands:
    """`rules`, `tokens`, `ast` and global options."""

    def test_rules(self, capsys):
        assert main(["rules"]) == 0
        out = capsys.readouterr().out
        assert "E0101" in out
        assert "unreachable-code" in out

    def test_tokens(self, source_file, capsys):
        assert main(["tokens", str(source_file("fun main() {}"))]) == 0
        out = capsys.readouterr().out
        assert "Token(FUN" in out
        assert "Token(EOF" in out

    def test_ast(self, source_file, capsys):
        assert main(["ast", str(source_file(CLEAN))]) == 0
        out = capsys.readouterr().out
        assert "FunctionDeclaration" in out
        assert "name: 'helper'" in out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out
