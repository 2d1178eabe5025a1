import logging
import re

import pytest

from intcalc.parser import Parser
from intcalc.runtime import Execution, render, run
from intcalc.tokenizer import Lexer
from intcalc.utils import CalcError


@pytest.mark.parametrize(
    "code, expected_output",
    [
        pytest.param("a = 1 + 2 * 3;", ["a = 7"]),
        pytest.param("a = (1 + 2) * 3;", ["a = 9"]),
        pytest.param("a = 5; b = a - 10;", ["a = 5", "b = -5"]),
        pytest.param("a = b + 1;", ["error"]),
        pytest.param("a = 1 +;", ["error"]),
        pytest.param("a = 1", ["error"]),
        pytest.param("x = 007;", ["error"]),
        pytest.param("x = 019;", ["x = 19"]),
        pytest.param("", []),
        pytest.param("\n\n", []),
    ],
)
def test_render(code: str, expected_output: list[str]) -> None:
    assert render(run(code)) == expected_output


@pytest.mark.parametrize(
    "code, expected_diagnostic",
    [
        pytest.param("a = b + 1;", "unknown variable at line 1"),
        pytest.param("a = 1;\n\nc = a * b;", "unknown variable at line 3"),
        pytest.param("a = 1 +;", "unexpected token at line 1"),
        pytest.param("a = * 2;", "unexpected token at line 1"),
        pytest.param("a = ;", "unexpected token at line 1"),
        pytest.param("a = 1 + )", "unexpected token at line 1"),
        pytest.param("a = 1 -", "unexpected token at line 1"),
        pytest.param("a = 1", "expected semicolon at line 1"),
        pytest.param("a = 1 2;", "expected semicolon at line 1"),
        pytest.param("a = 1\n", "expected semicolon at line 2"),
        pytest.param("a = (1 + 2;", "missing closing brace at line 1"),
        pytest.param("a = ((1 + 2)", "missing closing brace at line 1"),
        pytest.param("a 5;", "expected assignment at line 1"),
        pytest.param("a + 1;", "expected assignment at line 1"),
        pytest.param("a", "expected assignment at line 1"),
        pytest.param("5 = a;", "syntax error at line 1"),
        pytest.param("a = 1;\n= 2;", "syntax error at line 2"),
        pytest.param("a = 1;\n;", "syntax error at line 2"),
        pytest.param("a = 1;\nb = 2 $ 3;", "unexpected character at line 2"),
        pytest.param("a = 1; $", "unexpected character at line 1"),
        pytest.param("a = 0a;", "invalid number format at line 1"),
        pytest.param("a² = 1;", "unexpected character at line 1"),
    ],
)
def test_diagnostics(code: str, expected_diagnostic: str) -> None:
    execution = run(code)
    assert execution.failed
    assert execution.diagnostics == [expected_diagnostic]
    assert render(execution) == ["error"]


def test_first_error_stops_the_run() -> None:
    execution = run("a = 1;\nb = x;\nc = y;\nd = 4;")
    assert execution.diagnostics == ["unknown variable at line 2"]
    assert execution.variables == {"a": 1}


def test_failed_statement_does_not_assign() -> None:
    execution = run("a = 1; a = 2 + b;")
    assert execution.failed
    assert execution.variables == {"a": 1}


def test_failed_statement_keeps_error_for_display() -> None:
    execution = run("a = (1 + 2;")
    assert isinstance(execution.error, CalcError)
    assert str(execution.error) == "\n".join(["[Parser error] missing closing brace at line 1", "   1 | a = (1 + 2;"])


def test_reassignment_overwrites_in_place() -> None:
    execution = run("b = 1; a = 2; b = b + 2;")
    assert render(execution) == ["b = 3", "a = 2"]


def test_output_has_one_line_per_variable() -> None:
    execution = run("a = 1; b = -a; a = a * 7; c = b - a - 100;")
    output = render(execution)
    assert len(output) == len(set(execution.variables)) == 3
    for line in output:
        assert re.fullmatch(r"[A-Za-z_]\w* = -?\d+", line)


def test_executions_are_independent() -> None:
    first = run("a = 1;")
    second = run("b = a;")
    assert first.variables == {"a": 1}
    assert second.failed
    assert second.variables == {}


def test_run_after_finish_is_noop() -> None:
    execution = Execution("a = 1;")
    execution.run()
    execution.run()
    assert execution.variables == {"a": 1}
    assert not execution.failed


def test_parser_requires_variable_target() -> None:
    parser = Parser(Lexer("1 = 2;"), variables={})
    with pytest.raises(CalcError) as exc_info:
        parser.consume_assignment()
    assert exc_info.value.message == "expected variable at line 1"


def test_parser_reads_variables() -> None:
    parser = Parser(Lexer("y = x * x + 1;"), variables={"x": 3})
    assert parser.consume_assignment() == ("y", 10)


def test_assignments_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="intcalc.runtime"):
        run("a = 2 * 21;")
    assert "Assigned a = 42" in caplog.messages


def test_diagnostic_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="intcalc.runtime"):
        run("a = b;")
    assert any(message.startswith("[Parser error] unknown variable at line 1") for message in caplog.messages)


@pytest.mark.parametrize(
    "expression, expected_value",
    [
        pytest.param("(" * 400 + "1" + ")" * 400, 1),
        pytest.param("(" * 5000 + "7" + ")" * 5000, 7),
        pytest.param("-" * 1200 + "1", 1),
        pytest.param("-" * 1201 + "1", -1),
        pytest.param("+-" * 3000 + "5", 5),
        pytest.param("-(" * 500 + "2" + ")" * 500, 2),
        pytest.param("(1 + " * 300 + "1" + ")" * 300, 301),
        pytest.param("2 * (" * 100 + "1" + ")" * 100, 2**100),
    ],
)
def test_deeply_nested_expressions(expression: str, expected_value: int) -> None:
    execution = run(f"x = {expression};")
    assert execution.diagnostics == []
    assert execution.variables == {"x": expected_value}


def test_deeply_nested_unclosed_group() -> None:
    execution = run("x = " + "(" * 1000 + "1" + ")" * 999 + ";")
    assert execution.diagnostics == ["missing closing brace at line 1"]
    assert render(execution) == ["error"]
