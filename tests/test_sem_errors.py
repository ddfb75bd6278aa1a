import io

import pytest

from ast_nodes import Ident, ReturnStmt, Program
from sem_errors import SemErrors


def test_errors_keep_discovery_order():
    errors = SemErrors()
    errors.undeclared_ident(Ident('b', line=5, col=1))
    errors.undeclared_ident(Ident('a', line=2, col=4))
    errors.incompatible_return(ReturnStmt(None, line=3, col=2))
    assert errors.kinds() == ['undeclaredIdent', 'undeclaredIdent', 'incompatibleReturn']
    assert [e.line for e in errors] == [5, 2, 3]
    assert errors.count() == len(errors) == 3
    assert errors.has_errors


def test_error_format():
    errors = SemErrors()
    errors.undeclared_ident(Ident('q', line=2, col=2))
    errors.incompatible_parameter(Ident('z', line=4, col=9), 2, 'f')
    errors.no_main_properly_declared(Program([]))
    assert [str(e) for e in errors] == [
        "Line 2:2 error: Identifier 'q' is undeclared.",
        "Line 4:9 error: Parameter #2 with incompatible types in call to 'f'.",
        "Line 1:0 error: There is no 'main' function properly declared.",
    ]


def test_print_writes_everything_and_closes():
    errors = SemErrors()
    errors.boolean_required(Ident('if', line=1, col=0), 'if')
    errors.read_write_require_basic(Ident('write', line=2, col=0), 'write')
    out = io.StringIO()
    errors.print(out)
    assert out.getvalue().splitlines() == [
        "Line 1:0 error: Instruction 'if' requires a boolean condition.",
        "Line 2:0 error: Basic type required in 'write'.",
    ]
    assert errors.closed


def test_reports_after_print_are_dropped_with_a_warning():
    errors = SemErrors()
    errors.print(io.StringIO())
    with pytest.warns(RuntimeWarning):
        errors.undeclared_ident(Ident('x'))
    assert errors.count() == 0


def test_print_defaults_to_stdout(capsys):
    errors = SemErrors()
    errors.incompatible_operator(Ident('+', line=7, col=3), '+')
    errors.print()
    assert capsys.readouterr().out == "Line 7:3 error: Operator '+' with incompatible types.\n"
