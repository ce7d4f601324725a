from __future__ import annotations

import io
import json

import pytest

from exprcalc import main


def test_eval_prints_integer_result(capsys):
    main(["eval", "--text", "2 + 3 * 4"])

    assert capsys.readouterr().out.strip() == "14"


def test_eval_prints_float_result(capsys):
    main(["eval", "-t", "1.5e-2"])

    assert capsys.readouterr().out.strip() == "0.015"


def test_eval_with_variables_and_steps(capsys):
    main(["eval", "-t", "x * y", "--var", "x=3", "-V", "y=2", "--steps"])

    out = capsys.readouterr().out
    assert "3 * 2 = 6" in out
    assert out.strip().splitlines()[-1] == "6"


def test_eval_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("log(E)\n"))

    main(["eval"])

    assert capsys.readouterr().out.strip() == "1"


def test_eval_failure_exits_with_kind(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["eval", "-t", "1/0"])

    assert exc_info.value.code == 1
    assert capsys.readouterr().err.startswith("domain_error:")


def test_eval_rejects_malformed_variable(capsys):
    with pytest.raises(SystemExit):
        main(["eval", "-t", "x", "--var", "x"])

    assert "nazwa=wartość" in capsys.readouterr().err


def test_validate_ok(capsys):
    main(["validate", "-t", "pow(2, 3)"])

    assert capsys.readouterr().out.strip() == "valid"


def test_validate_invalid_exits_1(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["validate", "-t", "pow(2)"])

    assert exc_info.value.code == 1
    assert "ARITY_MISMATCH" in capsys.readouterr().out


def test_tokens_table(capsys):
    main(["tokens", "-t", "sin(1)"])

    out = capsys.readouterr().out
    assert "identifier" in out
    assert "lparen" in out


def test_ast_is_json(capsys):
    main(["ast", "-t", "2 ^ 3"])

    ast = json.loads(capsys.readouterr().out)
    assert ast["node_type"] == "binop"
    assert ast["op"] == "^"


def test_ast_of_long_chain_fails_cleanly(capsys):
    text = " + ".join(["1"] * 5000)

    main(["eval", "-t", text])
    assert capsys.readouterr().out.strip() == "5000"

    with pytest.raises(SystemExit) as exc_info:
        main(["ast", "-t", text])

    assert exc_info.value.code == 1
    assert capsys.readouterr().err.startswith("ast_too_deep:")


def test_functions_table(capsys):
    main(["functions"])

    out = capsys.readouterr().out
    assert "sqrt" in out
    assert "PI" in out
