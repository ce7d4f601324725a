import pytest

from adapters.expression_parser.precedence_parser import PrecedenceParser
from adapters.lexer.regex_lexer import RegexLexer
from contracts import (
    BinOpNode,
    ConstantNode,
    ExpressionSyntaxError,
    FunctionCallNode,
    NumberNode,
    UnaryOpNode,
    VariableNode,
)


def _parse(text: str, max_depth: int = 64):
    return PrecedenceParser(max_depth=max_depth).parse(RegexLexer().tokenize(text))


def _num(v: float) -> NumberNode:
    return NumberNode(value=v)


def test_multiplication_binds_tighter_than_addition():
    assert _parse("2 + 3 * 4") == BinOpNode(
        op="+",
        left=_num(2.0),
        right=BinOpNode(op="*", left=_num(3.0), right=_num(4.0)),
    )


def test_subtraction_is_left_associative():
    assert _parse("1 - 2 - 3") == BinOpNode(
        op="-",
        left=BinOpNode(op="-", left=_num(1.0), right=_num(2.0)),
        right=_num(3.0),
    )


def test_power_is_right_associative():
    assert _parse("2^3^2") == BinOpNode(
        op="^",
        left=_num(2.0),
        right=BinOpNode(op="^", left=_num(3.0), right=_num(2.0)),
    )


def test_unary_minus_binds_tighter_than_power():
    assert _parse("-2^2") == BinOpNode(
        op="^",
        left=UnaryOpNode(op="-", operand=_num(2.0)),
        right=_num(2.0),
    )


def test_power_accepts_negative_exponent():
    assert _parse("2^-1") == BinOpNode(
        op="^",
        left=_num(2.0),
        right=UnaryOpNode(op="-", operand=_num(1.0)),
    )


def test_unary_plus_is_identity_and_double_minus_cancels():
    assert _parse("+3") == _num(3.0)
    assert _parse("--3") == _num(3.0)


def test_parentheses_reset_precedence():
    ast = _parse("(2 + 3) * 4")

    assert isinstance(ast, BinOpNode)
    assert ast.op == "*"
    assert ast.left == BinOpNode(op="+", left=_num(2.0), right=_num(3.0))


def test_identifiers_resolve_to_constants_case_insensitively():
    assert _parse("pi") == ConstantNode(name="PI")
    assert _parse("Pi") == ConstantNode(name="PI")
    assert _parse("e") == ConstantNode(name="E")
    assert _parse("x") == VariableNode(name="x")


def test_function_call_with_two_arguments():
    assert _parse("pow(2, x)") == FunctionCallNode(
        name="pow",
        args=[_num(2.0), VariableNode(name="x")],
    )


def test_nested_function_arguments_are_full_expressions():
    ast = _parse("-sqrt(1 + 3)")

    assert ast == UnaryOpNode(
        op="-",
        operand=FunctionCallNode(
            name="sqrt",
            args=[BinOpNode(op="+", left=_num(1.0), right=_num(3.0))],
        ),
    )


@pytest.mark.parametrize("text", ["pow(2)", "sin()", "sqrt(1, 2)", "pow(1, 2, 3)"])
def test_arity_mismatch_is_a_syntax_error(text):
    with pytest.raises(ExpressionSyntaxError) as exc_info:
        _parse(text)

    assert exc_info.value.code == "ARITY_MISMATCH"


@pytest.mark.parametrize(
    "text, code",
    [
        ("", "EMPTY"),
        ("(1", "UNEXPECTED_END"),
        ("(1)2", "UNEXPECTED_TOKEN"),
        ("1 +", "UNEXPECTED_END"),
        (")", "UNEXPECTED_TOKEN"),
        ("foo(1)", "UNKNOWN_FUNCTION"),
    ],
)
def test_malformed_input_raises_syntax_error(text, code):
    with pytest.raises(ExpressionSyntaxError) as exc_info:
        _parse(text)

    assert exc_info.value.code == code


def test_depth_guard_rejects_deep_nesting():
    assert _parse("((1))", max_depth=2) == _num(1.0)

    with pytest.raises(ExpressionSyntaxError) as exc_info:
        _parse("(((1)))", max_depth=2)

    assert exc_info.value.code == "TOO_DEEP"
    assert exc_info.value.position == 2


def test_depth_guard_counts_function_calls():
    with pytest.raises(ExpressionSyntaxError):
        _parse("sin(sin(sin(1)))", max_depth=2)


def test_long_chains_do_not_recurse_per_operator():
    flat = _parse(" + ".join(["1"] * 3000))
    tower = _parse(" ^ ".join(["1"] * 3000))

    assert isinstance(flat, BinOpNode)
    assert isinstance(tower, BinOpNode)


def test_parser_does_not_raise_unknown_identifier_for_plain_names():
    # Rozwiązywanie zmiennych należy do ewaluatora
    assert _parse("foo") == VariableNode(name="foo")
