import pytest

from adapters.lexer.regex_lexer import RegexLexer
from adapters.validator.syntax_validator import TokenSyntaxValidator


def _issue_code(text: str, max_depth: int = 64) -> str | None:
    tokens = RegexLexer().tokenize(text)
    issue = TokenSyntaxValidator(max_depth=max_depth).find_issue(tokens)
    return issue.code if issue is not None else None


@pytest.mark.parametrize(
    "text",
    [
        "2 + 3 * 4",
        "(2 + 3) * 4",
        "-sqrt(4)",
        "2--3",
        "2 * -3",
        "2^-1",
        "+3",
        "(-3)",
        "(+3)",
        "pow(-2, 3)",
        "pow(2, -1)",
        "pow(sin(1), cos(2))",
        "sin(PI/2)",
        "x + y",
        "foo",
        "1.5e-2",
    ],
)
def test_well_formed_expressions_have_no_issue(text):
    assert _issue_code(text) is None


@pytest.mark.parametrize(
    "text, code",
    [
        ("", "EMPTY"),
        ("   ", "EMPTY"),
        ("(1 + 2", "UNBALANCED_PARENS"),
        ("1 + 2)", "UNBALANCED_PARENS"),
        (")(", "UNBALANCED_PARENS"),
        ("* 2", "BAD_START"),
        ("^2", "BAD_START"),
        (", 1", "BAD_START"),
        ("2 +", "BAD_END"),
        ("2 *", "BAD_END"),
        ("2 */ 3", "OPERATOR_ADJACENCY"),
        ("--3", "OPERATOR_ADJACENCY"),
        ("2 - - - 3", "OPERATOR_ADJACENCY"),
        ("2 * +3", "OPERATOR_ADJACENCY"),
        ("(* 3)", "OPERATOR_ADJACENCY"),
        ("sin + 1", "FUNCTION_WITHOUT_PAREN"),
        ("sqrt", "FUNCTION_WITHOUT_PAREN"),
        ("pow(2,,3)", "BAD_COMMA"),
        ("(1)2", "OPERAND_ADJACENCY"),
        ("2(3)", "OPERAND_ADJACENCY"),
        ("(1)(2)", "OPERAND_ADJACENCY"),
        ("2 sin(1)", "OPERAND_ADJACENCY"),
        ("foo(2)", "UNKNOWN_FUNCTION"),
        ("SIN(0)", "UNKNOWN_FUNCTION"),
        ("()", "EMPTY_PARENS"),
        ("sin()", "EMPTY_PARENS"),
        ("(2 +)", "MISSING_OPERAND"),
        ("1, 2", "BAD_COMMA"),
        ("(1, 2)", "BAD_COMMA"),
        ("pow(2)", "ARITY_MISMATCH"),
        ("sqrt(1, 2)", "ARITY_MISMATCH"),
        ("pow(1, 2, 3)", "ARITY_MISMATCH"),
    ],
)
def test_first_structural_issue_is_reported(text, code):
    assert _issue_code(text) == code


def test_issue_carries_position_of_offending_token():
    tokens = RegexLexer().tokenize("2 */ 3")

    issue = TokenSyntaxValidator().find_issue(tokens)

    assert issue is not None
    assert issue.position == 3


def test_nesting_deeper_than_max_depth_is_rejected():
    ok = "(" * 3 + "1" + ")" * 3
    too_deep = "(" * 4 + "1" + ")" * 4

    assert _issue_code(ok, max_depth=3) is None
    assert _issue_code(too_deep, max_depth=3) == "TOO_DEEP"


def test_function_call_parentheses_count_towards_depth():
    assert _issue_code("sin(sin(1))", max_depth=2) is None
    assert _issue_code("sin(sin((1)))", max_depth=2) == "TOO_DEEP"


def test_is_valid_never_raises_on_lex_error():
    validator = TokenSyntaxValidator()

    assert validator.is_valid("2 @ 3") is False
    assert validator.is_valid("1 + 2") is True


def test_long_flat_expression_validates():
    text = " + ".join(["1"] * 5000)

    assert TokenSyntaxValidator().is_valid(text) is True
