"""
calculator.py — publiczna fasada ExprCalc.

Przepływ (jednokierunkowy, bez współdzielonego stanu):
  tekst → Lexer → tokeny → SyntaxValidator → ExpressionParser → ExprAST → Evaluator

Walidator zawsze działa przed parserem, więc wyrażenie odrzucone przez
is_valid_expression() nigdy nie daje wyniku liczbowego.

API modułowe (używa domyślnego Calculator z głębokością z Settings):
  tokenize(text)                        -> list[Token]
  is_valid_expression(text)             -> bool
  evaluate_expression(text, variables)  -> float   (albo wyjątek EvalError)
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Mapping

from adapters.evaluator.ast_evaluator import ASTEvaluator
from adapters.expression_parser.precedence_parser import PrecedenceParser
from adapters.lexer.regex_lexer import RegexLexer
from adapters.validator.syntax_validator import TokenSyntaxValidator
from contracts import (
    EvalError,
    EvalResult,
    ExprAST,
    ExpressionSyntaxError,
    Token,
    ValidationIssue,
)
from ports.evaluator import Evaluator
from ports.expression_parser import ExpressionParser
from ports.lexer import Lexer
from ports.validator import SyntaxValidator

logger = logging.getLogger("exprcalc.calculator")


class Calculator:
    """
    Składa adaptery w jeden potok. Instancja jest niemutowalna po utworzeniu
    i może być używana współbieżnie z wielu wątków.
    """

    def __init__(
        self,
        max_depth: int = 64,
        lexer: Lexer | None = None,
        validator: SyntaxValidator | None = None,
        parser: ExpressionParser | None = None,
        evaluator: Evaluator | None = None,
    ) -> None:
        self.max_depth = max_depth
        self._lexer = lexer or RegexLexer()
        self._validator = validator or TokenSyntaxValidator(
            lexer=self._lexer, max_depth=max_depth,
        )
        self._parser = parser or PrecedenceParser(max_depth=max_depth)
        self._evaluator = evaluator or ASTEvaluator()

    def tokenize(self, text: str) -> list[Token]:
        return self._lexer.tokenize(text)

    def check(self, text: str) -> ValidationIssue | None:
        """Pierwszy problem strukturalny albo None. LexError jest propagowany."""
        return self._validator.find_issue(self._lexer.tokenize(text))

    def is_valid(self, text: str) -> bool:
        return self._validator.is_valid(text)

    def parse(self, text: str) -> ExprAST:
        tokens = self._lexer.tokenize(text)
        issue = self._validator.find_issue(tokens)
        if issue is not None:
            raise ExpressionSyntaxError(issue.message, position=issue.position, code=issue.code)
        return self._parser.parse(tokens)

    def evaluate(
        self,
        text: str,
        variables: Mapping[str, float] | None = None,
        *,
        with_steps: bool = False,
    ) -> EvalResult:
        try:
            ast = self.parse(text)
            return self._evaluator.eval_expr(ast, variables, with_steps=with_steps)
        except EvalError as exc:
            logger.debug("Odrzucono wyrażenie %r: %s (%s)", text, exc, exc.kind.value)
            raise


@lru_cache(maxsize=1)
def default_calculator() -> Calculator:
    from config import Settings
    return Calculator(max_depth=Settings().max_depth)


def tokenize(text: str) -> list[Token]:
    return default_calculator().tokenize(text)


def is_valid_expression(text: str) -> bool:
    return default_calculator().is_valid(text)


def evaluate_expression(text: str, variables: Mapping[str, float] | None = None) -> float:
    return default_calculator().evaluate(text, variables).value
