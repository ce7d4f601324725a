"""
Port: Evaluator
Odpowiedzialność: deterministyczne liczenie wartości ExprAST.
"""
from typing import Mapping, Protocol, runtime_checkable

from contracts import EvalResult, ExprAST


@runtime_checkable
class Evaluator(Protocol):
    def eval_expr(
        self,
        ast: ExprAST,
        env: Mapping[str, float] | None = None,
        *,
        with_steps: bool = False,
    ) -> EvalResult:
        """
        Evaluates an expression AST to a finite float.
        env: optional variable bindings for VariableNode resolution (read-only).
        Returns EvalResult with:
          - value: always finite
          - steps: human-readable computation steps when with_steps=True
        Raises UnknownIdentifierError for unbound variables.
        Raises DomainError for division by zero, sqrt/log outside their domain
        and any NaN or infinite intermediate result.
        """
        ...
