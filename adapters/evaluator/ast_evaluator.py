"""
Adapter: ASTEvaluator
Implementuje port Evaluator — przejście ExprAST w arytmetyce float (double).

Przejście jest post-order po jawnym stosie, a nie rekurencyjne: drzewo
dla "1+1+...+1" ma głębokość równą liczbie składników.

Każdy wynik pośredni przechodzi przez checked(): NaN i ±inf nigdy nie
wychodzą na zewnątrz, tylko DomainError.

eval_expr() — oblicza wartość; opcjonalnie zbiera czytelne kroki
"""
from __future__ import annotations

from typing import Mapping

from adapters.functions import CONSTANTS, call_function, checked, power
from contracts import (
    BinOpNode,
    ConstantNode,
    DomainError,
    EvalResult,
    ExprAST,
    FunctionCallNode,
    NumberNode,
    UnaryOpNode,
    UnknownIdentifierError,
    VariableNode,
)


def _safe_div(a: float, b: float) -> float:
    if b == 0.0:
        raise DomainError("Dzielenie przez zero")
    return a / b


# Mapowanie symboli operatorów na operacje float
_OP_FUNCS = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _safe_div,
    "^": power,
}


def _children(node: ExprAST) -> list[ExprAST]:
    if isinstance(node, UnaryOpNode):
        return [node.operand]
    if isinstance(node, BinOpNode):
        return [node.left, node.right]
    if isinstance(node, FunctionCallNode):
        return list(node.args)
    return []


class ASTEvaluator:
    """Ewaluator wyrażeń zmiennoprzecinkowych oparty na AST."""

    # -- Evaluator protocol ------------------------------------------------

    def eval_expr(
        self,
        ast: ExprAST,
        env: Mapping[str, float] | None = None,
        *,
        with_steps: bool = False,
    ) -> EvalResult:
        """
        Oblicza wartość AST.
        env: opcjonalne podstawienia zmiennych (np. {"x": 5}), tylko do odczytu.
        """
        steps: list[str] | None = [] if with_steps else None
        value = self._eval(ast, env or {}, steps)
        return EvalResult(value=value, steps=steps or [])

    # -- Prywatne ----------------------------------------------------------

    def _eval(
        self,
        root: ExprAST,
        env: Mapping[str, float],
        steps: list[str] | None,
    ) -> float:
        values: list[float] = []
        stack: list[tuple[ExprAST, bool]] = [(root, False)]

        while stack:
            node, expanded = stack.pop()
            children = _children(node)

            if not children:
                values.append(self._leaf(node, env, steps))
                continue

            if not expanded:
                stack.append((node, True))
                for child in reversed(children):
                    stack.append((child, False))
                continue

            args = values[-len(children):]
            del values[-len(children):]
            values.append(self._apply(node, args, steps))

        return values.pop()

    def _leaf(
        self,
        node: ExprAST,
        env: Mapping[str, float],
        steps: list[str] | None,
    ) -> float:
        if isinstance(node, NumberNode):
            return checked(node.value, "literału")

        if isinstance(node, ConstantNode):
            return CONSTANTS[node.name]

        if isinstance(node, VariableNode):
            # Zmienne są jednoliterowe; wielkość liter ma znaczenie
            if len(node.name) != 1 or node.name not in env:
                raise UnknownIdentifierError(f"Nieznany identyfikator: {node.name!r}")
            try:
                val = float(env[node.name])
            except (OverflowError, TypeError, ValueError) as exc:
                raise DomainError(
                    f"Wartość zmiennej {node.name!r} nie jest liczbą skończoną: {exc}"
                ) from exc
            if steps is not None:
                steps.append(f"{node.name} = {_fmt(val)}")
            return checked(val, f"zmiennej {node.name!r}")

        raise TypeError(f"Nieznany typ węzła AST: {type(node)}")

    def _apply(
        self,
        node: ExprAST,
        args: list[float],
        steps: list[str] | None,
    ) -> float:
        if isinstance(node, UnaryOpNode):
            (val,) = args
            result = -val
            step = f"-({_fmt(val)}) = {_fmt(result)}"

        elif isinstance(node, BinOpNode):
            left_val, right_val = args
            fn = _OP_FUNCS.get(node.op)
            if fn is None:
                raise ValueError(f"Nieznany operator: {node.op!r}")
            result = checked(fn(left_val, right_val), f"operacji {node.op!r}")
            step = f"{_fmt(left_val)} {node.op} {_fmt(right_val)} = {_fmt(result)}"

        elif isinstance(node, FunctionCallNode):
            result = call_function(node.name, args)
            shown = ", ".join(_fmt(a) for a in args)
            step = f"{node.name}({shown}) = {_fmt(result)}"

        else:
            raise TypeError(f"Nieznany typ węzła AST: {type(node)}")

        if steps is not None:
            steps.append(step)
        return result


def _fmt(v: float) -> str:
    """Czytelna reprezentacja float (bez '.0' dla liczb całkowitych)."""
    if v.is_integer() and abs(v) < 1e15:
        return str(int(v))
    return repr(v)
