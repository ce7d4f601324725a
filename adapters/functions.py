"""
Tabele funkcji i stałych — jedyne miejsce, w którym są zdefiniowane.

Parser sprawdza tu nazwę i arność wywołania, ewaluator bierze stąd
implementację, więc gramatyka i dispatch nie mogą się rozjechać.
Dodanie funkcji = dodanie jednego wpisu do FUNCTIONS.

Stałe dopasowywane są bez względu na wielkość liter (klucze: wielkie litery).
Funkcje dopasowywane są dokładnie (klucze: małe litery).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from contracts import DomainError, ExpressionSyntaxError


@dataclass(frozen=True)
class MathFunction:
    name: str
    arity: int
    impl: Callable[..., float]
    # None = funkcja określona dla każdego skończonego argumentu
    domain: Optional[Callable[..., bool]] = None
    domain_hint: str = ""


def checked(value: float, what: str) -> float:
    """Normalizuje NaN / ±inf do DomainError."""
    if not math.isfinite(value):
        raise DomainError(f"Wynik {what} nie jest skończoną liczbą: {value!r}")
    return value


def power(base: float, exponent: float) -> float:
    """Wspólna implementacja '^' i pow(): math.pow, nigdy liczby zespolone."""
    try:
        result = math.pow(base, exponent)
    except (ValueError, OverflowError, ZeroDivisionError) as exc:
        raise DomainError(f"pow({base!r}, {exponent!r}) jest nieokreślone: {exc}") from exc
    return checked(result, f"pow({base!r}, {exponent!r})")


CONSTANTS: Mapping[str, float] = MappingProxyType({
    "PI": math.pi,
    "E": math.e,
})

FUNCTIONS: Mapping[str, MathFunction] = MappingProxyType({
    "sin":  MathFunction("sin", 1, math.sin),
    "cos":  MathFunction("cos", 1, math.cos),
    "tan":  MathFunction("tan", 1, math.tan),
    "sqrt": MathFunction("sqrt", 1, math.sqrt, lambda x: x >= 0, "argument >= 0"),
    "log":  MathFunction("log", 1, math.log, lambda x: x > 0, "argument > 0"),
    "pow":  MathFunction("pow", 2, power),
})


def lookup_constant(name: str) -> str | None:
    """Zwraca kanoniczną nazwę stałej albo None."""
    key = name.upper()
    return key if key in CONSTANTS else None


def is_function(name: str) -> bool:
    return name in FUNCTIONS


def call_function(name: str, args: list[float]) -> float:
    """
    Wywołuje funkcję z tabeli. Arność jest już sprawdzona przez parser,
    tu pilnujemy tylko dziedziny i skończoności wyniku.
    """
    fn = FUNCTIONS[name]
    if len(args) != fn.arity:
        raise ExpressionSyntaxError(f"{name}() oczekuje {fn.arity} arg(ów), dostało {len(args)}")
    if fn.domain is not None and not fn.domain(*args):
        shown = ", ".join(repr(a) for a in args)
        raise DomainError(f"{name}({shown}) poza dziedziną ({fn.domain_hint})")
    try:
        result = fn.impl(*args)
    except (ValueError, OverflowError, ZeroDivisionError) as exc:
        raise DomainError(f"{name}() jest nieokreślone: {exc}") from exc
    return checked(result, f"{name}()")
