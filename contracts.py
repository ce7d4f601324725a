"""
contracts.py — Jedyne źródło prawdy dla wszystkich typów danych w ExprCalc.
Wszystkie moduły importują WYŁĄCZNIE stąd. Nie modyfikować bez versioning.
"""
from __future__ import annotations

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

CONTRACTS_VERSION = "1.0.0"


# ─────────────────────────── Lexer ───────────────────────────────────────

class TokenKind(str, Enum):
    NUMBER = "number"          # 3, 2.5, 1.5e-2
    IDENTIFIER = "identifier"  # PI, sin, x
    OPERATOR = "operator"      # + - * / ^
    LPAREN = "lparen"
    RPAREN = "rparen"
    COMMA = "comma"


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    text: str                      # oryginalny leksem
    position: int                  # offset znaku w tekście wejściowym
    value: Optional[float] = None  # tylko dla NUMBER


# ─────────────────────────── Validator ───────────────────────────────────

class ValidationIssue(BaseModel):
    code: str      # np. "UNBALANCED_PARENS", "OPERATOR_ADJACENCY", "ARITY_MISMATCH"
    message: str
    position: Optional[int] = None


# ─────────────────────────── AST ─────────────────────────────────────────

class NumberNode(BaseModel):
    node_type: Literal["number"] = "number"
    value: float


class ConstantNode(BaseModel):
    node_type: Literal["constant"] = "constant"
    name: str  # kanoniczna nazwa z tabeli stałych ("PI", "E")


class VariableNode(BaseModel):
    node_type: Literal["variable"] = "variable"
    name: str


class UnaryOpNode(BaseModel):
    node_type: Literal["unary"] = "unary"
    op: Literal["-"]
    operand: "ExprAST"


class BinOpNode(BaseModel):
    node_type: Literal["binop"] = "binop"
    op: Literal["+", "-", "*", "/", "^"]
    left: "ExprAST"
    right: "ExprAST"


class FunctionCallNode(BaseModel):
    node_type: Literal["call"] = "call"
    name: str                 # klucz tabeli funkcji (małe litery)
    args: list["ExprAST"]


ExprAST = Union[
    NumberNode, ConstantNode, VariableNode,
    UnaryOpNode, BinOpNode, FunctionCallNode,
]
UnaryOpNode.model_rebuild()
BinOpNode.model_rebuild()
FunctionCallNode.model_rebuild()


# ─────────────────────────── Evaluator ───────────────────────────────────

class EvalResult(BaseModel):
    value: float
    steps: list[str] = Field(default_factory=list)  # czytelne kroki


# ─────────────────────────── Błędy ───────────────────────────────────────

class ErrorKind(str, Enum):
    LEX = "lex_error"
    SYNTAX = "syntax_error"
    UNKNOWN_IDENTIFIER = "unknown_identifier"
    DOMAIN = "domain_error"


class EvalError(Exception):
    """Bazowy błąd obliczania wyrażenia. Zawsze do obsłużenia przez wołającego."""

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        position: int | None = None,
        code: str | None = None,
    ) -> None:
        if not hasattr(type(self), "kind"):
            raise TypeError("EvalError jest abstrakcyjny, użyj konkretnej podklasy")
        super().__init__(message)
        self.message = message
        self.position = position
        self.code = code

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "position": self.position,
            "code": self.code,
        }


class LexError(EvalError):
    kind = ErrorKind.LEX


class ExpressionSyntaxError(EvalError):
    kind = ErrorKind.SYNTAX


class UnknownIdentifierError(EvalError):
    kind = ErrorKind.UNKNOWN_IDENTIFIER


class DomainError(EvalError):
    kind = ErrorKind.DOMAIN
