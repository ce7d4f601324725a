"""
schemas.py — Request/Response modele FastAPI.
Oddzielone od contracts.py żeby API mogło ewoluować niezależnie.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from contracts import Token, ValidationIssue

_MAX_TEXT = 10_000


# ─────────────────────────── /validate ───────────────────────────

class ValidateRequest(BaseModel):
    text: str = Field(..., max_length=_MAX_TEXT)


class ValidateResponse(BaseModel):
    text: str
    valid: bool
    issue: Optional[ValidationIssue] = None


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    text: str = Field(..., max_length=_MAX_TEXT)
    variables: dict[str, float] = Field(default_factory=dict)
    steps: bool = False  # zwraca kroki obliczeń


class EvaluateResponse(BaseModel):
    text: str
    value: float
    steps: list[str] = Field(default_factory=list)


# ─────────────────────────── /tokenize ───────────────────────────

class TokenizeRequest(BaseModel):
    text: str = Field(..., max_length=_MAX_TEXT)


class TokenizeResponse(BaseModel):
    text: str
    tokens: list[Token]


# ─────────────────────────── /functions ──────────────────────────

class FunctionInfo(BaseModel):
    name: str
    arity: int
    domain: str = ""


class FunctionsResponse(BaseModel):
    functions: list[FunctionInfo]
    constants: dict[str, float]


# ─────────────────────────── błędy ───────────────────────────────

class ErrorResponse(BaseModel):
    kind: str
    message: str
    position: Optional[int] = None
    code: Optional[str] = None


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
    max_depth: int
