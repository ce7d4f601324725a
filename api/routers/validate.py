"""
Router: POST /validate
Walidacja "w locie": nigdy nie liczy wartości, zawsze zwraca 200.
"""
from fastapi import APIRouter, Depends

from api.dependencies import get_calculator
from api.schemas import ValidateRequest, ValidateResponse
from calculator import Calculator
from contracts import LexError, ValidationIssue

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidateResponse)
async def validate(
    body: ValidateRequest,
    calculator: Calculator = Depends(get_calculator),
) -> ValidateResponse:
    try:
        issue = calculator.check(body.text)
    except LexError as exc:
        issue = ValidationIssue(code=exc.code or "BAD_CHAR", message=exc.message, position=exc.position)
    return ValidateResponse(text=body.text, valid=issue is None, issue=issue)
