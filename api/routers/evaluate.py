"""
Router: POST /evaluate
Liczy wartość wyrażenia z opcjonalnymi zmiennymi.
Błędy EvalError obsługuje globalny handler w api/main.py (HTTP 422).
"""
from fastapi import APIRouter, Depends

from api.dependencies import get_calculator
from api.schemas import ErrorResponse, EvaluateRequest, EvaluateResponse
from calculator import Calculator

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluateResponse, responses={422: {"model": ErrorResponse}})
async def evaluate(
    body: EvaluateRequest,
    calculator: Calculator = Depends(get_calculator),
) -> EvaluateResponse:
    result = calculator.evaluate(body.text, body.variables, with_steps=body.steps)
    return EvaluateResponse(text=body.text, value=result.value, steps=result.steps)
