"""
Router: POST /tokenize
Zwraca tokeny z pozycjami (np. do podświetlania składni).
"""
from fastapi import APIRouter, Depends

from api.dependencies import get_calculator
from api.schemas import ErrorResponse, TokenizeRequest, TokenizeResponse
from calculator import Calculator

router = APIRouter(prefix="/tokenize", tags=["tokenize"])


@router.post("", response_model=TokenizeResponse, responses={422: {"model": ErrorResponse}})
async def tokenize(
    body: TokenizeRequest,
    calculator: Calculator = Depends(get_calculator),
) -> TokenizeResponse:
    return TokenizeResponse(text=body.text, tokens=calculator.tokenize(body.text))
