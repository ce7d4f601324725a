"""
Router: GET /functions
Tabela funkcji (nazwa, arność, dziedzina) i stałych.
"""
from fastapi import APIRouter

from adapters.functions import CONSTANTS, FUNCTIONS
from api.schemas import FunctionInfo, FunctionsResponse

router = APIRouter(prefix="/functions", tags=["functions"])


@router.get("", response_model=FunctionsResponse)
async def list_functions() -> FunctionsResponse:
    return FunctionsResponse(
        functions=[
            FunctionInfo(name=fn.name, arity=fn.arity, domain=fn.domain_hint)
            for fn in FUNCTIONS.values()
        ],
        constants=dict(CONSTANTS),
    )
