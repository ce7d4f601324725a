"""
api/main.py — punkt wejścia FastAPI.

Lifespan:
  - Tworzy jeden Calculator (bezstanowy, współdzielony przez wszystkie żądania)
  - Głębokość zagnieżdżenia bierze z config.max_depth

Rdzeń (calculator.py, adapters/) nie ma żadnego I/O, a to API jest tylko
cienką warstwą nad nim.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.routers import evaluate, functions, tokenize, validate
from api.schemas import HealthResponse
from calculator import Calculator
from config import Settings
from contracts import EvalError

logger = logging.getLogger("exprcalc.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    app.state.calculator = Calculator(max_depth=settings.max_depth)
    logger.info("ExprCalc API ready (max_depth=%d).", settings.max_depth)
    yield
    logger.info("Shutting down.")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(validate.router)
    app.include_router(evaluate.router)
    app.include_router(tokenize.router)
    app.include_router(functions.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(
            status="ok",
            version=settings.app_version,
            max_depth=settings.max_depth,
        )

    # Globalny handler błędów obliczeń, dyskryminowany po "kind"
    @app.exception_handler(EvalError)
    async def eval_error_handler(request: Request, exc: EvalError):
        return JSONResponse(status_code=422, content=exc.to_dict())

    return app


app = create_app()
