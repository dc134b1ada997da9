"""FastAPI backend for Pick Copilot."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pickcopilot import __version__
from pickcopilot.api.schemas import Analysis, ErrorResponse, PickPayload
from pickcopilot.config import get_llm_api_key
from pickcopilot.gateway.errors import GatewayError
from pickcopilot.gateway.service import AnalysisGateway

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Refuse to start without a key.
    get_llm_api_key()
    yield


app = FastAPI(
    title="Pick Copilot API",
    version=__version__,
    description="Value-betting analysis of a single or multi-leg pick.",
    lifespan=lifespan,
)


@app.middleware("http")
async def cors_headers(request: Request, call_next) -> Response:
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(RequestValidationError)
async def invalid_payload(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.error("Rejected pick payload: %s", exc.errors())
    return _error_response(500, "Invalid pick payload.")


def get_gateway() -> AnalysisGateway:
    return AnalysisGateway()


GatewayDep = Annotated[AnalysisGateway, Depends(get_gateway)]


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post(
    "/analyze-pick",
    response_model=Analysis,
    responses={429: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def analyze_pick(payload: PickPayload, gateway: GatewayDep) -> JSONResponse:
    try:
        analysis = gateway.handle(payload.to_pick())
    except GatewayError as exc:
        return _error_response(exc.status_code, exc.message)
    except Exception:
        logger.exception("Unexpected error in analyze-pick")
        return _error_response(500, "Unexpected error while analyzing the pick.")
    return JSONResponse(analysis.model_dump(by_alias=True))


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())
