"""
FastAPI service exposing the BuyWise recommendation pipeline.

Endpoints:
    GET  /health              static liveness payload
    POST /api/recommendations run the pipeline for {query, weights?, userProfile?}

Every client error is a 400 with an {"error": "..."} body:
    - body is not JSON                     "Request body must be valid JSON"
    - query missing, not a string or only
      whitespace (stricter than a plain
      emptiness check)                     "Missing or invalid 'query' field"
    - weights not an object, or a weight
      negative, non-numeric, NaN or ±Inf   "Invalid 'weights' field: ..."
    - userProfile not an object            "Invalid 'userProfile' field"
Pipeline failures are an opaque 500 {"error": "Internal server error"}.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agents.supervisor import SupervisorAgent
from config import Settings, configure_logging
from schemas import RecommendationRequest

logger = logging.getLogger(__name__)

APP_NAME = "BuyWise – Agentic AI Buying Assistant"


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


def validation_message(errors: List[Dict[str, Any]]) -> str:
    """Map the first pydantic error of a request body to the API's error text."""
    if not errors:
        return "Missing or invalid 'query' field"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Request body must be valid JSON"
    loc = tuple(first.get("loc", ()))
    field = loc[1] if len(loc) > 1 and loc[0] == "body" else None
    if field == "weights":
        return f"Invalid 'weights' field: {first.get('msg', 'invalid value')}"
    if field == "userProfile":
        return "Invalid 'userProfile' field"
    return "Missing or invalid 'query' field"


def create_app(supervisor: Optional[SupervisorAgent] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    supervisor = supervisor or SupervisorAgent.from_settings(settings)

    app = FastAPI(title="BuyWise Recommendations")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = validation_message(list(exc.errors()))
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return _bad_request(message)

    @app.get("/health")
    def health():
        return {
            "name": APP_NAME,
            "status": "ok",
            "message": "Backend is running.",
        }

    @app.post("/api/recommendations")
    async def recommendations(payload: RecommendationRequest):
        try:
            ctx = await run_in_threadpool(
                supervisor.run, payload.query, payload.weight_vector(), payload.user_profile()
            )
        except Exception:  # noqa: BLE001
            logger.exception("Error in /api/recommendations")
            return JSONResponse(status_code=500, content={"error": "Internal server error"})
        return ctx.to_response()

    return app


def serve(settings: Optional[Settings] = None) -> None:
    import uvicorn

    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    serve()
