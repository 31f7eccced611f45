"""HTTP API for party analysis.

Endpoints:
    POST /api/analyze: Analyze a party against an encounter.
    GET /api/classes: Class catalog with base stats.
    GET /api/encounters: Adventure catalog.
    GET /health: Liveness and success model availability.

Run with ``party-optimizer-serve`` or
``uvicorn --factory party_optimizer.api.app:create_app``.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool

from party_optimizer.ai.tactician import get_tactician
from party_optimizer.core.config import Settings, get_settings
from party_optimizer.core.exceptions import AnalysisError, ValidationError
from party_optimizer.core.logging import bind_context, configure_logging, get_logger, request_context
from party_optimizer.engine.orchestrator import PartyAnalyzer
from party_optimizer.models.analysis import AnalyzeRequest, AnalyzeResponse
from party_optimizer.models.classes import CLASS_PROFILES
from party_optimizer.models.encounters import ENCOUNTER_CATALOG

logger = get_logger(__name__)

REQUIRED_FIELDS = ("party", "encounter", "current_turn_character")
MISSING_FIELDS_MESSAGE = "Missing required fields: party, encounter, current_turn_character"
ANALYSIS_FAILED_MESSAGE = "Failed to analyze party composition"

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})

def _missing_fields(body: dict[str, Any]) -> list[str]:
    missing = []
    for key in REQUIRED_FIELDS:
        value = body.get(key)
        # An empty encounter object is present and analyzes as an unknown event.
        absent = value is None if key == "encounter" else not value
        if absent:
            missing.append(key)
    return missing

def parse_analyze_request(body: Any) -> AnalyzeRequest:
    """Validate a decoded request body.

    Args:
        body: Decoded JSON body.

    Returns:
        The validated request.

    Raises:
        ValidationError: If party or current_turn_character is missing or
            falsy (an empty party list included), encounter is missing or
            null, or the payload does not fit the schema.
    """
    if not isinstance(body, dict):
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    missing = _missing_fields(body)
    if missing:
        raise ValidationError(MISSING_FIELDS_MESSAGE, details={"missing": missing})
    try:
        return AnalyzeRequest.model_validate(body)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ValidationError(
            f"Invalid request: {location}: {first['msg']}",
            field_name=location,
        ) from exc

def create_app(
    analyzer: PartyAnalyzer | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        analyzer: Analyzer to serve; built from settings when omitted.
        settings: Application settings; the global settings by default.

    Returns:
        The configured application.
    """
    settings = settings or get_settings()
    if analyzer is None:
        analyzer = PartyAnalyzer(
            tactician=get_tactician(settings),
            default_success_chance=settings.model.default_success_chance,
        )

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Predicts a party's chance of success against an encounter",
        version=settings.app_version,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.state.analyzer = analyzer

    @app.post("/api/analyze", response_model=AnalyzeResponse)
    async def analyze(request: Request) -> Any:
        with request_context():
            try:
                body = await request.json()
            except (json.JSONDecodeError, UnicodeDecodeError):
                logger.warning("Rejected analysis request with malformed JSON")
                return _error(400, "Request body must be valid JSON")

            try:
                payload = parse_analyze_request(body)
            except ValidationError as exc:
                logger.warning("Rejected analysis request", error=exc.message)
                return _error(400, exc.message)

            bind_context(event_type=payload.encounter.event_type)
            try:
                analysis = await run_in_threadpool(
                    app.state.analyzer.analyze,
                    payload.party,
                    payload.encounter,
                    payload.current_turn_character,
                )
            except AnalysisError as exc:
                logger.error("Analysis failed", error=exc.message, **exc.details)
                return _error(500, ANALYSIS_FAILED_MESSAGE)

            return AnalyzeResponse(analysis=analysis)

    @app.get("/api/classes")
    def list_classes() -> list[dict[str, Any]]:
        return [profile.model_dump(mode="json") for profile in CLASS_PROFILES.values()]

    @app.get("/api/encounters")
    def list_encounters() -> list[dict[str, Any]]:
        return [profile.model_dump(mode="json") for profile in ENCOUNTER_CATALOG]

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"status": "ok", "model_available": app.state.analyzer.model_available}

    return app

def main() -> None:
    """Run the API with uvicorn (``party-optimizer-serve``)."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting API", host=settings.api.host, port=settings.api.port)
    uvicorn.run(create_app(settings=settings), host=settings.api.host, port=settings.api.port)



if __name__ == "__main__":
    main()

__all__ = [
    "MISSING_FIELDS_MESSAGE",
    "ANALYSIS_FAILED_MESSAGE",
    "parse_analyze_request",
    "create_app",
    "main",
]
