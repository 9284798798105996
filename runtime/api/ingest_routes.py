"""Public HTTP routes: record ingestion and health.

Exposes:

- POST /log    -> append one intercepted record (no auth, external clients
                  must be able to log without a cookie)
- GET  /health -> liveness + configured log directory
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from exceptions.exceptions import InvalidPayloadError, MissingFieldError
from ..agents.ingest_agent import IngestAgent
from ..models.api_models import ErrorResponse, HealthResponse
from ..store.log_store import LogStore


logger = logging.getLogger(__name__)

router = APIRouter()


def init_routes(app: FastAPI, ingest_agent: IngestAgent, log_store: LogStore) -> None:
    """Attach the shared objects used by the route handlers to this app."""
    app.state.ingest_agent = ingest_agent
    app.state.log_store = log_store


def _require_ingest_agent(request: Request) -> IngestAgent:
    agent = getattr(request.app.state, "ingest_agent", None)
    if agent is None:
        raise HTTPException(
            status_code=500,
            detail="IngestAgent is not configured on the server.",
        )
    return agent


def _require_log_store(request: Request) -> LogStore:
    log_store = getattr(request.app.state, "log_store", None)
    if log_store is None:
        raise HTTPException(
            status_code=500,
            detail="LogStore is not configured on the server.",
        )
    return log_store


@router.post(
    "/log",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def receive_log(request: Request) -> Response:
    """Append one record to its resource's log.

    The body is a free-form JSON object with at least `resource`; `server`
    is optional. Answers 200 with an empty body on success.
    """
    agent = _require_ingest_agent(request)

    try:
        try:
            body = await request.json()
        except ValueError as e:
            raise InvalidPayloadError(f"Invalid JSON body: {e}") from e

        agent.ingest(body)
        return Response(status_code=200)

    except (InvalidPayloadError, MissingFieldError) as e:
        logger.warning("[INGEST] Rejected record: %s", e)
        return JSONResponse(status_code=400, content={"error": str(e)})

    except Exception as e:
        logger.exception("[INGEST] Error logging data")
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """
    Simple health check endpoint for uptime monitoring.
    """
    log_store = _require_log_store(request)
    return HealthResponse(
        status="running",
        logDirectory=str(log_store.log_dir),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
