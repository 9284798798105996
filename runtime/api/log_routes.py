"""Gated HTTP routes for reading and clearing logs.

Exposes:

- GET  /logs                        -> ["server", ...]
- GET  /logs?server=S               -> ["resource", ...]
- GET  /logs?server=S&resource=R    -> last records, oldest first
- POST /clear {server, resource}    -> truncate one log

In flat storage the server parameter is ignored: /logs lists resources and
/logs?resource=R tails.

All of them require the PIN cookie; without it the caller is redirected to
/login.
"""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from exceptions.exceptions import InvalidPayloadError, MissingFieldError
from ..auth.pin_gate import PinGate
from ..models.api_models import ErrorResponse, MessageResponse
from ..models.log_models import ListResources, ListServers, LogQuery, TailLog
from ..store.log_store import LogStore


logger = logging.getLogger(__name__)


class AsciiJSONResponse(JSONResponse):
    """JSON body with non-ASCII escaped, so stored lone surrogates still encode."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, allow_nan=False, separators=(",", ":")).encode("ascii")


def init_routes(app: FastAPI, log_store: LogStore, pin_gate: PinGate) -> None:
    """Attach the shared objects used by the route handlers to this app."""
    app.state.log_store = log_store
    app.state.pin_gate = pin_gate


def _require_log_store(request: Request) -> LogStore:
    log_store = getattr(request.app.state, "log_store", None)
    if log_store is None:
        raise HTTPException(
            status_code=500,
            detail="LogStore is not configured on the server.",
        )
    return log_store


def require_pin(request: Request) -> None:
    """Dependency shared by every gated route."""
    pin_gate = getattr(request.app.state, "pin_gate", None)
    if pin_gate is None:
        raise HTTPException(
            status_code=500,
            detail="PinGate is not configured on the server.",
        )
    pin_gate.require_pin(request)


router = APIRouter(dependencies=[Depends(require_pin)])


def resolve_log_query(
    server: Optional[str],
    resource: Optional[str],
    log_store: LogStore,
) -> LogQuery:
    """Turn the /logs query parameters into exactly one LogQuery."""
    if log_store.flat:
        if not resource:
            return ListResources()
        return TailLog(log_store.key(None, resource))

    if resource:
        if not server:
            raise MissingFieldError("server")
        return TailLog(log_store.key(server, resource))
    if server:
        return ListResources(server)
    return ListServers()


def run_log_query(query: LogQuery, log_store: LogStore) -> list:
    if isinstance(query, TailLog):
        return log_store.tail(query.key)
    if isinstance(query, ListResources):
        return log_store.list_resources(query.server)
    return log_store.list_servers()


@router.get("/logs", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def get_logs(request: Request, server: Optional[str] = None, resource: Optional[str] = None):
    """List servers, list a server's resources, or tail one resource.

    Always answers with a JSON array.
    """
    log_store = _require_log_store(request)
    try:
        query = resolve_log_query(server, resource, log_store)
        return AsciiJSONResponse(content=run_log_query(query, log_store))

    except MissingFieldError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    except Exception as e:
        logger.exception(
            "[LOGS] Error reading logs for server=%r resource=%r", server, resource
        )
        return JSONResponse(status_code=500, content={"error": str(e)})


@router.post(
    "/clear",
    responses={
        200: {"model": MessageResponse},
        400: {"model": ErrorResponse},
        404: {"model": MessageResponse},
        500: {"model": ErrorResponse},
    },
)
async def clear_logs(request: Request):
    """Truncate one resource's log.

    `resource` is always required, `server` only in server-scoped storage.
    Clearing a log that was never written answers 404.
    """
    log_store = _require_log_store(request)
    body: Any = None
    try:
        try:
            body = await request.json()
        except ValueError as e:
            raise InvalidPayloadError(f"Invalid JSON body: {e}") from e
        if not isinstance(body, dict):
            raise InvalidPayloadError()

        resource = body.get("resource")
        server = body.get("server")
        if not resource:
            raise MissingFieldError(
                "resource", "Resource name is required to clear logs."
            )
        if not log_store.flat and not server:
            raise MissingFieldError("server", "Server name is required to clear logs.")

        key = log_store.key(server, resource)
        label = key.resource if key.server is None else f"{key.server}/{key.resource}"

        if log_store.clear(key):
            return JSONResponse(content={"message": f"Logs cleared for {label}"})
        return JSONResponse(
            status_code=404, content={"message": f"No logs found for {label}"}
        )

    except (InvalidPayloadError, MissingFieldError) as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    except Exception as e:
        logger.exception("[LOGS] Error clearing logs for %r", body)
        return JSONResponse(status_code=500, content={"error": str(e)})
