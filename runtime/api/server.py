"""
FastAPI application entry point for the NUI intercept logger.

Responsibilities:
- create the FastAPI app from an explicit Settings value
- construct the shared objects (LogStore, IngestAgent, PinGate)
- install CORS, the request body limit and the auth-redirect handler
- include the ingest, log and viewer routes
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from configs.settings import Settings, settings as default_settings
from exceptions.exceptions import AuthRedirect
from runtime.agents.ingest_agent import IngestAgent
from runtime.auth.pin_gate import PinGate
from runtime.store.log_store import LogStore
from . import ingest_routes, log_routes, viewer_routes


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build a fully wired app. Settings are read once, here."""
    settings = settings or default_settings

    # ---------------------------------------------------------------------------
    # Shared objects
    # ---------------------------------------------------------------------------

    # Append-only JSONL files under the configured log directory.
    log_store = LogStore(
        log_dir=str(settings.log_dir),
        flat=settings.flat_storage,
        default_limit=settings.tail_limit,
    )

    # Sanitize + infer + append for POST /log.
    ingest_agent = IngestAgent(log_store=log_store)

    # Shared-PIN cookie check for the viewer and admin routes.
    pin_gate = PinGate(
        pin=settings.pin,
        cookie_name=settings.cookie_name,
        max_age=settings.cookie_max_age,
    )

    # ---------------------------------------------------------------------------
    # FastAPI app + middleware
    # ---------------------------------------------------------------------------

    app = FastAPI(title="NUI Intercept Logger")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    max_body_bytes = settings.max_body_bytes

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length is not None and length.isdigit() and int(length) > max_body_bytes:
            logger.warning(
                "[HTTP] Rejected %s %s: body of %s bytes exceeds %d",
                request.method, request.url.path, length, max_body_bytes,
            )
            return JSONResponse(status_code=413, content={"error": "Request body too large."})
        return await call_next(request)

    @app.exception_handler(AuthRedirect)
    async def redirect_to_login(request: Request, exc: AuthRedirect) -> RedirectResponse:
        return RedirectResponse(url=exc.location, status_code=303)

    # ---------------------------------------------------------------------------
    # Route registration
    # ---------------------------------------------------------------------------

    # Attach the shared objects to this app, then include the routers.
    ingest_routes.init_routes(app, ingest_agent=ingest_agent, log_store=log_store)
    log_routes.init_routes(app, log_store=log_store, pin_gate=pin_gate)
    viewer_routes.init_routes(app, pin_gate=pin_gate, flat_storage=settings.flat_storage)

    app.include_router(ingest_routes.router)
    app.include_router(log_routes.router)
    app.include_router(viewer_routes.router)

    return app


app = create_app()
