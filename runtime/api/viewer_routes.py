"""Browser-facing routes: login, logout and the viewer page.

- GET  /        -> redirect to /view
- GET  /login   -> PIN form
- POST /login   -> set the auth cookie and go to /view, or back to /login
- GET  /logout  -> drop the cookie
- GET  /view    -> polling viewer (PIN required)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ..auth.pin_gate import LOGIN_PATH, PinGate
from .log_routes import require_pin
from .pages import login_page, viewer_page


logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)

VIEW_PATH = "/view"


def init_routes(app: FastAPI, pin_gate: PinGate, flat_storage: bool = False) -> None:
    """Attach the shared objects used by the route handlers to this app."""
    app.state.pin_gate = pin_gate
    app.state.flat_storage = flat_storage


def _require_pin_gate(request: Request) -> PinGate:
    pin_gate = getattr(request.app.state, "pin_gate", None)
    if pin_gate is None:
        raise HTTPException(
            status_code=500,
            detail="PinGate is not configured on the server.",
        )
    return pin_gate


@router.get("/")
def root() -> RedirectResponse:
    return RedirectResponse(url=VIEW_PATH, status_code=303)


@router.get("/login", response_class=HTMLResponse)
def login_form() -> HTMLResponse:
    return HTMLResponse(content=login_page())


@router.post("/login")
def login(request: Request, pin: Optional[str] = Form(None)) -> RedirectResponse:
    """Exchange the PIN for the auth cookie.

    A wrong PIN just lands back on the form, with no hint as to why.
    """
    gate = _require_pin_gate(request)
    if not gate.check_pin(pin):
        logger.warning("[AUTH] Rejected login attempt from %s", getattr(request.client, "host", None))
        return RedirectResponse(url=LOGIN_PATH, status_code=303)

    response = RedirectResponse(url=VIEW_PATH, status_code=303)
    gate.grant(request, response)
    return response


@router.get("/logout")
def logout(request: Request) -> RedirectResponse:
    gate = _require_pin_gate(request)
    response = RedirectResponse(url=LOGIN_PATH, status_code=303)
    gate.revoke(response)
    return response


@router.get("/view", response_class=HTMLResponse, dependencies=[Depends(require_pin)])
def view(request: Request) -> HTMLResponse:
    return HTMLResponse(content=viewer_page(flat=getattr(request.app.state, "flat_storage", False)))
