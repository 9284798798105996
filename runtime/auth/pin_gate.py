"""Shared-PIN gate for the viewer and admin endpoints.

There are no users and no sessions: a request is allowed if its auth cookie
holds the configured PIN, and that is the whole model. /log and /health are
never wired through this gate.
"""

import logging
import secrets
from typing import Optional

from fastapi import Request, Response

from exceptions.exceptions import AuthRedirect


logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


class PinGate:
    """Single boolean capability check against a shared secret.

    Parameters
    ----------
    pin:
        The shared secret. It is also the cookie value handed out on login.
    cookie_name:
        Name of the auth cookie.
    max_age:
        Cookie lifetime in seconds.
    """

    def __init__(self, pin: str, cookie_name: str, max_age: int = 86400) -> None:
        self._pin = pin
        self.cookie_name = cookie_name
        self.max_age = max_age

    def authorize(self, cookie_value: Optional[str]) -> bool:
        """True iff the cookie value equals the PIN."""
        if not cookie_value:
            return False
        return secrets.compare_digest(cookie_value.encode("utf-8"), self._pin.encode("utf-8"))

    def check_pin(self, submitted: Optional[str]) -> bool:
        """Check a PIN submitted through the login form."""
        return self.authorize(submitted)

    def require_pin(self, request: Request) -> None:
        """FastAPI dependency: redirect to the login page unless authorized."""
        if not self.authorize(request.cookies.get(self.cookie_name)):
            raise AuthRedirect(LOGIN_PATH)

    def grant(self, request: Request, response: Response) -> None:
        """Attach the auth cookie to a response after a successful login."""
        response.set_cookie(
            key=self.cookie_name,
            value=self._pin,
            max_age=self.max_age,
            httponly=True,
            secure=request.url.scheme == "https",
            samesite="lax",
        )

    def revoke(self, response: Response) -> None:
        response.delete_cookie(key=self.cookie_name)
