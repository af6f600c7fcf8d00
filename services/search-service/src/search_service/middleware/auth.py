from __future__ import annotations

import hmac

from fastapi import Request

from ..config import Settings


class AuthError(RuntimeError):
    pass


def verify_bearer_token(request: Request, settings: Settings) -> None:
    """Check the static shared secret; a service without a token configured is open."""
    if not settings.service_token:
        return
    header = request.headers.get("authorization") or ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise AuthError("Missing bearer token")
    if not hmac.compare_digest(token.strip(), settings.service_token):
        raise AuthError("Invalid bearer token")
