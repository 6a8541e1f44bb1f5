from __future__ import annotations

import logging
from functools import wraps

from flask import request, g, abort, current_app

from utils.tokens import Identity, TokenError

logger = logging.getLogger(__name__)

INVALID_TOKEN_MSG = "Invalid or expired token"


def get_token_service():
    return current_app.extensions["token_service"]


def _token_from_request() -> str | None:
    """Bearer header first, then the access-token cookie. Empty values count as absent."""
    auth = request.headers.get("Authorization", "").strip()
    if auth:
        scheme, _, token = auth.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    cookie = request.cookies.get(current_app.config["ACCESS_COOKIE_NAME"], "")
    return cookie or None


def jwt_required():
    """
    Verify the access token and expose its claims as g.current_user.
    Claims are trusted as-is; no user lookup happens here.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            token = _token_from_request()
            if not token:
                abort(401, description="Access token is missing")
            try:
                claims = get_token_service().verify_access(token)
            except TokenError as e:
                logger.warning("Token verification failed (%s): %s", e.reason, e)
                abort(401, description=INVALID_TOKEN_MSG)

            g.current_user = Identity.from_claims(claims)
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def admin_required():
    """Auth gate followed by the admin check; 403 before the handler sees the body."""
    def decorator(fn):
        @wraps(fn)
        @jwt_required()
        def wrapper(*args, **kwargs):
            if not g.current_user.is_admin:
                abort(403, description="Unauthorized")
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def require_owner_or_admin(owner_id: int) -> None:
    """Inline guard for self-service endpoints."""
    if not g.current_user.can_act_on(owner_id):
        abort(403, description="Unauthorized")
