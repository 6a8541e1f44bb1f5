"""
Token service: issues and verifies JWTs via PyJWT.

Access and refresh tokens carry the same identity claims
({"id", "email", "isAdmin"}) but are signed with different secrets and tagged
with a "type" claim, so an access token can never pass as a refresh token.
Every token gets a fresh "jti"; two tokens issued in the same second for the
same user still differ, which refresh-token rotation relies on.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

import jwt

ACCESS = "access"
REFRESH = "refresh"


class TokenError(Exception):
    """Base class for token verification failures."""

    reason = "invalid"


class TokenExpired(TokenError):
    reason = "expired"


class TokenMalformed(TokenError):
    reason = "malformed"


class TokenBadSignature(TokenError):
    reason = "bad signature"


@dataclass(frozen=True)
class Identity:
    """Decoded identity attached to the request by the auth gate."""

    id: int
    email: str
    is_admin: bool

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "Identity":
        return cls(id=int(claims["id"]), email=claims["email"], is_admin=bool(claims.get("isAdmin", False)))

    def can_act_on(self, owner_id: int) -> bool:
        return self.is_admin or self.id == owner_id


def generate_jti() -> str:
    """Generate a unique JTI (JWT ID)."""
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_expires: timedelta = timedelta(minutes=15),
        refresh_expires: timedelta = timedelta(days=7),
        algorithm: str = "HS256",
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ValueError("access and refresh secrets are required")
        if access_secret == refresh_secret:
            raise ValueError("access and refresh secrets must differ")
        self._secrets = {ACCESS: access_secret, REFRESH: refresh_secret}
        self._lifetimes = {ACCESS: access_expires, REFRESH: refresh_expires}
        self.algorithm = algorithm

    @property
    def refresh_expires(self) -> timedelta:
        return self._lifetimes[REFRESH]

    def _issue(self, user, token_type: str) -> str:
        now = _now()
        payload = {
            "id": user.id,
            "email": user.email,
            "isAdmin": bool(user.is_admin),
            "type": token_type,
            "jti": generate_jti(),
            "iat": int(now.timestamp()),
            "exp": int((now + self._lifetimes[token_type]).timestamp()),
        }
        return jwt.encode(payload, self._secrets[token_type], algorithm=self.algorithm)

    def issue_access(self, user) -> str:
        return self._issue(user, ACCESS)

    def issue_refresh(self, user) -> str:
        return self._issue(user, REFRESH)

    def verify(self, token: str, expected_type: str = ACCESS) -> Dict[str, Any]:
        """
        Decode and validate a token of the given type.
        Raises TokenExpired, TokenBadSignature or TokenMalformed.
        """
        try:
            claims = jwt.decode(
                token,
                self._secrets[expected_type],
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired(str(exc)) from exc
        except jwt.InvalidSignatureError as exc:
            raise TokenBadSignature(str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise TokenMalformed(str(exc)) from exc

        if claims.get("type") != expected_type:
            raise TokenMalformed("Wrong token type")
        if "id" not in claims or "email" not in claims:
            raise TokenMalformed("Missing identity claims")
        return claims

    def verify_access(self, token: str) -> Dict[str, Any]:
        return self.verify(token, ACCESS)

    def verify_refresh(self, token: str) -> Dict[str, Any]:
        return self.verify(token, REFRESH)
