from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

import jwt
import pytest

from utils.tokens import (
    Identity,
    TokenBadSignature,
    TokenExpired,
    TokenMalformed,
    TokenService,
)


@dataclass
class FakeUser:
    id: int
    email: str
    is_admin: bool = False


@pytest.fixture
def service():
    return TokenService(access_secret="a-secret", refresh_secret="r-secret")


def test_access_token_carries_identity_claims(service):
    token = service.issue_access(FakeUser(7, "x@example.com", True))

    claims = service.verify_access(token)

    assert claims["id"] == 7
    assert claims["email"] == "x@example.com"
    assert claims["isAdmin"] is True
    assert claims["type"] == "access"


def test_lifetimes_are_fifteen_minutes_and_seven_days(service):
    user = FakeUser(1, "x@example.com")
    access = service.verify_access(service.issue_access(user))
    refresh = service.verify_refresh(service.issue_refresh(user))

    assert access["exp"] - access["iat"] == 15 * 60
    assert refresh["exp"] - refresh["iat"] == 7 * 24 * 3600


def test_tokens_issued_back_to_back_differ(service):
    user = FakeUser(1, "x@example.com")
    assert service.issue_refresh(user) != service.issue_refresh(user)


def test_access_token_is_not_accepted_as_refresh_token(service):
    token = service.issue_access(FakeUser(1, "x@example.com"))
    with pytest.raises(TokenBadSignature):
        service.verify_refresh(token)


def test_refresh_token_is_not_accepted_as_access_token(service):
    token = service.issue_refresh(FakeUser(1, "x@example.com"))
    with pytest.raises(TokenBadSignature):
        service.verify_access(token)


def test_expired_token_is_reported_as_expired():
    service = TokenService("a-secret", "r-secret", access_expires=timedelta(seconds=-10))
    token = service.issue_access(FakeUser(1, "x@example.com"))
    with pytest.raises(TokenExpired):
        service.verify_access(token)


def test_garbage_is_reported_as_malformed(service):
    with pytest.raises(TokenMalformed):
        service.verify_access("not-a-jwt")


def test_wrong_type_claim_under_right_secret_is_malformed(service):
    forged = jwt.encode(
        {"id": 1, "email": "x@example.com", "type": "refresh", "iat": 0, "exp": 9999999999},
        "a-secret",
        algorithm="HS256",
    )
    with pytest.raises(TokenMalformed):
        service.verify_access(forged)


def test_secrets_must_be_distinct():
    with pytest.raises(ValueError):
        TokenService(access_secret="same", refresh_secret="same")


def test_identity_ownership_rules():
    owner = Identity(id=3, email="o@example.com", is_admin=False)
    admin = Identity(id=9, email="a@example.com", is_admin=True)

    assert owner.can_act_on(3)
    assert not owner.can_act_on(4)
    assert admin.can_act_on(4)
