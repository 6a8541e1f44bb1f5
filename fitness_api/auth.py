"""
Authentication blueprint (mounted under /user):
- POST /user/register
- POST /user/login
- POST /user/refresh-token
- POST /user/logout

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Issues short-lived access tokens and long-lived refresh tokens (utils.tokens.TokenService)
- Keeps exactly one refresh token per user in users.refresh_token; storing a
  new one revokes the previous one, and refresh only accepts the stored value
"""
from __future__ import annotations

import logging

from flask import Blueprint, request, jsonify, g, abort, current_app
from sqlalchemy.exc import IntegrityError

from models import storage
from models.user import User
from models.schemas.user import UserRegisterSchema, UserLoginSchema
from utils.decorators import jwt_required, get_token_service
from utils.security import hash_password, verify_password, burn_password_check
from utils.tokens import TokenError

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)

user_register_schema = UserRegisterSchema()
user_login_schema = UserLoginSchema()

INVALID_CREDENTIALS_MSG = "Invalid credentials."


def _set_refresh_cookie(response, token: str):
    response.set_cookie(
        current_app.config["REFRESH_COOKIE_NAME"],
        token,
        max_age=int(get_token_service().refresh_expires.total_seconds()),
        httponly=True,
        secure=current_app.config["REFRESH_COOKIE_SECURE"],
        samesite="Strict",
        path="/",
    )
    return response


@bp.post("/register")
def register():
    """
    Register a new user.
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [name, email, password]
          properties:
            name: { type: string }
            email: { type: string }
            password: { type: string }
            height: { type: number }
            weight: { type: number }
    responses:
      201:
        description: User registered
        schema:
          type: object
          properties:
            message: { type: string }
            userId: { type: integer }
      400:
        description: Validation error or email already exists
    """
    payload = request.get_json(silent=True) or {}
    data = user_register_schema.load(payload)

    user = User(
        name=data["name"],
        email=data["email"],
        password_hash=hash_password(data["password"]),
        height=data.get("height"),
        weight=data.get("weight"),
    )
    storage.new(user)
    try:
        storage.save()
    except IntegrityError:
        abort(400, description="Email already exists")

    logger.info("Registered user %s", user.id)
    return jsonify({"message": "User registered", "userId": user.id}), 201


@bp.post("/login")
def login():
    """
    Login: returns an access token and sets the refresh token cookie
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK
        schema:
          type: object
          properties:
            accessToken: { type: string }
            userRole: { type: string, enum: [admin, user] }
      400:
        description: Email and password are required
      401:
        description: Invalid credentials
    """
    payload = request.get_json(silent=True) or {}
    data = user_login_schema.load(payload)
    email = data.get("email")
    password = data.get("password")
    if not email or not password:
        abort(400, description="Email and password are required.")

    session = storage.get_session()
    user = session.query(User).filter(User.email == email).first()
    if user is None:
        # Same hashing cost as a wrong password
        burn_password_check(password)
        abort(401, description=INVALID_CREDENTIALS_MSG)
    if not verify_password(password, user.password_hash):
        abort(401, description=INVALID_CREDENTIALS_MSG)

    tokens = get_token_service()
    access_token = tokens.issue_access(user)
    refresh_token = tokens.issue_refresh(user)

    # Overwrites any earlier refresh token; the cookie is set only once this is committed
    user.refresh_token = refresh_token
    storage.new(user)
    storage.save()

    response = jsonify({"accessToken": access_token, "userRole": user.role})
    return _set_refresh_cookie(response, refresh_token), 200


@bp.post("/refresh-token")
def refresh_token():
    """
    Exchange the refresh token cookie for a new access token (rotates the cookie)
    ---
    tags:
      - Users
    responses:
      200:
        description: New access token generated successfully
        schema:
          type: object
          properties:
            accessToken: { type: string }
      401:
        description: Refresh token is required
      403:
        description: Invalid or expired refresh token
    """
    presented = request.cookies.get(current_app.config["REFRESH_COOKIE_NAME"])
    if not presented:
        abort(401, description="Refresh token is required.")

    tokens = get_token_service()
    try:
        claims = tokens.verify_refresh(presented)
    except TokenError as e:
        logger.warning("Refresh token rejected (%s): %s", e.reason, e)
        abort(403, description="Invalid or expired refresh token.")

    session = storage.get_session()
    user = (
        session.query(User)
        .filter(User.id == int(claims["id"]), User.refresh_token == presented)
        .first()
    )
    if user is None:
        logger.warning("Refresh token for user %s is not the stored one", claims["id"])
        abort(403, description="Invalid refresh token.")

    access_token = tokens.issue_access(user)
    new_refresh = tokens.issue_refresh(user)

    # Compare-and-swap: only replace the token we were shown. A concurrent
    # rotation that already replaced it makes this update match nothing.
    swapped = (
        session.query(User)
        .filter(User.id == user.id, User.refresh_token == presented)
        .update({User.refresh_token: new_refresh}, synchronize_session="fetch")
    )
    if swapped != 1:
        storage.rollback()
        abort(403, description="Invalid refresh token.")
    storage.save()

    response = jsonify({"accessToken": access_token})
    return _set_refresh_cookie(response, new_refresh), 200


@bp.post("/logout")
@jwt_required()
def logout():
    """
    Logout: revokes the stored refresh token and clears the cookie
    ---
    tags:
      - Users
    security:
      - Bearer: []
    responses:
      204:
        description: Logged out
      401:
        description: Unauthorized
    """
    session = storage.get_session()
    session.query(User).filter(User.id == g.current_user.id).update(
        {User.refresh_token: None}, synchronize_session="fetch"
    )
    storage.save()

    response = current_app.response_class(status=204)
    response.delete_cookie(
        current_app.config["REFRESH_COOKIE_NAME"],
        path="/",
        secure=current_app.config["REFRESH_COOKIE_SECURE"],
        httponly=True,
        samesite="Strict",
    )
    return response
