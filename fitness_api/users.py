from __future__ import annotations

import logging
from datetime import date, timedelta

from flask import Blueprint, request, jsonify, g, abort
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from models import storage
from models.user import User
from models.activity import Activity
from models.schemas.user import (
    UserOutSchema,
    UserUpdateSchema,
    EmailUpdateSchema,
    PasswordUpdateSchema,
)
from utils.decorators import jwt_required, require_owner_or_admin
from utils.security import hash_password

logger = logging.getLogger(__name__)

bp = Blueprint("users", __name__)

user_out_schema = UserOutSchema()
user_update_schema = UserUpdateSchema()
email_update_schema = EmailUpdateSchema()
password_update_schema = PasswordUpdateSchema()

STATS_WINDOWS = {
    "daily": timedelta(days=1),
    "weekly": timedelta(days=7),
    "monthly": timedelta(days=30),
}


def _get_user_or_404(user_id: int) -> User:
    user = storage.get(User, user_id)
    if not user:
        abort(404, description="User not found")
    return user


@bp.get("/me")
@jwt_required()
def me():
    """
    Get current user details
    ---
    tags:
      - Users
    security:
      - Bearer: []
    responses:
      200:
        description: User details
      401:
        description: Unauthorized
      404:
        description: User not found
    """
    user = _get_user_or_404(g.current_user.id)
    return jsonify(user_out_schema.dump(user)), 200


@bp.get("/stats")
@jwt_required()
def stats():
    """
    Calories and average duration of the caller's activities
    ---
    tags:
      - Users
    security:
      - Bearer: []
    parameters:
      - in: query
        name: timeframe
        type: string
        enum: [daily, weekly, monthly]
        description: Omit for lifetime totals
    responses:
      200:
        description: User stats
        schema:
          type: object
          properties:
            total_calories: { type: integer }
            avg_duration: { type: number }
            timeframe: { type: string }
    """
    timeframe = request.args.get("timeframe")
    session = storage.get_session()
    query = session.query(
        func.sum(Activity.calories_burned), func.avg(Activity.duration)
    ).filter(Activity.user_id == g.current_user.id)

    window = STATS_WINDOWS.get(timeframe)
    if window is not None:
        query = query.filter(Activity.date >= date.today() - window)

    total_calories, avg_duration = query.one()
    return jsonify(
        {
            "total_calories": int(total_calories or 0),
            "avg_duration": round(float(avg_duration or 0), 2),
            "timeframe": timeframe if window is not None else "lifetime",
        }
    ), 200


@bp.patch("/email")
@jwt_required()
def update_email():
    """
    Update the caller's email
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [email]
          properties:
            email: { type: string }
    responses:
      200:
        description: Email updated successfully
      400:
        description: Email missing, invalid or already taken
      404:
        description: User not found
    """
    data = email_update_schema.load(request.get_json(silent=True) or {})
    user = _get_user_or_404(g.current_user.id)

    user.email = data["email"]
    try:
        user.save()
    except IntegrityError:
        abort(400, description="Email already exists")

    return jsonify({"id": user.id, "email": user.email}), 200


@bp.patch("/password")
@jwt_required()
def update_password():
    """
    Update the caller's password
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [password]
          properties:
            password: { type: string }
    responses:
      200:
        description: Password updated successfully
      400:
        description: Bad request
    """
    data = password_update_schema.load(request.get_json(silent=True) or {})
    user = _get_user_or_404(g.current_user.id)

    user.password_hash = hash_password(data["password"])
    user.save()

    return jsonify({"message": "Password updated successfully"}), 200


@bp.put("/<int:user_id>")
@jwt_required()
def update_user(user_id: int):
    """
    Update user details - self or admin
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: path
        name: user_id
        type: integer
        required: true
      - in: body
        name: body
        schema:
          type: object
          properties:
            name: { type: string }
            surname: { type: string }
            phone: { type: string }
            address: { type: string }
            city: { type: string }
            country: { type: string }
            height: { type: number }
            weight: { type: number }
    responses:
      200:
        description: User updated successfully
      400:
        description: Bad request
      403:
        description: Unauthorized
      404:
        description: User not found
    """
    require_owner_or_admin(user_id)
    data = user_update_schema.load(request.get_json(silent=True) or {})
    user = _get_user_or_404(user_id)

    for key, value in data.items():
        setattr(user, key, value)
    user.save()

    return jsonify(user_out_schema.dump(user)), 200


@bp.delete("/<int:user_id>")
@jwt_required()
def delete_user(user_id: int):
    """
    Delete user - self or admin
    ---
    tags:
      - Users
    security:
      - Bearer: []
    parameters:
      - in: path
        name: user_id
        type: integer
        required: true
    responses:
      204:
        description: User deleted successfully
      403:
        description: Unauthorized
      404:
        description: User not found
    """
    require_owner_or_admin(user_id)
    user = _get_user_or_404(user_id)

    user.delete()
    storage.save()
    logger.info("User %s deleted by %s", user_id, g.current_user.id)

    return "", 204
