from __future__ import annotations

from flask import Blueprint, jsonify

from models import storage
from models.user import User
from models.schemas.user import UserListOutSchema
from utils.decorators import admin_required

bp = Blueprint("admin", __name__)

user_list_out_schema = UserListOutSchema(many=True)


@bp.get("")
@admin_required()
def list_users():
    """
    List all users - admin
    ---
    tags:
      - Admin
    security:
      - Bearer: []
    responses:
      200:
        description: List of all users
      401:
        description: Unauthorized
      403:
        description: Not an administrator
    """
    rows = storage.get_session().query(User).order_by(User.id.asc()).all()
    return jsonify(user_list_out_schema.dump(rows)), 200
