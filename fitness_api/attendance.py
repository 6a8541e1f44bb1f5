"""
Attendance ledger (mounted under /user):
- POST   /user/attendance   append a record for a new day
- GET    /user/attendance   list the caller's records
- PUT    /user/attendance   change the status of an existing day
- DELETE /user/attendance   remove an existing day

Every operation works on the caller's own ledger only. Each mutation is a
single statement against attendance_records, so it either fully happens or
not at all, and the (user_id, date) unique constraint keeps racing appends
from producing two records for one day.
"""
from __future__ import annotations

import logging

from flask import Blueprint, request, jsonify, g, abort
from sqlalchemy.exc import IntegrityError

from models import storage
from models.attendance import AttendanceRecord, AttendanceStatus
from models.user import User
from models.schemas.attendance import AttendanceSchema, AttendanceDateSchema, AttendanceOutSchema
from utils.decorators import jwt_required

logger = logging.getLogger(__name__)

bp = Blueprint("attendance", __name__)

attendance_schema = AttendanceSchema()
attendance_date_schema = AttendanceDateSchema()
attendance_list_out_schema = AttendanceOutSchema(many=True)

DUPLICATE_MSG = "Attendance for this day is already logged"
NOT_FOUND_MSG = "No attendance record found for this date"


def _ledger(user_id: int):
    return storage.get_session().query(AttendanceRecord).filter(AttendanceRecord.user_id == user_id)


@bp.post("/attendance")
@jwt_required()
def add_attendance():
    """
    Add new attendance record
    ---
    tags:
      - Attendance
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
          required: [date, status]
          properties:
            date: { type: string, format: date, description: "YYYY-MM-DD (a time of day is ignored)" }
            status: { type: string, enum: [present, absent] }
    responses:
      201:
        description: Attendance added successfully
      400:
        description: Invalid input or attendance already logged for that day
      404:
        description: User not found
    """
    data = attendance_schema.load(request.get_json(silent=True) or {})
    user_id = g.current_user.id

    # Tokens outlive deleted accounts; only a live owner can reach the insert
    if storage.get(User, user_id) is None:
        abort(404, description="User not found")

    if _ledger(user_id).filter(AttendanceRecord.date == data["date"]).first():
        abort(400, description=DUPLICATE_MSG)

    storage.new(
        AttendanceRecord(user_id=user_id, date=data["date"], status=AttendanceStatus(data["status"]))
    )
    try:
        storage.save()
    except IntegrityError:
        # Lost the race against a concurrent append for the same day
        abort(400, description=DUPLICATE_MSG)

    return jsonify({"message": "Attendance added successfully"}), 201


@bp.get("/attendance")
@jwt_required()
def list_attendance():
    """
    Get the caller's attendance records, in the order they were added
    ---
    tags:
      - Attendance
    security:
      - Bearer: []
    responses:
      200:
        description: List of attendance records
        schema:
          type: array
          items:
            type: object
            properties:
              date: { type: string, format: date }
              status: { type: string, enum: [present, absent] }
    """
    rows = _ledger(g.current_user.id).order_by(AttendanceRecord.id.asc()).all()
    return jsonify(attendance_list_out_schema.dump(rows)), 200


@bp.put("/attendance")
@jwt_required()
def update_attendance():
    """
    Update the status of an existing attendance record
    ---
    tags:
      - Attendance
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
          required: [date, status]
          properties:
            date: { type: string, format: date }
            status: { type: string, enum: [present, absent] }
    responses:
      200:
        description: Attendance updated successfully
      400:
        description: Bad request
      404:
        description: No attendance record found for this date
    """
    data = attendance_schema.load(request.get_json(silent=True) or {})

    updated = (
        _ledger(g.current_user.id)
        .filter(AttendanceRecord.date == data["date"])
        .update({AttendanceRecord.status: AttendanceStatus(data["status"])}, synchronize_session=False)
    )
    if not updated:
        storage.rollback()
        abort(404, description=NOT_FOUND_MSG)
    storage.save()

    return jsonify({"message": "Attendance updated successfully"}), 200


@bp.delete("/attendance")
@jwt_required()
def delete_attendance():
    """
    Delete an attendance record
    ---
    tags:
      - Attendance
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
          required: [date]
          properties:
            date: { type: string, format: date }
    responses:
      204:
        description: Attendance record deleted successfully
      400:
        description: Bad request
      404:
        description: No attendance record found for this date
    """
    data = attendance_date_schema.load(request.get_json(silent=True) or {})

    deleted = (
        _ledger(g.current_user.id)
        .filter(AttendanceRecord.date == data["date"])
        .delete(synchronize_session=False)
    )
    if not deleted:
        storage.rollback()
        abort(404, description=NOT_FOUND_MSG)
    storage.save()

    return "", 204
