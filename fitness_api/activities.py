from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.activity import Activity
from models.workout import Workout
from models.schemas.activity import ActivityBatchSchema, ActivityUpdateSchema, ActivityOutSchema
from utils.decorators import jwt_required, require_owner_or_admin

bp = Blueprint("activities", __name__)

activity_batch_schema = ActivityBatchSchema()
activity_update_schema = ActivityUpdateSchema()
activity_out_schema = ActivityOutSchema()
activity_list_out_schema = ActivityOutSchema(many=True)


def _get_owned_activity(activity_id: int) -> Activity:
    activity = storage.get(Activity, activity_id)
    if not activity:
        abort(404, description="Activity not found")
    require_owner_or_admin(activity.user_id)
    return activity


@bp.get("")
@jwt_required()
def list_activities():
    """
    List the caller's activities
    ---
    tags:
      - Activities
    security:
      - Bearer: []
    responses:
      200: { description: OK }
    """
    rows = (
        storage.get_session()
        .query(Activity)
        .filter(Activity.user_id == g.current_user.id)
        .order_by(Activity.date.asc(), Activity.id.asc())
        .all()
    )
    return jsonify(activity_list_out_schema.dump(rows)), 200


@bp.get("/<int:activity_id>")
@jwt_required()
def get_activity(activity_id: int):
    """
    Get an activity - owner or admin
    ---
    tags:
      - Activities
    security:
      - Bearer: []
    parameters:
      - in: path
        name: activity_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      403: { description: Unauthorized }
      404: { description: Activity not found }
    """
    return jsonify(activity_out_schema.dump(_get_owned_activity(activity_id))), 200


@bp.post("")
@jwt_required()
def log_activities():
    """
    Log a batch of activities; all of them are stored or none
    ---
    tags:
      - Activities
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
          properties:
            activities:
              type: array
              items:
                type: object
                required: [name, duration, date]
                properties:
                  name: { type: string, description: "Must match a workout name" }
                  duration: { type: integer }
                  date: { type: string, format: date }
                  calories_burned: { type: integer }
    responses:
      201: { description: Activities logged successfully }
      400: { description: Invalid batch or unknown workout name }
    """
    data = activity_batch_schema.load(request.get_json(silent=True) or {})
    session = storage.get_session()

    for item in data["activities"]:
        workout = session.query(Workout).filter(Workout.name == item["name"]).order_by(Workout.id).first()
        if workout is None:
            storage.rollback()
            abort(400, description=f'No matching workout found for "{item["name"]}".')
        calories = item.get("calories_burned")
        if calories is None:
            calories = workout.calories_burned or 0
        storage.new(
            Activity(
                name=item["name"],
                duration=item["duration"],
                date=item["date"],
                calories_burned=calories,
                user_id=g.current_user.id,
                workout_id=workout.id,
            )
        )
    # One commit for the whole batch
    storage.save()

    return jsonify({"message": "Activities logged successfully!"}), 201


@bp.put("/<int:activity_id>")
@jwt_required()
def update_activity(activity_id: int):
    """
    Update an activity - owner or admin
    ---
    tags:
      - Activities
    security:
      - Bearer: []
    parameters:
      - in: path
        name: activity_id
        type: integer
        required: true
      - in: body
        name: body
        schema:
          type: object
          properties:
            name: { type: string }
            duration: { type: integer }
            date: { type: string, format: date }
            calories_burned: { type: integer }
    responses:
      200: { description: Activity updated successfully }
      403: { description: Unauthorized }
      404: { description: Activity not found }
    """
    activity = _get_owned_activity(activity_id)
    data = activity_update_schema.load(request.get_json(silent=True) or {})
    for key, value in data.items():
        setattr(activity, key, value)
    activity.save()
    return jsonify({"message": "Activity updated successfully!"}), 200


@bp.delete("/<int:activity_id>")
@jwt_required()
def delete_activity(activity_id: int):
    """
    Delete an activity - owner or admin
    ---
    tags:
      - Activities
    security:
      - Bearer: []
    parameters:
      - in: path
        name: activity_id
        type: integer
        required: true
    responses:
      204: { description: Deleted }
      403: { description: Unauthorized }
      404: { description: Activity not found }
    """
    activity = _get_owned_activity(activity_id)
    activity.delete()
    storage.save()
    return "", 204
