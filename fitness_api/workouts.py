from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.workout import Workout
from models.schemas.workout import WorkoutCreateSchema, WorkoutUpdateSchema, WorkoutOutSchema
from utils.decorators import jwt_required, admin_required

bp = Blueprint("workouts", __name__)

workout_create_schema = WorkoutCreateSchema()
workout_update_schema = WorkoutUpdateSchema()
workout_out_schema = WorkoutOutSchema()
workout_list_out_schema = WorkoutOutSchema(many=True)


def _get_workout_or_404(workout_id: int) -> Workout:
    workout = storage.get(Workout, workout_id)
    if not workout:
        abort(404, description="Workout not found")
    return workout


@bp.get("")
@jwt_required()
def list_workouts():
    """
    List all workouts
    ---
    tags:
      - Workouts
    security:
      - Bearer: []
    responses:
      200: { description: OK }
    """
    rows = storage.get_session().query(Workout).order_by(Workout.id.asc()).all()
    return jsonify(workout_list_out_schema.dump(rows)), 200


@bp.get("/<int:workout_id>")
@jwt_required()
def get_workout(workout_id: int):
    """
    Get a workout by id
    ---
    tags:
      - Workouts
    security:
      - Bearer: []
    parameters:
      - in: path
        name: workout_id
        type: integer
        required: true
    responses:
      200: { description: OK }
      404: { description: Workout not found }
    """
    return jsonify(workout_out_schema.dump(_get_workout_or_404(workout_id))), 200


@bp.post("")
@admin_required()
def create_workout():
    """
    Create a workout - admin
    ---
    tags:
      - Workouts
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
          required: [name, muscle, sets, repeats]
          properties:
            name: { type: string }
            muscle: { type: string }
            sets: { type: integer }
            repeats: { type: integer }
            calories_burned: { type: integer }
            met_value: { type: number }
    responses:
      201: { description: Workout added }
      400: { description: Validation error }
      403: { description: Not an administrator }
    """
    data = workout_create_schema.load(request.get_json(silent=True) or {})
    workout = Workout(user_id=g.current_user.id, **data)
    storage.new(workout)
    storage.save()
    return jsonify({"message": "Workout added!", "workoutId": workout.id}), 201


@bp.put("/<int:workout_id>")
@admin_required()
def update_workout(workout_id: int):
    """
    Update a workout - admin
    ---
    tags:
      - Workouts
    security:
      - Bearer: []
    parameters:
      - in: path
        name: workout_id
        type: integer
        required: true
      - in: body
        name: body
        schema:
          type: object
          properties:
            name: { type: string }
            muscle: { type: string }
            sets: { type: integer }
            repeats: { type: integer }
            calories_burned: { type: integer }
            met_value: { type: number }
    responses:
      200: { description: Workout updated successfully }
      403: { description: Not an administrator }
      404: { description: Workout not found }
    """
    workout = _get_workout_or_404(workout_id)
    data = workout_update_schema.load(request.get_json(silent=True) or {})
    for key, value in data.items():
        setattr(workout, key, value)
    workout.save()
    return jsonify({"message": "Workout updated successfully"}), 200


@bp.delete("/<int:workout_id>")
@admin_required()
def delete_workout(workout_id: int):
    """
    Delete a workout - admin
    ---
    tags:
      - Workouts
    security:
      - Bearer: []
    parameters:
      - in: path
        name: workout_id
        type: integer
        required: true
    responses:
      204: { description: Deleted }
      403: { description: Not an administrator }
      404: { description: Workout not found }
    """
    workout = _get_workout_or_404(workout_id)
    workout.delete()
    storage.save()
    return "", 204
