"""
Workout plans (mounted under /workout-plan). A plan is identified by its
name within the owner's plans; adding or replacing a plan writes all of its
rows in one transaction.
"""
from __future__ import annotations

from typing import List

from flask import Blueprint, request, jsonify, g, abort
from sqlalchemy import or_

from models import storage
from models.user import User
from models.workout import Workout
from models.workout_plan import WorkoutPlan
from models.schemas.workout_plan import WorkoutPlanCreateSchema, WorkoutPlanUpdateSchema
from models.schemas.workout import WorkoutOutSchema
from utils.decorators import jwt_required

bp = Blueprint("workout_plans", __name__)

plan_create_schema = WorkoutPlanCreateSchema()
plan_update_schema = WorkoutPlanUpdateSchema()
workout_out_schema = WorkoutOutSchema()
workout_list_out_schema = WorkoutOutSchema(many=True)


def _stage_plan(planname: str, workout_ids: List[int]) -> None:
    """Add plan rows to the session; duplicates are skipped, unknown ids abort with 404."""
    session = storage.get_session()
    owner = storage.get(User, g.current_user.id)
    if owner is None:
        storage.rollback()
        abort(404, description="User not found")

    unique_ids = list(dict.fromkeys(workout_ids))
    found = {w.id for w in session.query(Workout.id).filter(Workout.id.in_(unique_ids))}
    missing = [wid for wid in unique_ids if wid not in found]
    if missing:
        storage.rollback()
        abort(404, description=f"Workout not found: {', '.join(str(m) for m in missing)}")

    existing = {
        row.workout_id
        for row in session.query(WorkoutPlan.workout_id).filter(
            WorkoutPlan.user_id == owner.id, WorkoutPlan.planname == planname
        )
    }
    for workout_id in unique_ids:
        if workout_id in existing:
            continue
        storage.new(
            WorkoutPlan(planname=planname, user_id=owner.id, workout_id=workout_id, created_by=owner.name)
        )


@bp.post("/add")
@jwt_required()
def add_plan():
    """
    Add workouts to a plan (creates the plan if needed)
    ---
    tags:
      - Workout Plans
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
          required: [planname, workout_ids]
          properties:
            planname: { type: string }
            workout_ids: { type: array, items: { type: integer } }
    responses:
      201: { description: Workouts added to plan successfully }
      400: { description: Validation error }
      404: { description: Unknown workout id }
    """
    data = plan_create_schema.load(request.get_json(silent=True) or {})
    _stage_plan(data["planname"], data["workout_ids"])
    storage.save()
    return jsonify({"message": "Workouts added to plan successfully."}), 201


@bp.get("")
@jwt_required()
def list_plans():
    """
    List the caller's plans and the plans published by administrators
    ---
    tags:
      - Workout Plans
    security:
      - Bearer: []
    responses:
      200:
        description: Plans grouped by name
        schema:
          type: array
          items:
            type: object
            properties:
              planname: { type: string }
              workouts: { type: array, items: { type: object } }
    """
    rows = (
        storage.get_session()
        .query(WorkoutPlan, Workout)
        .join(Workout, WorkoutPlan.workout_id == Workout.id)
        .join(User, WorkoutPlan.user_id == User.id)
        .filter(or_(WorkoutPlan.user_id == g.current_user.id, User.is_admin.is_(True)))
        .order_by(WorkoutPlan.planname.asc(), WorkoutPlan.id.asc())
        .all()
    )

    grouped = {}
    for plan_row, workout in rows:
        entry = workout_out_schema.dump(workout)
        entry["created_by"] = plan_row.created_by
        grouped.setdefault(plan_row.planname, []).append(entry)

    return jsonify([{"planname": name, "workouts": workouts} for name, workouts in grouped.items()]), 200


@bp.get("/<planname>")
@jwt_required()
def get_plan(planname: str):
    """
    List the workouts in one of the caller's plans
    ---
    tags:
      - Workout Plans
    security:
      - Bearer: []
    parameters:
      - in: path
        name: planname
        type: string
        required: true
    responses:
      200: { description: OK }
    """
    workouts = (
        storage.get_session()
        .query(Workout)
        .join(WorkoutPlan, WorkoutPlan.workout_id == Workout.id)
        .filter(WorkoutPlan.user_id == g.current_user.id, WorkoutPlan.planname == planname)
        .order_by(WorkoutPlan.id.asc())
        .all()
    )
    return jsonify(workout_list_out_schema.dump(workouts)), 200


@bp.delete("/<planname>")
@jwt_required()
def delete_plan(planname: str):
    """
    Delete one of the caller's plans
    ---
    tags:
      - Workout Plans
    security:
      - Bearer: []
    parameters:
      - in: path
        name: planname
        type: string
        required: true
    responses:
      204: { description: Deleted }
      404: { description: Plan not found }
    """
    deleted = (
        storage.get_session()
        .query(WorkoutPlan)
        .filter(WorkoutPlan.user_id == g.current_user.id, WorkoutPlan.planname == planname)
        .delete(synchronize_session=False)
    )
    if not deleted:
        storage.rollback()
        abort(404, description="Plan not found.")
    storage.save()
    return "", 204


@bp.put("/<planname>")
@jwt_required()
def replace_plan(planname: str):
    """
    Replace one of the caller's plans (rename and/or change its workouts)
    ---
    tags:
      - Workout Plans
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: path
        name: planname
        type: string
        required: true
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [planname, workout_ids]
          properties:
            planname: { type: string }
            workout_ids: { type: array, items: { type: integer } }
    responses:
      200: { description: Plan updated successfully }
      400: { description: Validation error }
      404: { description: Unknown workout id }
    """
    data = plan_update_schema.load(request.get_json(silent=True) or {})
    storage.get_session().query(WorkoutPlan).filter(
        WorkoutPlan.user_id == g.current_user.id, WorkoutPlan.planname == planname
    ).delete(synchronize_session=False)
    _stage_plan(data["planname"], data["workout_ids"])
    # Delete and re-insert commit together
    storage.save()
    return jsonify({"message": "Plan updated successfully."}), 200
