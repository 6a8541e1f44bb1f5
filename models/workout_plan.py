"""
WorkoutPlan rows: a plan is the set of rows sharing (user_id, planname),
one row per workout in the plan.
"""
from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class WorkoutPlan(BaseModel, Base):
    __tablename__ = "workout_plans"
    __table_args__ = (
        UniqueConstraint("user_id", "planname", "workout_id", name="uq_plan_user_name_workout"),
    )

    planname = Column(String(255), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False)
    created_by = Column(String(255), nullable=True)

    user = relationship("User", back_populates="workout_plans")
    workout = relationship("Workout", back_populates="plan_entries")
