from sqlalchemy import Column, String, Integer, Float, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Workout(BaseModel, Base):
    __tablename__ = "workouts"

    name = Column(String(255), nullable=False, index=True)
    muscle = Column(String(128), nullable=False)
    sets = Column(Integer, nullable=False)
    repeats = Column(Integer, nullable=False)
    calories_burned = Column(Integer, nullable=True)
    met_value = Column(Float, nullable=True)
    # Admin who created the workout; kept when that account goes away
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    activities = relationship("Activity", back_populates="workout", passive_deletes=True)
    plan_entries = relationship(
        "WorkoutPlan",
        back_populates="workout",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
