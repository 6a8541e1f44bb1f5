from sqlalchemy import Column, String, Integer, Date, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Activity(BaseModel, Base):
    __tablename__ = "activities"

    name = Column(String(255), nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    date = Column(Date, nullable=False, index=True)
    calories_burned = Column(Integer, nullable=False, default=0)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="SET NULL"), nullable=True)

    user = relationship("User", back_populates="activities")
    workout = relationship("Workout", back_populates="activities")
