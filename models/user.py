from models.base_model import Base, BaseModel
from sqlalchemy import Column, String, Float, Boolean, Text
from sqlalchemy.orm import relationship


class User(BaseModel, Base):
    __tablename__ = "users"
    name = Column(String(255), nullable=False)
    surname = Column(String(255), nullable=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    phone = Column(String(64), nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(128), nullable=True)
    country = Column(String(128), nullable=True)
    height = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)
    is_admin = Column("isAdmin", Boolean, nullable=False, default=False)
    # Single active refresh token; replacing it revokes the previous one
    refresh_token = Column(Text, nullable=True)

    attendance = relationship(
        "AttendanceRecord",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="AttendanceRecord.id",
    )
    activities = relationship(
        "Activity",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    workout_plans = relationship(
        "WorkoutPlan",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def password(self):
        raise AttributeError("Password: Write-only field")

    @property
    def role(self) -> str:
        return "admin" if self.is_admin else "user"
