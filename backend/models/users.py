# backend/models/users.py
import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship
from database import Base

# Portal roles; fixed at account creation
class UserRole(str, enum.Enum):
    MODERATOR = "moderator"
    ADMIN = "admin"

# Represents a portal account with authentication details and role
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    role = Column(
        Enum(UserRole, name="userrole", native_enum=False, create_constraint=True, values_callable=lambda e: [m.value for m in e]),
        default=UserRole.MODERATOR,
        nullable=False,
    )
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now)

    attendance_records = relationship("AttendanceRecord", back_populates="user")
    sessions = relationship("UserSession", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
