# backend/models/attendance.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base

# One daily check-in per user
class AttendanceRecord(Base):
    __tablename__ = "attendance_records"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Moment of the mark (server local time) and the calendar day it belongs to
    date = Column(DateTime, default=datetime.now, nullable=False, index=True)
    day = Column(Date, nullable=False)

    ip_address = Column(String, nullable=False)
    location = Column(String, nullable=True)
    user_agent = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.now)

    user = relationship("User", back_populates="attendance_records")

    __table_args__ = (
        UniqueConstraint("user_id", "day", name="uq_attendance_user_day"),
    )
