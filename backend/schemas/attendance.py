from typing import List, Optional
from datetime import datetime

from schemas.base import CamelModel


class AttendanceOut(CamelModel):
    id: int
    user_id: int
    date: datetime
    ip_address: str
    location: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None

class MarkAttendanceResponse(CamelModel):
    success: bool = True
    attendance: AttendanceOut

class TodayAttendance(CamelModel):
    attendance: Optional[AttendanceOut] = None

class AttendanceHistory(CamelModel):
    history: List[AttendanceOut]
