# backend/routes/stats.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.attendance import AttendanceRecord
from models.login_log import LoginLog
from models.users import User, UserRole
from schemas.admin import AdminStats, DailyCounts, ModeratorCounts
from utils.dates import today_bounds
from utils.tokenJWT import require_admin

router = APIRouter(
    prefix="/api/admin",
    tags=["Stats"]
)


def get_moderator_stats(db: Session) -> ModeratorCounts:
    total = db.query(User).filter(User.role == UserRole.MODERATOR).count()
    active = db.query(User).filter(
        User.role == UserRole.MODERATOR,
        User.is_active.is_(True),
    ).count()
    return ModeratorCounts(total=total, active=active, inactive=total - active)


def get_attendance_stats(db: Session) -> DailyCounts:
    start, end = today_bounds()
    today = db.query(AttendanceRecord).filter(
        AttendanceRecord.date >= start,
        AttendanceRecord.date < end,
    ).count()
    return DailyCounts(today=today, total=db.query(AttendanceRecord).count())


def get_login_stats(db: Session) -> DailyCounts:
    start, end = today_bounds()
    today = db.query(LoginLog).filter(
        LoginLog.login_time >= start,
        LoginLog.login_time < end,
    ).count()
    return DailyCounts(today=today, total=db.query(LoginLog).count())


# === Dashboard summary, recomputed from the ledgers on every call ===

@router.get("/stats", response_model=AdminStats)
def get_admin_stats(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    return AdminStats(
        moderators=get_moderator_stats(db),
        attendance=get_attendance_stats(db),
        logins=get_login_stats(db),
    )
