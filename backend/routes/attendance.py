# backend/routes/attendance.py
import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.attendance import AttendanceRecord
from schemas.attendance import AttendanceHistory, AttendanceOut, MarkAttendanceResponse, TodayAttendance
from utils.client import get_client_ip, get_location_from_ip, get_user_agent
from utils.dates import day_bounds, today_bounds
from utils.exceptions import AlreadyMarked, ValidationError
from utils.tokenJWT import require_auth

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/attendance", tags=["Attendance"])


def get_today_attendance(db: Session, user_id: int, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
    start, end = today_bounds(now)
    return (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.user_id == user_id,
            AttendanceRecord.date >= start,
            AttendanceRecord.date < end,
        )
        .first()
    )


def _already_marked(record: AttendanceRecord) -> AlreadyMarked:
    return AlreadyMarked(extra={"attendance": AttendanceOut.model_validate(record).model_dump(mode="json", by_alias=True)})


def mark_attendance(
    db: Session,
    user_id: int,
    ip: str,
    location: Optional[str],
    user_agent: Optional[str],
    now: Optional[datetime] = None,
) -> AttendanceRecord:
    """Insert today's attendance mark for the user.

    Raises AlreadyMarked when a record exists for the current day. The
    UNIQUE(user_id, day) constraint decides the winner when two requests
    race past the existence check.
    """
    now = now or datetime.now()
    existing = get_today_attendance(db, user_id, now)
    if existing:
        raise _already_marked(existing)

    record = AttendanceRecord(
        user_id=user_id,
        date=now,
        day=now.date(),
        ip_address=ip,
        location=location,
        user_agent=user_agent,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = get_today_attendance(db, user_id, now)
        if existing is None:
            raise
        raise _already_marked(existing)
    db.refresh(record)
    return record


@router.post("/mark", response_model=MarkAttendanceResponse)
def mark(request: Request, user_id: int = Depends(require_auth), db: Session = Depends(get_db)):
    ip = get_client_ip(request)
    try:
        record = mark_attendance(
            db,
            user_id,
            ip=ip,
            location=get_location_from_ip(ip),
            user_agent=get_user_agent(request),
        )
    except AlreadyMarked:
        logger.warning("User %s tried to mark attendance twice", user_id)
        raise

    logger.info("Attendance marked for user %s from %s", user_id, ip)
    return {"success": True, "attendance": record}


@router.get("/today", response_model=TodayAttendance)
def today(user_id: int = Depends(require_auth), db: Session = Depends(get_db)):
    return {"attendance": get_today_attendance(db, user_id)}


@router.get("/history", response_model=AttendanceHistory)
def history(
    limit: int = Query(settings.ATTENDANCE_HISTORY_DEFAULT, ge=1, le=365),
    user_id: int = Depends(require_auth),
    db: Session = Depends(get_db),
):
    records = (
        db.query(AttendanceRecord)
        .filter(AttendanceRecord.user_id == user_id)
        .order_by(AttendanceRecord.date.desc())
        .limit(limit)
        .all()
    )
    return {"history": records}


# Records between two calendar days, both inclusive
@router.get("/range", response_model=AttendanceHistory)
def by_date_range(
    start: date = Query(..., description="First day (YYYY-MM-DD)"),
    end: date = Query(..., description="Last day (YYYY-MM-DD)"),
    user_id: int = Depends(require_auth),
    db: Session = Depends(get_db),
):
    if start > end:
        raise ValidationError("start must not be after end")

    range_start, _ = day_bounds(start)
    _, range_end = day_bounds(end)
    records = (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.user_id == user_id,
            AttendanceRecord.date >= range_start,
            AttendanceRecord.date < range_end,
        )
        .order_by(AttendanceRecord.date.desc())
        .all()
    )
    return {"history": records}
