# backend/routes/auth.py
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy import func
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.login_log import LoginLog
from models.session import UserSession
from models.users import User
from schemas.user import LoginHistory, LoginResponse, SuccessResponse, UserLogin, UserSummary
from utils.client import get_client_ip, get_location_from_ip, get_user_agent
from utils.exceptions import AccountDeactivated, InvalidCredentials, NotFound
from utils.hashing import verify_password
from utils.tokenJWT import (
    clear_session_cookie,
    create_session,
    get_current_session,
    require_auth,
    revoke_session,
    set_session_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# Stamp logout_time on every still-open login entry of the user
def close_open_login_logs(db: Session, user_id: int, logout_time: datetime) -> int:
    return (
        db.query(LoginLog)
        .filter(LoginLog.user_id == user_id, LoginLog.logout_time.is_(None))
        .update({LoginLog.logout_time: logout_time}, synchronize_session=False)
    )


# Authenticate user and open a cookie-backed session
@router.post("/login", response_model=LoginResponse)
def login(payload: UserLogin, response: Response, db: Session = Depends(get_db)):
    email = payload.email.strip().lower()
    db_user = db.query(User).filter(func.lower(User.email) == email).first()

    if not db_user or not verify_password(payload.password, db_user.password_hash):
        logger.warning("Failed login attempt for %s", email)
        raise InvalidCredentials()

    if not db_user.is_active:
        logger.warning("Login refused for deactivated account %s", email)
        raise AccountDeactivated()

    _, token = create_session(db, db_user)
    set_session_cookie(response, token)
    logger.info("User %s logged in", db_user.id)

    return LoginResponse(user=UserSummary.model_validate(db_user))


# Retrieve current authenticated user details
@router.get("/user", response_model=UserSummary)
def me(session: UserSession = Depends(get_current_session), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == session.user_id).first()
    if user is None:
        raise NotFound("User not found")
    return user


# Destroy the session server-side and close open login entries
@router.post("/logout")
def logout(
    response: Response,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    now = datetime.now()
    revoke_session(session, now)
    close_open_login_logs(db, session.user_id, now)
    db.commit()

    clear_session_cookie(response)
    logger.info("User %s logged out", session.user_id)
    return {"message": "Logout successful"}


# Record a login event with the caller's network details
@router.post("/track-login", response_model=SuccessResponse)
def track_login(request: Request, user_id: int = Depends(require_auth), db: Session = Depends(get_db)):
    ip = get_client_ip(request)
    db.add(LoginLog(
        user_id=user_id,
        ip_address=ip,
        location=get_location_from_ip(ip),
        user_agent=get_user_agent(request),
    ))
    db.commit()
    return SuccessResponse()


# Close open login entries without ending the session
@router.post("/logout-track", response_model=SuccessResponse)
def track_logout(user_id: int = Depends(require_auth), db: Session = Depends(get_db)):
    close_open_login_logs(db, user_id, datetime.now())
    db.commit()
    return SuccessResponse()


@router.get("/login-history", response_model=LoginHistory)
def login_history(
    limit: int = Query(settings.LOGIN_HISTORY_DEFAULT, ge=1, le=500),
    user_id: int = Depends(require_auth),
    db: Session = Depends(get_db),
):
    history = (
        db.query(LoginLog)
        .filter(LoginLog.user_id == user_id)
        .order_by(LoginLog.login_time.desc(), LoginLog.id.desc())
        .limit(limit)
        .all()
    )
    return {"history": history}
