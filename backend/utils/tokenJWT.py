# utils/tokenJWT.py
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from fastapi import Depends, Request, Response
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.session import UserSession
from models.users import User
from utils.exceptions import Forbidden, Unauthorized

logger = logging.getLogger(__name__)

# Fixed lifetime; sessions are refreshed only by logging in again
SESSION_TTL = timedelta(hours=settings.SESSION_TTL_HOURS)


# Sign the opaque session id so the cookie cannot be forged
def create_session_token(session: UserSession) -> str:
    to_encode = {
        "sub": str(session.user_id),
        "sid": session.session_id,
        "exp": datetime.now(timezone.utc) + SESSION_TTL,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


# Remove sessions that can no longer authenticate anything
def purge_expired_sessions(db: Session, now: datetime) -> int:
    return (
        db.query(UserSession)
        .filter(UserSession.expires_at <= now)
        .delete(synchronize_session=False)
    )


# Open a server-side session for the user and return it with its cookie token
def create_session(db: Session, user: User, now: Optional[datetime] = None) -> Tuple[UserSession, str]:
    now = now or datetime.now()
    purged = purge_expired_sessions(db, now)
    if purged:
        logger.info("Purged %s expired sessions", purged)

    session = UserSession(
        session_id=secrets.token_urlsafe(32),
        user_id=user.id,
        created_at=now,
        expires_at=now + SESSION_TTL,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session, create_session_token(session)


def revoke_session(session: UserSession, now: Optional[datetime] = None) -> None:
    session.revoked_at = now or datetime.now()


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(SESSION_TTL.total_seconds()),
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


# Resolve the live session behind the request cookie
def get_current_session(request: Request, db: Session = Depends(get_db)) -> UserSession:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise Unauthorized()

    payload = decode_session_token(token)
    if payload is None or not payload.get("sid"):
        raise Unauthorized()

    session = (
        db.query(UserSession)
        .filter(UserSession.session_id == payload["sid"])
        .first()
    )
    if session is None or not session.is_valid(datetime.now()):
        raise Unauthorized()
    return session


# Authenticated user id for the request; the session user must still exist
def require_auth(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> int:
    if db.query(User.id).filter(User.id == session.user_id).first() is None:
        logger.warning("Session %s refers to missing user_id=%s", session.id, session.user_id)
        raise Unauthorized()
    return session.user_id


# Authenticated admin user for the request
def require_admin(
    user_id: int = Depends(require_auth),
    db: Session = Depends(get_db),
) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None or not user.is_admin:
        logger.warning("Admin access denied for user_id=%s", user_id)
        raise Forbidden()
    return user
