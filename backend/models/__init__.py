from .users import User, UserRole
from .session import UserSession
from .attendance import AttendanceRecord
from .login_log import LoginLog
from .admin_action import AdminAction
from .review import TrustpilotReview, ReviewStatus

__all__ = [
    "User",
    "UserRole",
    "UserSession",
    "AttendanceRecord",
    "LoginLog",
    "AdminAction",
    "TrustpilotReview",
    "ReviewStatus",
]
