from pydantic import EmailStr, Field
from typing import List, Optional
from datetime import datetime

from models.users import UserRole
from schemas.base import CamelModel

# Schema for user authentication credentials
class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

# Public profile returned by the auth endpoints
class UserSummary(CamelModel):
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole

class LoginResponse(CamelModel):
    message: str = "Login successful"
    user: UserSummary

# Moderator row on the admin dashboard
class ModeratorOut(UserSummary):
    is_active: bool
    created_at: Optional[datetime] = None
    last_location: Optional[str] = None
    last_attendance_at: Optional[datetime] = None

class ModeratorList(CamelModel):
    moderators: List[ModeratorOut]

# Payload for activating or deactivating a moderator
class StatusUpdate(CamelModel):
    is_active: bool

class LoginLogOut(CamelModel):
    id: int
    user_id: int
    ip_address: str
    location: Optional[str] = None
    user_agent: Optional[str] = None
    login_time: datetime
    logout_time: Optional[datetime] = None

class LoginHistory(CamelModel):
    history: List[LoginLogOut]

class SuccessResponse(CamelModel):
    success: bool = True
