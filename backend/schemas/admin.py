from typing import List, Optional
from datetime import datetime

from schemas.base import CamelModel


class ModeratorCounts(CamelModel):
    total: int
    active: int
    inactive: int

class DailyCounts(CamelModel):
    today: int
    total: int

class AdminStats(CamelModel):
    moderators: ModeratorCounts
    attendance: DailyCounts
    logins: DailyCounts

class AdminActionOut(CamelModel):
    id: int
    admin_id: int
    action: str
    target_user_id: Optional[int] = None
    details: Optional[str] = None
    ip_address: str
    created_at: Optional[datetime] = None

class AdminActionPage(CamelModel):
    items: List[AdminActionOut]
    total: int
    page: int
    page_size: int
