# backend/routes/logs.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from database import get_db
from models.admin_action import AdminAction
from models.users import User
from schemas.admin import AdminActionPage
from utils.tokenJWT import require_admin

router = APIRouter(prefix="/api/admin/actions", tags=["Logs"])

# Paginated audit trail of privileged mutations
@router.get("", response_model=AdminActionPage)
def get_admin_actions(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    action: Optional[str] = Query(None, description="Filter by action label"),
    admin_id: Optional[int] = Query(None, alias="adminId"),
    target_user_id: Optional[int] = Query(None, alias="targetUserId"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    query = db.query(AdminAction)

    if action:
        query = query.filter(AdminAction.action.ilike(f"%{action}%"))

    if admin_id is not None:
        query = query.filter(AdminAction.admin_id == admin_id)

    if target_user_id is not None:
        query = query.filter(AdminAction.target_user_id == target_user_id)

    # Newest first
    query = query.order_by(AdminAction.created_at.desc(), AdminAction.id.desc())

    total = query.count()
    actions = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "items": actions,
        "total": total,
        "page": page,
        "page_size": page_size,
    }
