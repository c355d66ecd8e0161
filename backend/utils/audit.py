from typing import Optional
from sqlalchemy.orm import Session
from models.admin_action import AdminAction

# Stage an audit entry; the caller commits it together with the mutation it describes
def log_admin_action(
    db: Session,
    *,
    admin_id: int,
    action: str,
    target_user_id: Optional[int] = None,
    details: Optional[str] = None,
    ip: Optional[str] = None,
) -> AdminAction:
    entry = AdminAction(
        admin_id=admin_id,
        action=action,
        target_user_id=target_user_id,
        details=details,
        ip_address=ip or "unknown",
    )
    db.add(entry)
    db.flush()
    return entry
