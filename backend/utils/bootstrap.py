# backend/utils/bootstrap.py
import json
import logging
from pathlib import Path
from typing import List, Union

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.users import User, UserRole
from utils.hashing import get_password_hash

logger = logging.getLogger(__name__)


def load_seed_accounts(path: Union[str, Path]) -> List[dict]:
    """Read the predefined account list from a JSON file."""
    with open(path, encoding="utf-8") as fh:
        accounts = json.load(fh)
    if not isinstance(accounts, list):
        raise ValueError(f"Seed file {path} must contain a JSON list of accounts")
    return accounts


def seed_users(db: Session, accounts: List[dict]) -> int:
    """Insert every account whose email is not taken yet.

    Existing accounts are left untouched, so running this repeatedly is safe.
    Returns the number of accounts created.
    """
    created = 0
    for account in accounts:
        email = account["email"].strip().lower()
        exists = db.query(User.id).filter(func.lower(User.email) == email).first()
        if exists:
            continue

        db.add(User(
            email=email,
            password_hash=get_password_hash(account["password"]),
            first_name=account.get("first_name"),
            last_name=account.get("last_name"),
            role=UserRole(account.get("role", UserRole.MODERATOR.value)),
            is_active=account.get("is_active", True),
        ))
        created += 1

    db.commit()
    if created:
        logger.info("Seeded %s predefined accounts", created)
    return created


def seed_users_from_file(db: Session, path: Union[str, Path]) -> int:
    return seed_users(db, load_seed_accounts(path))
