import os
import sys

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from config import settings
from database import SessionLocal, init_db
from utils.bootstrap import seed_users_from_file


def populate_database(path: str = settings.SEED_USERS_FILE) -> None:
    """Create tables and insert the predefined portal accounts."""
    init_db()
    session = SessionLocal()
    try:
        created = seed_users_from_file(session, path)
    finally:
        session.close()
    print(f"Inserted {created} accounts from {path}.")


if __name__ == "__main__":
    populate_database(sys.argv[1] if len(sys.argv) > 1 else settings.SEED_USERS_FILE)
