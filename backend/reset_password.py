# reset_password.py
import sys
from dotenv import load_dotenv
load_dotenv()

from expense_tracker.core.config import settings
from expense_tracker.db.session import Database
from expense_tracker.services.credentials import find_user_by_username
from expense_tracker.services.security import hash_password


def reset_password(database: Database, username: str, new_password: str) -> int:
    """Re-hash a user's password. Also makes a Google-only account usable for local login."""
    db = database.session()
    try:
        user = find_user_by_username(db, username)
        if not user:
            print("User not found:", username)
            return 1
        user.password = hash_password(new_password)
        db.add(user)
        db.commit()
        print(f"Password reset for {username}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python reset_password.py <username> <new_password>")
        sys.exit(2)
    database = Database(settings.DATABASE_URL)
    try:
        sys.exit(reset_password(database, sys.argv[1], sys.argv[2]))
    finally:
        database.dispose()
