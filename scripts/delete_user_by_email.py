"""
Delete a user and everything they own (polls, submissions, venues, bookings).
Usage: python scripts/delete_user_by_email.py <email>
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.database import SessionLocal  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services.account import delete_account  # noqa: E402


def main():
    email = (sys.argv[1] if len(sys.argv) > 1 else "").strip().lower()
    if not email:
        print("Usage: python scripts/delete_user_by_email.py <email>")
        sys.exit(1)

    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email).first()
        if not user:
            print(f"No user found with email: {email}")
            sys.exit(0)
        uid = user.id
        deleted = delete_account(db, user)
        print(f"Deleted user {email} (id={uid}): {deleted}")
    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
