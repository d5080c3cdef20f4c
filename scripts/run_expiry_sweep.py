"""
Run one expiry sweep now: delete polls and submissions whose expire_at has passed.

The API runs the same sweep on a schedule (EXPIRY_SWEEP_INTERVAL_SECONDS). Use this when the
scheduler is disabled or to clean up immediately:
  python scripts/run_expiry_sweep.py
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.database import SessionLocal  # noqa: E402
from app.services.expiry import sweep_expired  # noqa: E402


def main():
    db = SessionLocal()
    try:
        polls, submissions = sweep_expired(db)
        print(f"Deleted {polls} expired poll(s) and {submissions} submission(s).")
    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
