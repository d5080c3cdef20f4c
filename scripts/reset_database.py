"""
Drop and recreate every table (users, polls, submissions, venues, bookings, settings).

Destroys all data. Intended for local development:
  python scripts/reset_database.py --yes
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.database import Base, engine  # noqa: E402
from app import models  # noqa: F401,E402


def main():
    if "--yes" not in sys.argv[1:]:
        print(f"This will delete ALL data in {engine.url!r}. Re-run with --yes to confirm.")
        sys.exit(1)
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    print(f"Recreated {len(Base.metadata.tables)} table(s): {', '.join(sorted(Base.metadata.tables))}")
    print("Done.")


if __name__ == "__main__":
    main()
