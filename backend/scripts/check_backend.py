#!/usr/bin/env python3
"""
Quick checks so the backend can start. Run from backend/:
  python scripts/check_backend.py
"""
import os
import sys
from pathlib import Path

# Run from backend/
backend_dir = Path(__file__).resolve().parent.parent
os.chdir(backend_dir)
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))


def main():
    errors = []

    # 1) .env
    env_file = backend_dir / ".env"
    if not env_file.exists():
        print("WARN backend/.env missing (defaults and process env are used). Copy from backend/.env.example to customise.")
    else:
        print("OK  .env exists")

    # 2) Settings parse (hours, duration, window)
    try:
        from slotbook.config import settings
        print(
            f"OK  Settings: tz={settings.calendar_timezone} hours={settings.business_start_hour}-"
            f"{settings.business_end_hour} slot={settings.slot_duration_minutes}min window={settings.window_days}d"
        )
    except Exception as e:
        errors.append(f"Settings: {e}")
        print("FAIL Settings:", e)
        settings = None

    # 3) DB connection and schema
    if settings is not None:
        try:
            from sqlalchemy import inspect, text
            from slotbook.db.session import create_db_engine
            from slotbook.db.tables import ALL_TABLE_NAMES

            engine = create_db_engine(settings.database_url)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            print("OK  Database connection (DATABASE_URL)")
            missing = set(ALL_TABLE_NAMES) - set(inspect(engine).get_table_names())
            if missing:
                errors.append(f"Tables missing: {sorted(missing)}. Run: alembic upgrade head")
                print("FAIL Tables missing:", sorted(missing))
            else:
                print("OK  Tables present")
            engine.dispose()
        except Exception as e:
            errors.append(f"Database: {e}")
            print("FAIL Database:", e)

    # 4) App import (catches missing deps, bad imports)
    try:
        from slotbook.main import app  # noqa: F401
        print("OK  App import (slotbook.main)")
    except Exception as e:
        errors.append(f"App import: {e}")
        print("FAIL App import:", e)

    if errors:
        print("\n---")
        for e in errors:
            print("•", e)
        return 1

    print("\nAll checks passed. Start with: uvicorn slotbook.main:app --reload --port 8000")
    return 0


if __name__ == "__main__":
    sys.exit(main())
