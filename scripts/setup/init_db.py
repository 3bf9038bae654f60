# scripts/setup/init_db.py
"""
Initialize database: creates all tables.
Run once before first launch. Existing tables are left untouched.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from app.database import create_tables, engine
from app.config import settings


def main():
    print("Access control DB initialization")
    print("=" * 40)
    print(f"Database: {engine.url.render_as_string(hide_password=True)}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")
    except SQLAlchemyError as e:
        print(f"Cannot connect to database: {e}")
        print("\nCheck DATABASE_URL in .env and that PostgreSQL is running:")
        print("  sudo systemctl start postgresql")
        sys.exit(1)

    print("\nCreating tables...")
    create_tables()

    tables = sorted(inspect(engine).get_table_names())
    print(f"\nTables in database ({len(tables)} total):")
    for t in tables:
        print(f"   - {t}")

    print("\nDatabase ready. Create the first operator, then start the backend:")
    print("   python scripts/setup/create_user.py --name Admin --email admin@empresa.es --type admin")
    print(f"   uvicorn app.main:app --host {settings.HOST} --port {settings.PORT}")


if __name__ == "__main__":
    main()
