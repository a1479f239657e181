#!/usr/bin/env python3
"""
Database reset script for the Dental Directory backend.

Drops all directory tables and recreates them empty. Use this to get a
clean local database; production schemas are managed with Alembic.
"""

import sys
import os

# Add backend/src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'backend', 'src'))

from sqlalchemy import inspect

from core.config import DATABASE_URL
from core.database import Base, create_tables, drop_tables, engine

# Import all models to ensure they're registered with Base
import models  # noqa: F401


def reset_database(confirmed: bool = False):
    """Reset the database by dropping all tables and recreating them."""

    print("🔄 Resetting Dental Directory database...")
    print(f"Database URL: {DATABASE_URL}")

    if not confirmed:
        answer = input("This deletes every clinic and all opening hours. Continue? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("❌ Aborted")
            return

    try:
        print("🗑️  Dropping existing tables...")
        drop_tables()

        print("🏗️  Creating fresh tables...")
        create_tables()

        table_names = inspect(engine).get_table_names()
        expected_tables = sorted(Base.metadata.tables)

        print("📋 Created tables:")
        for table in expected_tables:
            if table in table_names:
                print(f"   ✅ {table}")
            else:
                print(f"   ❌ {table} (missing)")

        if all(table in table_names for table in expected_tables):
            print("🎉 Database reset complete! All tables created successfully.")
        else:
            print("⚠️  Warning: Some tables may be missing")

    except Exception as e:
        print(f"❌ Error resetting database: {e}")
        raise


def show_usage():
    """Show usage information."""
    print("Dental Directory Database Reset Script")
    print("=" * 40)
    print()
    print("This script will:")
    print("1. Drop all directory tables (clinics, clinic_hours, clinic_special_hours)")
    print("2. Recreate them empty")
    print()
    print("Usage:")
    print("  python reset_database.py [--yes]")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] in ['--help', '-h']:
        show_usage()
    else:
        reset_database(confirmed='--yes' in sys.argv[1:])
