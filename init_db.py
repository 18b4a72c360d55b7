#!/usr/bin/env python
"""Database initialization script for the translation manager.

Creates the translation tables from the SQLAlchemy models. Run this once
before starting the application for the first time, or use the alembic
migrations instead.

Usage:
    python init_db.py
"""

import os
import sys
from transunit import create_app, db


def init_database():
    """Initialize the database by creating all tables."""
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")

    with app.app_context():
        try:
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")

            db.create_all()

            tables_info = [
                ("trans_units", "Translation units (domain + key)"),
                ("translations", "Per-locale translation contents"),
                ("files", "Translation files backing the contents"),
            ]

            print("Created tables:")
            for table_name, description in tables_info:
                print(f"  {table_name:<15} - {description}")

            print(f"\nManaged locales: {', '.join(app.config['TRANSLATION_LOCALES'])}")
            print(f"Translation root dir: {app.config['TRANSLATION_ROOT_DIR']}\n")

            return True

        except Exception as e:
            print(f"Error creating database: {type(e).__name__}: {e}\n")
            return False


if __name__ == '__main__':
    success = init_database()
    sys.exit(0 if success else 1)
