#!/usr/bin/env python3
"""
Create the durable cart store tables.
"""

from cartsync.infrastructure.configuration.config import get_config
from cartsync.infrastructure.database.operations import DatabaseManager


def create_tables():
    """Create all database tables"""
    print("🗄️ Creating database tables...")

    config = get_config()
    manager = DatabaseManager(config)
    try:
        manager.create_tables()
        print("✅ Database tables created successfully!")
        print(f"📊 Database URL: {config.database_url}")
    finally:
        manager.close()


if __name__ == "__main__":
    create_tables()
