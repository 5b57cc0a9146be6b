"""
Migration script to create all database tables

Run this script to create all database tables:
    python -m groupswipe.migrations.create_all_tables
"""

from groupswipe.database import engine, Base
# Import all models to ensure they're registered with Base
import groupswipe.models  # noqa: F401


def create_tables():
    """Create all database tables"""
    print("=" * 60)
    print("Creating all database tables...")
    print("=" * 60)

    Base.metadata.create_all(bind=engine)

    print("\nAll tables created successfully!")
    print("\nTables:")
    for table_name in sorted(Base.metadata.tables):
        print(f"   - {table_name}")
    print("=" * 60)


if __name__ == "__main__":
    create_tables()
