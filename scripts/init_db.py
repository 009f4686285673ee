"""
Boutique - Database Initialization
===================================
Creates all tables if they don't exist and seeds the product catalog.
Safe to run multiple times (CREATE IF NOT EXISTS, seeding skips known names).

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --drop   # Drop and recreate all tables
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.database import Base, engine, SessionLocal

# Import ALL models so Base.metadata knows about them
from modules.user.models import User  # noqa
from modules.catalog.models import Product  # noqa
from modules.catalog.data import LOCAL_PRODUCTS
from modules.catalog.service import catalog_service


def init_db(drop_first=False):
    if drop_first:
        print("Dropping all tables...")
        Base.metadata.drop_all(bind=engine)
        print("Done.")

    print("Creating all tables...")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        added = catalog_service.seed_products(db, LOCAL_PRODUCTS)
        db.commit()
        print(f"Seeded {added} product(s).")
    finally:
        db.close()

    # List created tables
    from sqlalchemy import inspect
    inspector = inspect(engine)
    tables = inspector.get_table_names()
    print(f"\nTables in database ({len(tables)}):")
    for t in sorted(tables):
        print(f"  - {t}")
    print("\nDatabase initialized successfully!")


if __name__ == "__main__":
    init_db(drop_first="--drop" in sys.argv)
