#!/usr/bin/env python
"""Seed script to load the price master and SKU aliases into the database.

Run this once (and after every price master update) when the service runs
with CATALOG_SOURCE=database, then call POST /api/v1/mappings/reload.

Usage:
    python backend/scripts/seed_catalog.py

Environment Variables:
    DATABASE_URL: SQLAlchemy connection string
    PRICE_MASTER_PATH: Price master CSV (default: ./data/price_master.csv)
    SKU_ALIASES_PATH: SKU alias CSV (default: ./data/sku_aliases.csv)
"""

import sys
from pathlib import Path

# Add backend/src to Python path
backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from sqlalchemy.orm import sessionmaker
from catalog.import_service import CatalogImportService
from config import get_settings
from database import create_db_engine
from models import Base


def print_errors(label, result):
    for error in result.errors:
        print(f"  WARN: {label} row {error.row} ({error.sku or '-'}): {error.error}")


def main():
    """Create tables if needed and import both CSV files."""
    settings = get_settings()

    price_master_path = Path(settings.PRICE_MASTER_PATH)
    aliases_path = Path(settings.SKU_ALIASES_PATH)

    if not price_master_path.exists():
        print(f"ERROR: Price master not found: {price_master_path}")
        sys.exit(1)

    # Create database connection
    engine = create_db_engine(settings.DATABASE_URL)
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    session = Session()

    try:
        service = CatalogImportService(session)

        catalog_result = service.import_price_master(price_master_path.read_bytes())
        print_errors("price master", catalog_result)

        if aliases_path.exists():
            alias_result = service.import_aliases(aliases_path.read_bytes())
            print_errors("alias", alias_result)
            alias_count = alias_result.imported_count
        else:
            print(f"WARN: Alias file not found, skipping: {aliases_path}")
            alias_count = 0

        print("SUCCESS: Catalog seeded")
        print(f"  SKUs:    {catalog_result.imported_count} of {catalog_result.total_rows}")
        print(f"  Aliases: {alias_count}")

    except Exception as e:
        session.rollback()
        print(f"ERROR: Failed to seed catalog: {e}")
        sys.exit(1)

    finally:
        session.close()


if __name__ == "__main__":
    main()
