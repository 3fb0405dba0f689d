"""
Database initialization script.

Creates the tables, seeds the gender lookup and creates the default admin
account. Optionally loads reference data (communities, disability
categories, assistance types) from CSV files with a `name` column.
Run this once before starting the API server.

    python scripts/init_database.py [--communities FILE] [--categories FILE] [--assistance-types FILE]
"""
import os
import argparse
import logging
import pandas as pd

from pwd_registry.config import settings
from pwd_registry.database import SessionLocal, init_db
from pwd_registry.exceptions import ConflictError
from pwd_registry.services.reference_service import (
    CommunityService,
    DisabilityCategoryService,
    AssistanceTypeService,
)
from pwd_registry.services.user_service import UserService
from pwd_registry.utils.constants import UserRole

# Setup logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def create_default_admin(db) -> bool:
    """Create the bootstrap admin unless an account with that username exists."""
    service = UserService(db)
    if service.get_by_username(settings.DEFAULT_ADMIN_USERNAME) is not None:
        logger.info("Admin account '%s' already exists", settings.DEFAULT_ADMIN_USERNAME)
        return False

    service.create({
        "username": settings.DEFAULT_ADMIN_USERNAME,
        "email": settings.DEFAULT_ADMIN_EMAIL,
        "password": settings.DEFAULT_ADMIN_PASSWORD,
        "role": UserRole.ADMIN,
    })
    logger.info("Created admin account '%s'", settings.DEFAULT_ADMIN_USERNAME)
    return True


def load_names(service, csv_file: str) -> int:
    """Insert every distinct name from the CSV; names already present are skipped."""
    df = pd.read_csv(csv_file)
    if "name" not in df.columns:
        raise ValueError(f"{csv_file} has no 'name' column")

    names = df["name"].dropna().astype(str).str.strip()
    names = names[names != ""].drop_duplicates()

    loaded = 0
    for name in names:
        try:
            service.create({"name": name})
            loaded += 1
        except ConflictError:
            logger.info("  Skipping existing %s '%s'", service.label.lower(), name)
    logger.info("Loaded %d %s rows from %s", loaded, service.label.lower(), os.path.basename(csv_file))
    return loaded


def main(argv=None):
    parser = argparse.ArgumentParser(description="Initialize the PWD registry database")
    parser.add_argument("--communities", help="CSV of community names")
    parser.add_argument("--categories", help="CSV of disability category names")
    parser.add_argument("--assistance-types", help="CSV of assistance type names")
    args = parser.parse_args(argv)

    logger.info("Initializing database at %s", settings.database_url)
    init_db()

    db = SessionLocal()
    try:
        create_default_admin(db)

        loaders = [
            (args.communities, CommunityService),
            (args.categories, DisabilityCategoryService),
            (args.assistance_types, AssistanceTypeService),
        ]
        for csv_file, service_cls in loaders:
            if csv_file:
                load_names(service_cls(db), csv_file)

        logger.info("Database initialization complete")
    except Exception as e:
        logger.error(f"Error during initialization: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
