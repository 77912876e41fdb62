#!/usr/bin/env python3
"""
VHSA Screening Database Setup Script
====================================

Creates the screening tables before starting the server and optionally seeds
the school and screener pick lists.

Usage:
    python scripts/setup_database.py [--check-only]
    python scripts/setup_database.py --schools "Roosevelt Elementary,Lamar Middle" --screeners "J. Ortiz,K. Lee"
"""

import sys
import logging
import argparse
from typing import List

from vhsa.db.session import engine
from vhsa.db.base import Base
from vhsa.core.database_utils import get_db_session, check_database_connection, find_missing_tables
from vhsa.models.school import School, Screener

# Import all models to ensure they are registered with Base.metadata
from vhsa import crud, models  # noqa: F401

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def test_connection() -> bool:
    """Test database connection"""
    logger.info("🔌 Testing database connection...")
    try:
        with get_db_session() as db:
            ok = check_database_connection(db)
    except Exception as e:
        logger.error(f"❌ Database connection failed: {e}")
        return False
    if ok:
        logger.info("✅ Database connection successful")
    return ok


def check_tables_exist() -> bool:
    """Check if all required tables exist"""
    with get_db_session() as db:
        missing_tables = find_missing_tables(db)
    if missing_tables:
        logger.warning(f"⚠️ Missing tables: {missing_tables}")
        return False
    logger.info("✅ All required tables exist")
    return True


def create_tables() -> bool:
    """Create all required tables"""
    try:
        logger.info("🏗️ Creating database tables...")
        Base.metadata.create_all(bind=engine)
        return True
    except Exception as e:
        logger.error(f"❌ Failed to create tables: {e}")
        return False


def _split(value: str) -> List[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


def seed_pick_lists(school_names: List[str], screener_names: List[str]) -> None:
    """Insert schools and screeners that are not already present"""
    with get_db_session() as db:
        for name in school_names:
            if crud.school.get_by_name(db, name):
                logger.info(f"ℹ️ School already exists: {name}")
                continue
            db.add(School(name=name, active=True))
            logger.info(f"✅ Added school: {name}")

        for name in screener_names:
            if crud.screener.get_by_name(db, name):
                logger.info(f"ℹ️ Screener already exists: {name}")
                continue
            db.add(Screener(name=name, active=True))
            logger.info(f"✅ Added screener: {name}")


def main():
    """Main setup function"""
    parser = argparse.ArgumentParser(description='VHSA Screening Database Setup')
    parser.add_argument('--check-only', action='store_true',
                        help='Only check if tables exist, do not create')
    parser.add_argument('--schools', default='',
                        help='Comma-separated school names to seed')
    parser.add_argument('--screeners', default='',
                        help='Comma-separated screener names to seed')

    args = parser.parse_args()

    logger.info("🚀 VHSA Screening Database Setup")
    logger.info("=" * 40)

    if not test_connection():
        logger.error("❌ Cannot proceed without database connection")
        sys.exit(1)

    tables_exist = check_tables_exist()

    if args.check_only:
        sys.exit(0 if tables_exist else 1)

    if not tables_exist and not create_tables():
        sys.exit(1)

    schools, screeners = _split(args.schools), _split(args.screeners)
    if schools or screeners:
        seed_pick_lists(schools, screeners)

    if check_tables_exist():
        logger.info("🎉 Database setup completed successfully!")
        logger.info("You can now start the server with:")
        logger.info("  python -m uvicorn vhsa.main:app --host 0.0.0.0 --port 8000")
    else:
        logger.error("❌ Setup verification failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
