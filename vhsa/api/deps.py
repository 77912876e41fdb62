from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from vhsa.db.session import SessionLocal
from vhsa.screening.service import ScreeningService
from vhsa.screening.storage import SqlAlchemyScreeningStorage


def get_db() -> Generator:
    try:
        db = SessionLocal()
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_screening_storage(db: Session = Depends(get_db)) -> SqlAlchemyScreeningStorage:
    return SqlAlchemyScreeningStorage(db)


def get_screening_service(
    storage: SqlAlchemyScreeningStorage = Depends(get_screening_storage),
) -> ScreeningService:
    return ScreeningService(storage)
