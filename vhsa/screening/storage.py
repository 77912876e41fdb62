import logging
from typing import Any, Dict, Optional, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from vhsa import crud
from vhsa.core.exceptions import RecordConflictError, StorageError
from vhsa.models.student import Student

logger = logging.getLogger(__name__)


class ScreeningStorage(Protocol):
    """What the screening service needs from persistence."""

    def find_student_by_external_id(self, unique_id: str) -> Optional[Any]:
        ...

    def find_screening_record(self, student_id: int, *, for_update: bool = False) -> Optional[Dict[str, Any]]:
        ...

    def save_screening_record(self, row: Dict[str, Any], *, is_update: bool) -> Dict[str, Any]:
        ...


class SqlAlchemyScreeningStorage:
    def __init__(self, db: Session):
        self.db = db

    def find_student_by_external_id(self, unique_id: str) -> Optional[Student]:
        try:
            return crud.student.get_by_unique_id(self.db, unique_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to look up student {unique_id}: {e}") from e

    def find_screening_record(self, student_id: int, *, for_update: bool = False) -> Optional[Dict[str, Any]]:
        try:
            record = crud.screening_result.get_by_student_id(self.db, student_id, for_update=for_update)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to load screening record for student {student_id}: {e}") from e
        return record.to_dict() if record is not None else None

    def save_screening_record(self, row: Dict[str, Any], *, is_update: bool) -> Dict[str, Any]:
        try:
            if is_update:
                db_obj = crud.screening_result.get(self.db, row["id"])
                if db_obj is None:
                    raise StorageError(f"Screening record {row['id']} disappeared before update")
                saved = crud.screening_result.update(self.db, db_obj=db_obj, row=row)
            else:
                saved = crud.screening_result.create(self.db, row=row)
        except IntegrityError as e:
            self.db.rollback()
            if not is_update:
                logger.warning(f"[ScreeningStorage] Concurrent create for student {row.get('student_id')}")
                raise RecordConflictError(
                    f"Screening record for student {row.get('student_id')} already exists"
                ) from e
            raise StorageError(f"Failed to save screening record: {e}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Failed to save screening record: {e}") from e
        return saved.to_dict()
