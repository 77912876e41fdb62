"""Submission protocol tests against an in-memory storage fake."""

from datetime import date
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError

from vhsa.core.exceptions import NotFoundError, RecordConflictError, StorageError
from vhsa.schemas.screening import ScreeningSubmission
from vhsa.screening.service import ScreeningService
from vhsa.screening.storage import SqlAlchemyScreeningStorage


class InMemoryStorage:
    def __init__(self, students=()):
        self.students = {s.unique_id.lower(): s for s in students}
        self.records = {}
        self.next_id = 1
        self.saves = []
        self.locked_reads = 0

    def find_student_by_external_id(self, unique_id):
        return self.students.get(unique_id.lower())

    def find_screening_record(self, student_id, *, for_update=False):
        if for_update:
            self.locked_reads += 1
        record = self.records.get(student_id)
        return dict(record) if record else None

    def save_screening_record(self, row, *, is_update):
        self.saves.append(is_update)
        row = dict(row)
        if not is_update:
            if row["student_id"] in self.records:
                raise RecordConflictError("duplicate")
            row["id"] = self.next_id
            self.next_id += 1
        self.records[row["student_id"]] = row
        return dict(row)


class RacingStorage(InMemoryStorage):
    """Another screener's record lands between our read and our insert."""

    def __init__(self, students, competing_row):
        super().__init__(students)
        self.competing_row = competing_row

    def find_screening_record(self, student_id, *, for_update=False):
        record = super().find_screening_record(student_id, for_update=for_update)
        if self.competing_row is not None:
            self.records[student_id] = {**self.competing_row, "id": 99}
            self.competing_row = None
        return record


class FailingStorage(InMemoryStorage):
    def save_screening_record(self, row, *, is_update):
        try:
            raise ConnectionError("connection reset")
        except ConnectionError as e:
            raise StorageError("write failed") from e


@pytest.fixture
def student():
    return SimpleNamespace(
        id=7,
        unique_id="ro0001",
        school="Roosevelt Elementary",
        grade="8th",
        gender="Male",
        status="Returning",
        dob=date(2011, 5, 5),
    )


def submission(**fields):
    body = {"uniqueId": "ro0001", "screeningDate": "2025-09-15"}
    body.update(fields)
    return ScreeningSubmission(**body)


class TestRecordSubmission:
    def test_first_submission_creates(self, student):
        storage = InMemoryStorage([student])
        outcome = ScreeningService(storage).record_submission(
            submission(vision={"initial": {"result": "pass"}})
        )

        assert outcome.status == "created"
        assert outcome.row["id"] == 1
        assert outcome.row["scoliosis_required"] is True
        assert storage.saves == [False]
        assert storage.locked_reads == 1

    def test_second_submission_updates(self, student):
        storage = InMemoryStorage([student])
        service = ScreeningService(storage)
        service.record_submission(submission(vision={"initial": {"result": "pass"}}))

        outcome = service.record_submission(submission(hearing={"initial": {"result": "fail"}}))

        assert outcome.status == "updated"
        assert outcome.row["id"] == 1
        assert outcome.row["vision_initial_result"] == "pass"
        assert outcome.row["hearing_initial_result"] == "fail"
        assert storage.saves == [False, True]

    def test_lookup_is_case_insensitive(self, student):
        storage = InMemoryStorage([student])
        outcome = ScreeningService(storage).record_submission(ScreeningSubmission(
            uniqueId=" RO0001 ", screeningDate="2025-09-15"
        ))
        assert outcome.created
        assert outcome.row["unique_id"] == "ro0001"

    def test_unknown_student(self, student):
        storage = InMemoryStorage([student])
        with pytest.raises(NotFoundError) as exc_info:
            ScreeningService(storage).record_submission(submission(uniqueId="zz9999"))
        assert exc_info.value.key == "zz9999"
        assert storage.saves == []

    def test_concurrent_create_retried_as_update(self, student):
        competing = {
            "student_id": 7,
            "vision_initial_result": "pass",
            "vision_required": True,
            "hearing_required": True,
            "acanthosis_required": False,
            "scoliosis_required": True,
        }
        storage = RacingStorage([student], competing)

        outcome = ScreeningService(storage).record_submission(
            submission(hearing={"initial": {"result": "pass"}})
        )

        assert outcome.status == "updated"
        assert outcome.row["id"] == 99
        assert outcome.row["vision_initial_result"] == "pass"
        assert outcome.row["hearing_initial_result"] == "pass"
        assert storage.saves == [False, True]

    def test_storage_error_propagates_with_cause(self, student):
        storage = FailingStorage([student])
        with pytest.raises(StorageError) as exc_info:
            ScreeningService(storage).record_submission(submission())
        assert isinstance(exc_info.value.__cause__, ConnectionError)


class TestCompletion:
    def test_completion_for_student_without_record(self, student):
        service = ScreeningService(InMemoryStorage([student]))
        status = service.completion_for(student)
        assert status.vision is False

    def test_completion_after_rescreen(self, student):
        service = ScreeningService(InMemoryStorage([student]))
        service.record_submission(submission(vision={"initial": {"result": "fail"}}))
        assert service.completion_for(student).vision is False

        service.record_submission(submission(vision={"rescreen": {"result": "fail"}}))
        assert service.completion_for(student).vision is True

    def test_requirements_for_uses_live_profile(self, student):
        service = ScreeningService(InMemoryStorage([student]))
        result = service.requirements_for(student)
        assert result.scoliosis is True
        assert result.acanthosis is False


class BrokenSession:
    def __init__(self):
        self.rollbacks = 0

    def query(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("server closed the connection"))

    def rollback(self):
        self.rollbacks += 1


class TestSqlAlchemyStorageErrors:
    def test_student_lookup_failure_rolls_back(self):
        session = BrokenSession()
        storage = SqlAlchemyScreeningStorage(session)
        with pytest.raises(StorageError) as exc_info:
            storage.find_student_by_external_id("ro0001")
        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert session.rollbacks == 1

    def test_record_lookup_failure_rolls_back(self):
        session = BrokenSession()
        storage = SqlAlchemyScreeningStorage(session)
        with pytest.raises(StorageError):
            storage.find_screening_record(7, for_update=True)
        assert session.rollbacks == 1
