import logging
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from vhsa import crud, schemas
from vhsa.api import deps
from vhsa.core.exceptions import DuplicateStudentError, ValidationError
from vhsa.screening.rules import is_recognized_grade
from vhsa.screening.service import ScreeningService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[schemas.Student])
def read_students(db: Session = Depends(deps.get_db)) -> Any:
    return crud.student.get_all(db)


@router.get("/search", response_model=schemas.StudentLookupResponse, response_model_exclude_none=True)
def search_students(
    *,
    db: Session = Depends(deps.get_db),
    service: ScreeningService = Depends(deps.get_screening_service),
    last_name: str = Query(..., alias="lastName", min_length=1),
    school: str = Query(..., min_length=1),
) -> Any:
    """
    Find a student by last name within a school.

    A single match comes back with its required and completed screenings so the
    screener can go straight to data entry; several matches are listed for the
    screener to pick from.
    """
    matches = crud.student.search(db, last_name=last_name, school=school)
    logger.info(f"[StudentSearch] lastName={last_name!r} school={school!r} -> {len(matches)} match(es)")

    if not matches:
        return schemas.StudentLookupResponse(found=False)
    if len(matches) > 1:
        return schemas.StudentLookupResponse(
            found=True,
            multiple=True,
            students=[schemas.Student.model_validate(s) for s in matches],
        )

    student = matches[0]
    return schemas.StudentLookupResponse(
        found=True,
        student=schemas.Student.model_validate(student),
        required_screenings=service.requirements_for(student),
        completed_screenings=service.completion_for(student),
    )


@router.post(
    "/quick-add",
    response_model=schemas.StudentWithRequirements,
    status_code=status.HTTP_201_CREATED,
)
def quick_add_student(
    *,
    db: Session = Depends(deps.get_db),
    service: ScreeningService = Depends(deps.get_screening_service),
    student_in: schemas.StudentQuickAdd,
) -> Any:
    """Register a student who is missing from the roster on screening day."""
    if not is_recognized_grade(student_in.grade):
        raise ValidationError(f"Unrecognized grade: {student_in.grade}")

    existing = crud.student.find_duplicate(
        db,
        first_name=student_in.first_name,
        last_name=student_in.last_name,
        school=student_in.school,
    )
    if existing:
        raise DuplicateStudentError("Student already exists at this school", existing=existing)

    unique_id = crud.student.generate_unique_id(db, school=student_in.school)
    if unique_id is None:
        logger.error(f"[QuickAdd] Could not allocate a unique id for school {student_in.school!r}")
        raise HTTPException(status_code=500, detail="Could not generate a unique student id")

    student = crud.student.create(db, obj_in=student_in, unique_id=unique_id)
    logger.info(f"[QuickAdd] Created student {student.unique_id} at {student.school}")

    return schemas.StudentWithRequirements(
        student=schemas.Student.model_validate(student),
        required_screenings=service.requirements_for(student),
    )


@router.get("/{unique_id}", response_model=schemas.StudentLookupResponse, response_model_exclude_none=True)
def read_student(
    *,
    db: Session = Depends(deps.get_db),
    service: ScreeningService = Depends(deps.get_screening_service),
    unique_id: str,
) -> Any:
    student = crud.student.get_by_unique_id(db, unique_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    return schemas.StudentLookupResponse(
        found=True,
        student=schemas.Student.model_validate(student),
        required_screenings=service.requirements_for(student),
        completed_screenings=service.completion_for(student),
    )


@router.put("/{unique_id}", response_model=schemas.StudentWithRequirements)
def update_student(
    *,
    db: Session = Depends(deps.get_db),
    service: ScreeningService = Depends(deps.get_screening_service),
    unique_id: str,
    student_in: schemas.StudentUpdate,
) -> Any:
    student = crud.student.get_by_unique_id(db, unique_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    student = crud.student.update(db, db_obj=student, obj_in=student_in)
    logger.info(f"[StudentUpdate] Updated {student.unique_id}: {sorted(student_in.model_fields_set)}")

    return schemas.StudentWithRequirements(
        student=schemas.Student.model_validate(student),
        required_screenings=service.requirements_for(student),
    )
