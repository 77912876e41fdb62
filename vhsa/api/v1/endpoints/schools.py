from typing import Any, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vhsa import crud, schemas
from vhsa.api import deps

router = APIRouter()


@router.get("", response_model=List[schemas.School])
def read_schools(db: Session = Depends(deps.get_db)) -> Any:
    """Active schools, alphabetical"""
    return crud.school.get_active(db)
