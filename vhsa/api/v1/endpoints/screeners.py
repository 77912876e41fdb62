from typing import Any, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vhsa import crud, schemas
from vhsa.api import deps

router = APIRouter()


@router.get("", response_model=List[schemas.Screener])
def read_screeners(db: Session = Depends(deps.get_db)) -> Any:
    return crud.screener.get_active(db)
