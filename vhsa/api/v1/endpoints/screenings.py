import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from vhsa import schemas
from vhsa.api import deps
from vhsa.core.exceptions import NotFoundError, StorageError
from vhsa.screening.service import ScreeningService

logger = logging.getLogger(__name__)

router = APIRouter()

MESSAGES = {
    "created": "Screening results saved",
    "updated": "Screening results updated",
}


@router.post("", response_model=schemas.ScreeningSubmissionResponse)
def submit_screening(
    *,
    service: ScreeningService = Depends(deps.get_screening_service),
    submission: schemas.ScreeningSubmission,
) -> Any:
    """
    Record one screening visit for a student.

    The first submission for a student creates their record; later ones merge into
    it, keeping every value not re-sent.
    """
    try:
        outcome = service.record_submission(submission)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        logger.error(f"[Screenings] Failed to save screening for {submission.unique_id}: {e.__cause__ or e}")
        raise HTTPException(status_code=500, detail="Failed to save screening results")

    return schemas.ScreeningSubmissionResponse(
        message=MESSAGES[outcome.status],
        status=outcome.status,
        data=outcome.row,
    )
