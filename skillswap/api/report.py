from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from skillswap import models
from skillswap.database import get_db
from skillswap.schemas import ReportCreate, ReportResponse
from skillswap.services import report_service
from skillswap.utils.security import get_current_user

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
def create_report(
    payload: ReportCreate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return report_service.create_report(
            db,
            reporter_id=current_user.id,
            reported_user_id=payload.reported_user_id,
            content_type=payload.content_type,
            content_id=payload.content_id,
            reason=payload.reason,
            description=payload.description,
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
