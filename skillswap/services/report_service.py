# skillswap/services/report_service.py
"""
Content Reports Service
Users report profiles or content; admins triage them.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from skillswap import models
from skillswap.crud import report as report_crud
from skillswap.crud import user as user_crud
from skillswap.models.report import REPORT_CONTENT_TYPES, REPORT_STATUSES

logger = logging.getLogger(__name__)


def create_report(
    db: Session,
    reporter_id: int,
    content_type: str,
    reason: str,
    reported_user_id: Optional[int] = None,
    content_id: Optional[str] = None,
    description: Optional[str] = None,
) -> models.Report:
    """
    File a report.

    Raises:
        ValueError: If the content type is unknown or the reporter reports themselves
        LookupError: If the reported user does not exist
    """
    if content_type not in REPORT_CONTENT_TYPES:
        raise ValueError(f"Invalid content type. Use one of: {', '.join(REPORT_CONTENT_TYPES)}")

    if reported_user_id is not None:
        if reported_user_id == reporter_id:
            raise ValueError("You cannot report yourself")
        if not user_crud.get_user(db, reported_user_id):
            raise LookupError("Reported user not found")

    try:
        report = report_crud.create_report(
            db,
            reporter_id=reporter_id,
            reported_user_id=reported_user_id,
            content_type=content_type,
            content_id=content_id,
            reason=reason,
            description=description,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(report)
    logger.info(
        "Report %s filed by user_id=%s against user_id=%s (%s)",
        report.id, reporter_id, reported_user_id, content_type,
    )
    return report


def list_reports(db: Session, status: Optional[str] = "pending", skip: int = 0, limit: int = 100) -> List[models.Report]:
    if status and status not in REPORT_STATUSES:
        raise ValueError(f"Invalid status. Use one of: {', '.join(REPORT_STATUSES)}")
    return report_crud.get_reports(db, status, skip, limit)


def update_report_status(db: Session, report_id: int, status: str) -> models.Report:
    if status not in REPORT_STATUSES:
        raise ValueError(f"Invalid status. Use one of: {', '.join(REPORT_STATUSES)}")

    try:
        report = report_crud.update_report_status(db, report_id, status)
        if not report:
            raise LookupError("Report not found")
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(report)
    logger.info("Report %s marked %s", report_id, status)
    return report
