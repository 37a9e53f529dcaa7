from typing import List, Optional

from sqlalchemy.orm import Session

from skillswap.models.report import Report
from skillswap.utils.clock import utcnow


def create_report(
    db: Session,
    *,
    reporter_id: int,
    content_type: str,
    reason: str,
    reported_user_id: Optional[int] = None,
    content_id: Optional[str] = None,
    description: Optional[str] = None,
) -> Report:
    report = Report(
        reporter_id=reporter_id,
        reported_user_id=reported_user_id,
        content_type=content_type,
        content_id=content_id,
        reason=reason,
        description=description,
        status="pending",
    )
    db.add(report)
    db.flush()
    return report


def get_report(db: Session, report_id: int) -> Optional[Report]:
    return db.query(Report).filter(Report.id == report_id).first()


def get_reports(db: Session, status: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[Report]:
    query = db.query(Report)
    if status:
        query = query.filter(Report.status == status)
    return query.order_by(Report.created_at.desc(), Report.id.desc()).offset(skip).limit(limit).all()


def update_report_status(db: Session, report_id: int, status: str) -> Optional[Report]:
    report = get_report(db, report_id)
    if not report:
        return None
    report.status = status
    report.updated_at = utcnow()
    db.flush()
    return report


def count_reports(db: Session, status: Optional[str] = None) -> int:
    query = db.query(Report)
    if status:
        query = query.filter(Report.status == status)
    return query.count()
