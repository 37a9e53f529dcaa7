from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

pytest.importorskip("fastapi")

from fastapi import HTTPException

from skillswap.api.admin import (
    create_announcement,
    delete_announcement,
    get_announcements,
    get_reports,
    update_announcement,
    update_report_status,
)
from skillswap.api.announcement import get_active_announcements
from skillswap.api.report import create_report
from skillswap.database import Base
from skillswap.models import User
from skillswap.schemas import AnnouncementCreate, AnnouncementUpdate, ReportCreate, ReportStatusUpdate
from skillswap.utils.clock import utcnow


@pytest.fixture
def db_session():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _create_user(db, email: str, is_admin: bool = False) -> User:
    user = User(email=email, password_hash="hash", first_name="User", last_name="Tester", is_admin=is_admin)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


# ======================
# REPORTS
# ======================

def test_report_lifecycle(db_session):
    admin = _create_user(db_session, "admin@test.com", is_admin=True)
    reporter = _create_user(db_session, "reporter@test.com")
    target = _create_user(db_session, "target@test.com")

    report = create_report(
        payload=ReportCreate(reported_user_id=target.id, content_type="bio", reason="offensive bio"),
        current_user=reporter,
        db=db_session,
    )
    assert report.status == "pending"

    pending = get_reports(status_filter="pending", skip=0, limit=50, admin=admin, db=db_session)
    assert [r.id for r in pending] == [report.id]

    resolved = update_report_status(
        report_id=report.id,
        payload=ReportStatusUpdate(status="resolved"),
        admin=admin,
        db=db_session,
    )
    assert resolved.status == "resolved"
    assert get_reports(status_filter="pending", skip=0, limit=50, admin=admin, db=db_session) == []
    assert len(get_reports(status_filter=None, skip=0, limit=50, admin=admin, db=db_session)) == 1

    with pytest.raises(HTTPException) as exc:
        update_report_status(report_id=9999, payload=ReportStatusUpdate(status="reviewed"), admin=admin, db=db_session)
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        get_reports(status_filter="open", skip=0, limit=50, admin=admin, db=db_session)
    assert exc.value.status_code == 400


def test_report_self_and_unknown_user(db_session):
    reporter = _create_user(db_session, "reporter@test.com")

    with pytest.raises(HTTPException) as exc:
        create_report(
            payload=ReportCreate(reported_user_id=reporter.id, content_type="profile", reason="me me me"),
            current_user=reporter,
            db=db_session,
        )
    assert exc.value.status_code == 400

    with pytest.raises(HTTPException) as exc:
        create_report(
            payload=ReportCreate(reported_user_id=9999, content_type="profile", reason="who is this"),
            current_user=reporter,
            db=db_session,
        )
    assert exc.value.status_code == 404


# ======================
# ANNOUNCEMENTS
# ======================

def test_announcement_crud_and_active_listing(db_session):
    admin = _create_user(db_session, "admin@test.com", is_admin=True)

    live = create_announcement(
        payload=AnnouncementCreate(title="Welcome", message="Hello all", type="info"),
        admin=admin,
        db=db_session,
    )
    expired = create_announcement(
        payload=AnnouncementCreate(
            title="Old",
            message="Gone",
            type="maintenance",
            expires_at=utcnow() - timedelta(hours=1),
        ),
        admin=admin,
        db=db_session,
    )
    inactive = create_announcement(
        payload=AnnouncementCreate(title="Draft", message="Soon", type="warning", is_active=False),
        admin=admin,
        db=db_session,
    )

    assert [a.id for a in get_active_announcements(db=db_session)] == [live.id]
    assert len(get_announcements(admin=admin, db=db_session)) == 3

    update_announcement(
        announcement_id=inactive.id,
        payload=AnnouncementUpdate(is_active=True),
        admin=admin,
        db=db_session,
    )
    assert [a.id for a in get_active_announcements(db=db_session)] == [inactive.id, live.id]

    delete_announcement(announcement_id=expired.id, admin=admin, db=db_session)
    assert len(get_announcements(admin=admin, db=db_session)) == 2

    with pytest.raises(HTTPException) as exc:
        delete_announcement(announcement_id=expired.id, admin=admin, db=db_session)
    assert exc.value.status_code == 404
