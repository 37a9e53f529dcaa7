from __future__ import annotations

import pytest
from pydantic import ValidationError
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

pytest.importorskip("fastapi")

from fastapi import HTTPException

from skillswap.api.availability import replace_availability
from skillswap.api.skill import add_skill, delete_skill, get_my_skills, update_skill
from skillswap.api.users import get_user_availability, get_user_profile, get_user_skills, update_profile
from skillswap.database import Base
from skillswap.models import AvailabilitySlot, SkillModeration, User
from skillswap.schemas import AvailabilitySlotIn, ProfileUpdate, SkillCreate, SkillUpdate
from skillswap.services import profile_service


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


def _create_user(db, email: str = "user@test.com", is_public: bool = True) -> User:
    user = User(email=email, password_hash="hash", first_name="Sam", last_name="Lee", is_public=is_public)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _slot_tuples(slots):
    return [(s.day_of_week, s.start_time, s.end_time) for s in slots]


# ======================
# AVAILABILITY
# ======================

def test_set_availability_twice_is_idempotent(db_session):
    user = _create_user(db_session)
    slots = [
        {"day_of_week": 3, "start_time": "18:00", "end_time": "20:00"},
        {"day_of_week": 1, "start_time": "09:00", "end_time": "10:30"},
        {"day_of_week": 1, "start_time": "07:00", "end_time": "08:00"},
    ]

    first = _slot_tuples(profile_service.set_user_availability(db_session, user.id, slots))
    second = _slot_tuples(profile_service.set_user_availability(db_session, user.id, slots))

    assert first == second == [
        (1, "07:00", "08:00"),
        (1, "09:00", "10:30"),
        (3, "18:00", "20:00"),
    ]
    assert db_session.query(AvailabilitySlot).count() == 3


def test_replace_availability_route_clears_with_empty_list(db_session):
    user = _create_user(db_session)
    replace_availability(
        slots=[AvailabilitySlotIn(day_of_week=0, start_time="10:00", end_time="11:00")],
        current_user=user,
        db=db_session,
    )
    assert len(get_user_availability(user_id=user.id, viewer=None, db=db_session)) == 1

    assert replace_availability(slots=[], current_user=user, db=db_session) == []
    assert db_session.query(AvailabilitySlot).count() == 0


def test_availability_slot_validation():
    with pytest.raises(ValidationError):
        AvailabilitySlotIn(day_of_week=7, start_time="10:00", end_time="11:00")
    with pytest.raises(ValidationError):
        AvailabilitySlotIn(day_of_week=2, start_time="11:00", end_time="10:00")
    with pytest.raises(ValidationError):
        AvailabilitySlotIn(day_of_week=2, start_time="9am", end_time="10:00")


# ======================
# SKILLS
# ======================

def test_skill_crud_through_routes(db_session):
    owner = _create_user(db_session, "owner@test.com")
    other = _create_user(db_session, "other@test.com")

    created = add_skill(payload=SkillCreate(name=" Guitar ", level="Expert", type="OFFERED"), current_user=owner, db=db_session)
    assert (created.name, created.level, created.type) == ("Guitar", "expert", "offered")

    updated = update_skill(skill_id=created.id, payload=SkillUpdate(level="beginner"), current_user=owner, db=db_session)
    assert updated.level == "beginner"
    assert updated.name == "Guitar"

    with pytest.raises(HTTPException) as exc:
        update_skill(skill_id=created.id, payload=SkillUpdate(name="Bass"), current_user=other, db=db_session)
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        delete_skill(skill_id=created.id, current_user=other, db=db_session)
    assert exc.value.status_code == 404

    assert [s.id for s in get_my_skills(current_user=owner, db=db_session)] == [created.id]
    delete_skill(skill_id=created.id, current_user=owner, db=db_session)
    assert get_my_skills(current_user=owner, db=db_session) == []


def test_skill_schema_rejects_unknown_level():
    with pytest.raises(ValidationError):
        SkillCreate(name="Guitar", level="advanced", type="offered")


# ======================
# PROFILE
# ======================

def test_update_profile_is_partial(db_session):
    user = _create_user(db_session)
    updated = update_profile(
        payload=ProfileUpdate(bio="Teaching guitar", is_public=False),
        current_user=user,
        db=db_session,
    )
    assert updated.bio == "Teaching guitar"
    assert updated.is_public is False
    assert updated.first_name == "Sam"
    assert updated.location is None


def test_private_profile_is_not_found_for_others(db_session):
    hidden = _create_user(db_session, "hidden@test.com", is_public=False)

    with pytest.raises(HTTPException) as exc:
        get_user_profile(user_id=hidden.id, viewer=None, db=db_session)
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        get_user_profile(user_id=9999, viewer=None, db=db_session)
    assert exc.value.status_code == 404

    assert profile_service.get_public_profile(db_session, hidden.id, viewer_id=hidden.id).id == hidden.id


def test_public_profile_hides_rejected_skills(db_session):
    user = _create_user(db_session)
    keep = profile_service.add_skill(db_session, user.id, "Guitar", "expert", "offered")
    drop = profile_service.add_skill(db_session, user.id, "Spam", "beginner", "offered")
    profile_service.add_skill(db_session, user.id, "Python", "beginner", "wanted")
    db_session.add(SkillModeration(skill_id=drop.id, action="reject", reason="spam"))
    db_session.commit()

    profile = get_user_profile(user_id=user.id, viewer=None, db=db_session)
    assert keep.id in [s.id for s in profile.skills]
    assert drop.id not in [s.id for s in profile.skills]
    assert profile.display_name == "Sam Lee"

    wanted = get_user_skills(user_id=user.id, skill_type="wanted", viewer=None, db=db_session)
    assert [s.name for s in wanted] == ["Python"]


def test_profile_update_schema_rejects_null_required_fields():
    for field in ("first_name", "last_name", "is_public"):
        with pytest.raises(ValidationError):
            ProfileUpdate(**{field: None})

    assert ProfileUpdate(bio=None, location=None).model_dump(exclude_unset=True) == {"bio": None, "location": None}
