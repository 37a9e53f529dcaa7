from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

pytest.importorskip("fastapi")

from fastapi import HTTPException

from skillswap.api.search import search_users as search_users_route
from skillswap.database import Base
from skillswap.models import Skill, SkillModeration, User, UserModeration
from skillswap.services import search_service


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


_BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


def _create_user(db, *, email: str, first_name: str, is_public: bool = True,
                 bio: str | None = None, location: str | None = None, minutes: int = 0) -> User:
    user = User(
        email=email,
        password_hash="hash",
        first_name=first_name,
        last_name="Tester",
        bio=bio,
        location=location,
        is_public=is_public,
        updated_at=_BASE_TIME + timedelta(minutes=minutes),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _add_skill(db, user: User, name: str, type: str = "offered", level: str = "beginner") -> Skill:
    skill = Skill(user_id=user.id, name=name, type=type, level=level)
    db.add(skill)
    db.commit()
    db.refresh(skill)
    return skill


def _ids(users):
    return [u.id for u in users]


def test_query_and_type_filter_match_guitar_and_python_users(db_session):
    alice = _create_user(db_session, email="alice@test.com", first_name="Alice")
    bob = _create_user(db_session, email="bob@test.com", first_name="Bob")
    _add_skill(db_session, alice, "Guitar", type="offered")
    _add_skill(db_session, bob, "Python", type="wanted")

    assert _ids(search_service.search_users(db_session, query="guitar")) == [alice.id]
    assert _ids(search_service.search_users(db_session, skill_type="wanted")) == [bob.id]
    assert _ids(search_service.search_users(db_session, query="GUITAR", skill_type="wanted")) == []


def test_private_and_skill_less_users_are_never_returned(db_session):
    public = _create_user(db_session, email="pub@test.com", first_name="Pub", bio="I love guitar")
    hidden = _create_user(db_session, email="priv@test.com", first_name="Priv", is_public=False)
    _create_user(db_session, email="empty@test.com", first_name="Empty", bio="guitar teacher")
    _add_skill(db_session, public, "Cooking")
    _add_skill(db_session, hidden, "Guitar")

    results = search_service.search_users(db_session, query="guitar")
    assert _ids(results) == [public.id]

    everyone = search_service.search_users(db_session)
    assert _ids(everyone) == [public.id]


def test_bio_match_and_location_substring(db_session):
    maya = _create_user(db_session, email="maya@test.com", first_name="Maya",
                        bio="Patient chess coach", location="San Francisco, CA")
    leo = _create_user(db_session, email="leo@test.com", first_name="Leo", location="Boston")
    _add_skill(db_session, maya, "Spanish")
    _add_skill(db_session, leo, "Chess")

    assert _ids(search_service.search_users(db_session, query="chess", location="francisco")) == [maya.id]
    assert _ids(search_service.search_users(db_session, location="BOSTON")) == [leo.id]


def test_level_and_type_filters_are_evaluated_per_skill(db_session):
    user = _create_user(db_session, email="u@test.com", first_name="U")
    _add_skill(db_session, user, "Piano", type="offered", level="beginner")
    _add_skill(db_session, user, "Drums", type="wanted", level="expert")

    results = search_service.search_users(db_session, query="piano", skill_type="wanted", level="expert")
    assert _ids(results) == [user.id]
    assert search_service.search_users(db_session, level="intermediate") == []


def test_all_disables_filters_and_invalid_values_raise(db_session):
    user = _create_user(db_session, email="u@test.com", first_name="U")
    _add_skill(db_session, user, "Piano")

    assert _ids(search_service.search_users(db_session, skill_type="all", level="ALL")) == [user.id]

    with pytest.raises(ValueError):
        search_service.search_users(db_session, skill_type="teach")
    with pytest.raises(ValueError):
        search_service.search_users(db_session, level="advanced")


def test_results_ordered_by_updated_at_then_id(db_session):
    older = _create_user(db_session, email="old@test.com", first_name="Old", minutes=0)
    newer = _create_user(db_session, email="new@test.com", first_name="New", minutes=10)
    tie_a = _create_user(db_session, email="ta@test.com", first_name="TieA", minutes=5)
    tie_b = _create_user(db_session, email="tb@test.com", first_name="TieB", minutes=5)
    for user in (older, newer, tie_a, tie_b):
        _add_skill(db_session, user, "Yoga")

    results = search_service.search_users(db_session, query="yoga")
    assert _ids(results) == [newer.id, tie_b.id, tie_a.id, older.id]

    limited = search_service.search_users(db_session, query="yoga", limit=2)
    assert _ids(limited) == [newer.id, tie_b.id]


def test_banned_users_and_rejected_skills_are_excluded(db_session):
    banned = _create_user(db_session, email="banned@test.com", first_name="Banned")
    flagged = _create_user(db_session, email="flagged@test.com", first_name="Flagged")
    _add_skill(db_session, banned, "Guitar")
    rejected_skill = _add_skill(db_session, flagged, "Guitar")

    db_session.add(UserModeration(user_id=banned.id, action="ban", reason="spam", is_active=True))
    db_session.add(SkillModeration(skill_id=rejected_skill.id, action="reject", reason="not a skill"))
    db_session.commit()

    assert search_service.search_users(db_session, query="guitar") == []

    # A later approval makes the skill visible again
    db_session.add(SkillModeration(skill_id=rejected_skill.id, action="approve", reason="fixed"))
    db_session.commit()
    assert _ids(search_service.search_users(db_session, query="guitar")) == [flagged.id]


def test_expired_ban_does_not_hide_user(db_session):
    user = _create_user(db_session, email="u@test.com", first_name="U")
    _add_skill(db_session, user, "Guitar")
    db_session.add(UserModeration(
        user_id=user.id,
        action="ban",
        reason="old ban",
        is_active=True,
        expires_at=datetime(2000, 1, 1),
    ))
    db_session.commit()

    assert _ids(search_service.search_users(db_session, query="guitar")) == [user.id]


def test_search_route_maps_invalid_filter_to_400(db_session):
    user = _create_user(db_session, email="u@test.com", first_name="U")
    _add_skill(db_session, user, "Guitar", type="offered")

    results = search_users_route(q="gui", location=None, skill_type="offered", level=None, limit=None, db=db_session)
    assert [r.id for r in results] == [user.id]
    assert results[0].skills[0].name == "Guitar"

    with pytest.raises(HTTPException) as exc:
        search_users_route(q=None, location=None, skill_type="bogus", level=None, limit=None, db=db_session)
    assert exc.value.status_code == 400


def test_wildcard_characters_in_query_match_literally(db_session):
    plain = _create_user(db_session, email="plain@test.com", first_name="Plain")
    percent = _create_user(db_session, email="pct@test.com", first_name="Pct", minutes=1)
    _add_skill(db_session, plain, "Guitar")
    _add_skill(db_session, percent, "100% Python")

    assert _ids(search_service.search_users(db_session, query="%")) == [percent.id]
    assert search_service.search_users(db_session, query="_uitar") == []


def test_caller_supplied_hidden_skills_are_excluded(db_session):
    user = _create_user(db_session, email="u@test.com", first_name="U")
    skill = _add_skill(db_session, user, "Guitar")

    assert search_service.search_users(db_session, query="guitar", hidden_skill_ids={skill.id}) == []
    assert _ids(search_service.search_users(db_session, query="guitar", hidden_skill_ids=set())) == [user.id]
