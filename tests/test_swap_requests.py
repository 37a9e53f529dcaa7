from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

pytest.importorskip("fastapi")

from fastapi import HTTPException

from skillswap.api.swap_request import (
    create_swap_request,
    get_swap_request,
    get_swap_requests,
    update_swap_request_status,
)
from skillswap.database import Base
from skillswap.models import Skill, SwapRequest, User
from skillswap.schemas import SwapRequestCreate, SwapStatusUpdate
from skillswap.services import swap_service


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


def _create_user(db, email: str, first_name: str = "User") -> User:
    user = User(email=email, password_hash="hash", first_name=first_name, last_name="Tester")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _add_skill(db, user: User, name: str, type: str = "offered") -> Skill:
    skill = Skill(user_id=user.id, name=name, type=type, level="intermediate")
    db.add(skill)
    db.commit()
    db.refresh(skill)
    return skill


@pytest.fixture
def parties(db_session):
    a = _create_user(db_session, "a@test.com", "Alice")
    b = _create_user(db_session, "b@test.com", "Bob")
    c = _create_user(db_session, "c@test.com", "Carol")
    return a, b, c


def _pending_request(db, requester: User, receiver: User) -> SwapRequest:
    return swap_service.create_swap_request(db, requester_id=requester.id, receiver_id=receiver.id)


# ======================
# CREATION
# ======================

def test_create_swap_request_resolves_parties_and_skills(db_session, parties):
    a, b, _ = parties
    guitar = _add_skill(db_session, a, "Guitar", "offered")
    python = _add_skill(db_session, b, "Python", "offered")

    swap = swap_service.create_swap_request(
        db_session,
        requester_id=a.id,
        receiver_id=b.id,
        offered_skill_id=guitar.id,
        requested_skill_id=python.id,
        message="Trade lessons?",
    )

    assert swap.status == "pending"
    assert swap.requester.email == "a@test.com"
    assert swap.receiver.email == "b@test.com"
    assert swap.offered_skill.name == "Guitar"
    assert swap.requested_skill.name == "Python"
    assert swap.reviews == []


def test_self_swap_request_fails(db_session, parties):
    a, _, _ = parties
    with pytest.raises(ValueError):
        swap_service.create_swap_request(db_session, requester_id=a.id, receiver_id=a.id)
    assert db_session.query(SwapRequest).count() == 0


def test_self_swap_rejected_by_database_constraint(db_session, parties):
    a, _, _ = parties
    db_session.add(SwapRequest(requester_id=a.id, receiver_id=a.id, status="pending"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_create_rejects_unknown_receiver_and_foreign_skills(db_session, parties):
    a, b, c = parties
    carol_skill = _add_skill(db_session, c, "Knitting")
    bob_skill = _add_skill(db_session, b, "Chess")

    with pytest.raises(ValueError, match="Receiver not found"):
        swap_service.create_swap_request(db_session, requester_id=a.id, receiver_id=9999)
    with pytest.raises(ValueError, match="Offered skill"):
        swap_service.create_swap_request(
            db_session, requester_id=a.id, receiver_id=b.id, offered_skill_id=carol_skill.id
        )
    with pytest.raises(ValueError, match="Requested skill"):
        swap_service.create_swap_request(
            db_session, requester_id=a.id, receiver_id=c.id, requested_skill_id=bob_skill.id
        )


def test_create_route_maps_validation_to_400(db_session, parties):
    a, b, _ = parties
    created = create_swap_request(
        payload=SwapRequestCreate(receiver_id=b.id, message="  hi  "),
        current_user=a,
        db=db_session,
    )
    assert created.status == "pending"
    assert created.message == "hi"

    with pytest.raises(HTTPException) as exc:
        create_swap_request(payload=SwapRequestCreate(receiver_id=a.id), current_user=a, db=db_session)
    assert exc.value.status_code == 400


# ======================
# TRANSITIONS
# ======================

def test_accept_flow_and_third_party_gets_not_found(db_session, parties):
    a, b, c = parties
    swap = _pending_request(db_session, a, b)

    accepted = update_swap_request_status(
        request_id=swap.id,
        payload=SwapStatusUpdate(status="accepted"),
        current_user=b,
        db=db_session,
    )
    assert accepted.status == "accepted"

    mine = get_swap_requests(status_filter=None, current_user=a, db=db_session)
    assert [(r.id, r.status) for r in mine] == [(swap.id, "accepted")]

    with pytest.raises(HTTPException) as exc:
        update_swap_request_status(
            request_id=swap.id,
            payload=SwapStatusUpdate(status="completed"),
            current_user=c,
            db=db_session,
        )
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        get_swap_request(request_id=swap.id, current_user=c, db=db_session)
    assert exc.value.status_code == 404


def test_only_receiver_can_accept_or_reject(db_session, parties):
    a, b, _ = parties
    swap = _pending_request(db_session, a, b)

    with pytest.raises(PermissionError):
        swap_service.update_swap_status(db_session, swap.id, "accepted", a.id)

    with pytest.raises(HTTPException) as exc:
        update_swap_request_status(
            request_id=swap.id,
            payload=SwapStatusUpdate(status="rejected"),
            current_user=a,
            db=db_session,
        )
    assert exc.value.status_code == 403

    rejected = swap_service.update_swap_status(db_session, swap.id, "rejected", b.id)
    assert rejected.status == "rejected"


def test_either_party_completes_or_cancels(db_session, parties):
    a, b, _ = parties
    first = _pending_request(db_session, a, b)
    swap_service.update_swap_status(db_session, first.id, "accepted", b.id)
    completed = swap_service.update_swap_status(db_session, first.id, "completed", a.id)
    assert completed.status == "completed"

    second = _pending_request(db_session, a, b)
    cancelled = swap_service.update_swap_status(db_session, second.id, "cancelled", a.id)
    assert cancelled.status == "cancelled"

    third = _pending_request(db_session, b, a)
    swap_service.update_swap_status(db_session, third.id, "accepted", a.id)
    cancelled = swap_service.update_swap_status(db_session, third.id, "cancelled", a.id)
    assert cancelled.status == "cancelled"


@pytest.mark.parametrize("terminal", ["completed", "rejected", "cancelled"])
def test_terminal_states_cannot_move(db_session, parties, terminal):
    a, b, _ = parties
    swap = _pending_request(db_session, a, b)
    if terminal == "completed":
        swap_service.update_swap_status(db_session, swap.id, "accepted", b.id)
    swap_service.update_swap_status(db_session, swap.id, terminal, b.id)

    for target in ("pending", "accepted", "completed"):
        with pytest.raises(ValueError):
            swap_service.update_swap_status(db_session, swap.id, target, b.id)


def test_pending_cannot_jump_to_completed_and_unknown_status_is_invalid(db_session, parties):
    a, b, _ = parties
    swap = _pending_request(db_session, a, b)

    with pytest.raises(ValueError):
        swap_service.update_swap_status(db_session, swap.id, "completed", b.id)
    with pytest.raises(ValueError):
        swap_service.update_swap_status(db_session, swap.id, "archived", b.id)

    with pytest.raises(HTTPException) as exc:
        update_swap_request_status(
            request_id=swap.id,
            payload=SwapStatusUpdate(status="completed"),
            current_user=b,
            db=db_session,
        )
    assert exc.value.status_code == 400


def test_list_filters_by_status_and_orders_newest_first(db_session, parties):
    a, b, c = parties
    first = _pending_request(db_session, a, b)
    second = _pending_request(db_session, c, a)
    swap_service.update_swap_status(db_session, second.id, "accepted", a.id)

    all_for_a = swap_service.list_user_swap_requests(db_session, a.id)
    assert [r.id for r in all_for_a] == [second.id, first.id]

    pending = swap_service.list_user_swap_requests(db_session, a.id, "pending")
    assert [r.id for r in pending] == [first.id]

    assert [r.id for r in swap_service.list_user_swap_requests(db_session, b.id)] == [first.id]

    with pytest.raises(ValueError):
        swap_service.list_user_swap_requests(db_session, a.id, "bogus")
