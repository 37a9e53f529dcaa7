from typing import Iterable, List

from sqlalchemy.orm import Session

from skillswap import models


def get_user_availability(db: Session, user_id: int) -> List[models.AvailabilitySlot]:
    return (
        db.query(models.AvailabilitySlot)
        .filter(models.AvailabilitySlot.user_id == user_id)
        .order_by(models.AvailabilitySlot.day_of_week.asc(), models.AvailabilitySlot.start_time.asc())
        .all()
    )


def delete_user_availability(db: Session, user_id: int) -> int:
    return db.query(models.AvailabilitySlot).filter(
        models.AvailabilitySlot.user_id == user_id
    ).delete(synchronize_session=False)


def add_availability_slots(db: Session, user_id: int, slots: Iterable[dict]) -> None:
    for slot in slots:
        db.add(models.AvailabilitySlot(
            user_id=user_id,
            day_of_week=slot["day_of_week"],
            start_time=slot["start_time"],
            end_time=slot["end_time"],
        ))
    db.flush()
