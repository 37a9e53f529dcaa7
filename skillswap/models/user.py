from sqlalchemy import Column, Integer, String, Text, Boolean, TIMESTAMP, func
from sqlalchemy.orm import relationship
from skillswap.database import Base


# ---------------- USER ----------------
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, default="")
    bio = Column(Text)
    location = Column(String(150))
    profile_image_url = Column(String(255))
    is_public = Column(Boolean, default=True, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    last_active_at = Column(TIMESTAMP, nullable=True)

    skills = relationship("Skill", back_populates="user", cascade="all, delete-orphan")
    availability = relationship(
        "AvailabilitySlot",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    sent_swap_requests = relationship(
        "SwapRequest",
        foreign_keys="SwapRequest.requester_id",
        back_populates="requester",
        cascade="all, delete-orphan",
    )
    received_swap_requests = relationship(
        "SwapRequest",
        foreign_keys="SwapRequest.receiver_id",
        back_populates="receiver",
        cascade="all, delete-orphan",
    )
    reviews_given = relationship(
        "Review",
        foreign_keys="Review.reviewer_id",
        back_populates="reviewer",
        cascade="all, delete-orphan",
    )
    reviews_received = relationship(
        "Review",
        foreign_keys="Review.reviewee_id",
        back_populates="reviewee",
        cascade="all, delete-orphan",
    )
    moderation_records = relationship(
        "UserModeration",
        foreign_keys="UserModeration.user_id",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def display_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
