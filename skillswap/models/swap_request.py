from sqlalchemy import Column, Integer, String, Text, ForeignKey, TIMESTAMP, CheckConstraint, func
from sqlalchemy.orm import relationship
from skillswap.database import Base

SWAP_STATUSES = ("pending", "accepted", "rejected", "completed", "cancelled")


class SwapRequest(Base):
    __tablename__ = "swap_requests"

    id = Column(Integer, primary_key=True, index=True)
    requester_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    offered_skill_id = Column(Integer, ForeignKey("skills.id", ondelete="SET NULL"), nullable=True)
    requested_skill_id = Column(Integer, ForeignKey("skills.id", ondelete="SET NULL"), nullable=True)
    message = Column(Text)
    status = Column(String(20), nullable=False, default="pending", index=True)
    proposed_time = Column(TIMESTAMP, nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("requester_id <> receiver_id", name="check_distinct_parties"),
    )

    requester = relationship("User", foreign_keys=[requester_id], back_populates="sent_swap_requests")
    receiver = relationship("User", foreign_keys=[receiver_id], back_populates="received_swap_requests")
    offered_skill = relationship("Skill", foreign_keys=[offered_skill_id])
    requested_skill = relationship("Skill", foreign_keys=[requested_skill_id])
    reviews = relationship("Review", back_populates="swap_request", cascade="all, delete-orphan")

    def counterparty_id(self, user_id: int) -> int:
        return self.receiver_id if self.requester_id == user_id else self.requester_id
