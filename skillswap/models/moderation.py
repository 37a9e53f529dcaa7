from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship

from skillswap.database import Base

USER_MODERATION_ACTIONS = ("warn", "suspend", "ban")
SKILL_MODERATION_ACTIONS = ("flag", "reject", "approve")
ANNOUNCEMENT_TYPES = ("info", "warning", "maintenance")


class UserModeration(Base):
    __tablename__ = "user_moderation"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    moderator_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    action = Column(String(20), nullable=False, index=True)
    reason = Column(Text, nullable=False)
    expires_at = Column(TIMESTAMP, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)

    user = relationship("User", foreign_keys=[user_id], back_populates="moderation_records")
    moderator = relationship("User", foreign_keys=[moderator_id])


class SkillModeration(Base):
    __tablename__ = "skill_moderation"

    id = Column(Integer, primary_key=True, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False, index=True)
    moderator_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    action = Column(String(20), nullable=False)
    reason = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)

    skill = relationship("Skill", back_populates="moderation_records")
    moderator = relationship("User", foreign_keys=[moderator_id])


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default="info")
    is_active = Column(Boolean, default=True, nullable=False)
    expires_at = Column(TIMESTAMP, nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)

    author = relationship("User", foreign_keys=[author_id])
