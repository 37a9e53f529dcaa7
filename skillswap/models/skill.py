from sqlalchemy import Column, Integer, String, ForeignKey, TIMESTAMP, func
from sqlalchemy.orm import relationship
from skillswap.database import Base

SKILL_LEVELS = ("beginner", "intermediate", "expert")
SKILL_TYPES = ("offered", "wanted")


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )
    name = Column(String(100), nullable=False, index=True)
    level = Column(String(20), nullable=False)  # 'beginner', 'intermediate', 'expert'
    type = Column(String(20), nullable=False)   # 'offered' or 'wanted'
    created_at = Column(TIMESTAMP, server_default=func.now())

    user = relationship("User", back_populates="skills")
    moderation_records = relationship(
        "SkillModeration",
        back_populates="skill",
        cascade="all, delete-orphan",
    )
