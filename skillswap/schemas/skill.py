from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SkillLevel = Literal["beginner", "intermediate", "expert"]
SkillType = Literal["offered", "wanted"]


def _lower(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    level: SkillLevel
    type: SkillType

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Skill name cannot be blank")
        return v

    @field_validator("level", "type", mode="before")
    @classmethod
    def normalize_choice(cls, v):
        return _lower(v)


class SkillUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    level: Optional[SkillLevel] = None
    type: Optional[SkillType] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Skill name cannot be blank")
        return v

    @field_validator("level", "type", mode="before")
    @classmethod
    def normalize_choice(cls, v):
        return _lower(v)


class SkillResponse(BaseModel):
    id: int
    user_id: int
    name: str
    level: str
    type: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
