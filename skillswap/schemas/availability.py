import re
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class AvailabilitySlotIn(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    start_time: str = Field(..., description="HH:MM, 24-hour clock")
    end_time: str = Field(..., description="HH:MM, 24-hour clock")

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        v = v.strip()
        if not TIME_RE.match(v):
            raise ValueError("Time must use HH:MM 24-hour format")
        return v

    @model_validator(mode="after")
    def check_order(self):
        # Zero-padded HH:MM strings compare correctly as text.
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be earlier than end_time")
        return self


class AvailabilitySlotResponse(BaseModel):
    id: int
    day_of_week: int
    start_time: str
    end_time: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
