"""History Schemas — audit entry payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from officer_records.schemas.personnel import PersonnelSummary


class HistoryCreate(BaseModel):
    user_id: int = Field(ge=1)
    personnel_id: int | None = Field(None, ge=1)
    action: str = Field(min_length=1, max_length=50)
    detail: str | None = Field(None, max_length=10_000)

    @field_validator("action")
    @classmethod
    def strip_action(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("action cannot be empty or whitespace")
        return v


class HistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int | None
    personnel_id: int | None
    action: str
    detail: str | None
    created_at: datetime
    personnel: PersonnelSummary | None = None
