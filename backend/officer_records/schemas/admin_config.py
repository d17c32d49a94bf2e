"""Admin Config Schemas — retirement-age payloads.

Invariants:
    - Only the six known age keys are accepted (extra keys rejected)
    - Each provided age is an integer in 1..100
"""

from pydantic import BaseModel, ConfigDict, Field


class BupAges(BaseModel):
    model_config = ConfigDict(extra="forbid")

    brigjen: int | None = Field(None, ge=1, le=100)
    mayjen: int | None = Field(None, ge=1, le=100)
    letjen: int | None = Field(None, ge=1, le=100)
    pamen: int | None = Field(None, ge=1, le=100)
    pama: int | None = Field(None, ge=1, le=100)
    other: int | None = Field(None, ge=1, le=100)


class BupAgesUpdate(BaseModel):
    bup_ages: BupAges


class BupAgesResponse(BaseModel):
    bup_ages: dict[str, int]


class BupRefreshResponse(BaseModel):
    updated: int
    unchanged: int
