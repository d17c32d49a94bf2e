"""Pension Schemas — ad-hoc pension calculation request.

Invariants:
    - All fields optional at the schema level; missing required inputs are reported by
      core/pension.py as MISSING_PENSION_INPUT (400), naming every missing field
    - pensiun may be omitted when ttl is given: it is then derived from ttl + pangkat
"""

from datetime import date

from pydantic import BaseModel, Field


class PensionCalculateRequest(BaseModel):
    gpt: int | None = Field(None, ge=0)
    mdk: int | None = Field(None, ge=0)
    tmt_tni: date | None = None
    pensiun: date | None = None
    ttl: date | None = None
    pangkat: str | None = Field(None, max_length=100)
    pasangan: str | None = Field(None, max_length=200)
    sts_anak_1: str | None = Field(None, max_length=20)
    sts_anak_2: str | None = Field(None, max_length=20)
    sts_anak_3: str | None = Field(None, max_length=20)
    sts_anak_4: str | None = Field(None, max_length=20)


class PensionResponse(BaseModel):
    usia: int
    PENSPOK: int
    TUNJANGAN_ISTRI: int
    TUNJANGAN_ANAK: int
    TOTAL_PENSIUN: int
