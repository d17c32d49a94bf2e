"""Personnel Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - PersonnelCreate requires nrp and nama (stripped, non-empty)
    - PersonnelUpdate is partial: only fields present in the request body are applied
    - pensiun and status_bup are response-only (computed server-side)
    - Salary factors are non-negative integers
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("value cannot be empty or whitespace")
    return v


class PersonnelFields(BaseModel):
    """Optional personnel fields shared by create and update payloads."""
    pangkat: str | None = Field(None, max_length=100)
    kesatuan: str | None = Field(None, max_length=200)
    ttl: date | None = None
    tmt_tni: date | None = None
    npwp: str | None = Field(None, max_length=30)
    alamat: str | None = Field(None, max_length=2000)

    gpt: int | None = Field(None, ge=0)
    mdk: int | None = Field(None, ge=0)
    mkg: int | None = Field(None, ge=0)

    pasangan: str | None = Field(None, max_length=200)
    ttl_pasangan: date | None = None
    anak_1: str | None = Field(None, max_length=200)
    ttl_anak_1: date | None = None
    sts_anak_1: str | None = Field(None, max_length=20)
    anak_2: str | None = Field(None, max_length=200)
    ttl_anak_2: date | None = None
    sts_anak_2: str | None = Field(None, max_length=20)
    anak_3: str | None = Field(None, max_length=200)
    ttl_anak_3: date | None = None
    sts_anak_3: str | None = Field(None, max_length=20)
    anak_4: str | None = Field(None, max_length=200)
    ttl_anak_4: date | None = None
    sts_anak_4: str | None = Field(None, max_length=20)


class PersonnelCreate(PersonnelFields):
    nrp: str = Field(min_length=1, max_length=30)
    nama: str = Field(min_length=1, max_length=200)

    @field_validator("nrp", "nama")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _strip_required(v)


class PersonnelUpdate(PersonnelFields):
    nrp: str | None = Field(None, min_length=1, max_length=30)
    nama: str | None = Field(None, min_length=1, max_length=200)

    @field_validator("nrp", "nama")
    @classmethod
    def strip_required(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)


class PersonnelResponse(PersonnelFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nrp: str
    nama: str
    pensiun: date | None = None
    status_bup: str | None = None
    created_at: datetime
    updated_at: datetime


class PersonnelDetail(PersonnelResponse):
    """Single record with the age label and a freshly computed BUP status."""
    usia: str | None = None


class PersonnelSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nama: str
    pangkat: str | None = None
    kesatuan: str | None = None


class PersonnelPage(BaseModel):
    data: list[PersonnelResponse]
    page: int
    limit: int
    total: int
    total_pages: int
