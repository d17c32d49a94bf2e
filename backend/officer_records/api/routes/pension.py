"""Pension Route — ad-hoc pension calculation without a stored record.

Invariants:
    - Same rules as GET /personnel/{id}/pension (core/pension.py)
    - When pensiun is omitted but ttl is given, the retirement date is derived from
      ttl + pangkat with the current retirement-age config
"""

import dataclasses

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from officer_records.core.pension import PensionInput, compute_pension
from officer_records.core.retirement import compute_retirement_date
from officer_records.infrastructure.database import get_db
from officer_records.schemas.pension import PensionCalculateRequest, PensionResponse
from officer_records.services.config_store import load_retirement_config

router = APIRouter(prefix="/api/v1/pension", tags=["pension"])


@router.post("/calculate", response_model=PensionResponse)
async def calculate_pension(
    body: PensionCalculateRequest, db: AsyncSession = Depends(get_db),
):
    pension_input = PensionInput.from_record(body)
    if body.pensiun is None and body.ttl is not None:
        config = await load_retirement_config(db)
        pension_input = dataclasses.replace(
            pension_input,
            pensiun=compute_retirement_date(body.ttl, body.pangkat, config),
        )
    return compute_pension(pension_input).to_dict()
