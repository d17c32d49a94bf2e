"""History Logger — writes audit entries after the main operation has committed.

Invariants:
    - log_history commits its own entry; a failure is rolled back, logged with traceback,
      and reported as None so the main operation's response is unaffected
    - detail text built by core/history_detail.py
"""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from officer_records.core.domain_types import HistoryAction
from officer_records.core.history_detail import build_history_detail
from officer_records.models.history import History

logger = logging.getLogger(__name__)


async def log_history(
    db: AsyncSession,
    *,
    user_id: int | None,
    action: HistoryAction | str,
    personnel_id: int | None = None,
    detail: str | None = None,
    request_data: Any = None,
    response_data: Any = None,
) -> History | None:
    action_code = action.value if isinstance(action, HistoryAction) else action
    entry = History(
        user_id=user_id,
        personnel_id=personnel_id,
        action=action_code,
        detail=build_history_detail(detail, request_data, response_data),
    )
    try:
        db.add(entry)
        await db.commit()
        await db.refresh(entry)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Failed to log history: {e}",
            exc_info=True,
            extra={"action": action_code, "personnel_id": personnel_id},
        )
        return None
    return entry
