"""History Detail — formats the free-text detail column of a history entry.

Invariants:
    - Parts joined with " | " in the order: detail, Request, Response
    - Payloads serialized as JSON (non-JSON values via str)
    - No payloads → detail returned unchanged (may be None)
"""

import json
from typing import Any


def build_history_detail(
    detail: str | None,
    request_data: Any = None,
    response_data: Any = None,
) -> str | None:
    if request_data is None and response_data is None:
        return detail

    parts = []
    if detail:
        parts.append(detail)
    if request_data is not None:
        parts.append(f"Request: {_to_json(request_data)}")
    if response_data is not None:
        parts.append(f"Response: {_to_json(response_data)}")
    return " | ".join(parts)


def _to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)
