"""Request Dependencies — caller identity for the history log.

Invariants:
    - X-User-Id is optional; authentication is handled upstream and only forwards the id
"""

from fastapi import Header


async def get_user_id(
    x_user_id: int | None = Header(None, ge=1),
) -> int | None:
    return x_user_id
