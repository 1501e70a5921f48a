"""
Caller identity.

Tokens are issued and verified by the gateway in front of this service, which
forwards the authenticated user id in `X-User-Id`.
"""

from fastapi import Header

from fira.platform.exception.exceptions import UnauthenticatedError


async def get_current_user_id(x_user_id: str | None = Header(default=None)) -> int:
    if not x_user_id:
        raise UnauthenticatedError()
    if not x_user_id.isdigit() or int(x_user_id) <= 0:
        raise UnauthenticatedError('Invalid user id header')
    return int(x_user_id)
