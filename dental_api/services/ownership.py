# dental_api/services/ownership.py
"""
Who may change a post, consultation or comment.

A row is owned either by a user account (``user_id``) or by whoever knows the
password its author chose (bcrypt hash in ``password``). The account path is
tried first and needs no password.
"""
from __future__ import annotations

from typing import Optional

from dental_api.core.errors import AccessDecision, ErrorKind
from dental_api.core.logging import get_logger
from dental_api.core.security import verify_password_async

logger = get_logger(__name__)


async def resolve_ownership(
    *,
    owner_user_id: Optional[int],
    password_hash: Optional[str],
    caller_user_id: Optional[int],
    submitted_password: Optional[str],
) -> AccessDecision:
    """Decide ALLOW/DENY. The caller checks that the row exists beforehand."""
    if owner_user_id is not None and caller_user_id is not None and owner_user_id == caller_user_id:
        return AccessDecision.allow()

    if not submitted_password:
        return AccessDecision.deny(ErrorKind.MISSING_CREDENTIAL, "Password is required")

    if await verify_password_async(submitted_password, password_hash):
        return AccessDecision.allow()

    logger.info("ownership_denied", owner_user_id=owner_user_id, caller_user_id=caller_user_id)
    return AccessDecision.deny(ErrorKind.INVALID_CREDENTIAL, "Password is incorrect")
