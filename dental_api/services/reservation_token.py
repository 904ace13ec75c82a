# dental_api/services/reservation_token.py
"""
Short-lived capability tokens for patients without an account.

``POST /api/reservations/verify`` trades an exact (name, phone) pair for a
token bound to the newest matching reservation. The token is good for that
one reservation id only and expires after ``RESERVATION_TOKEN_TTL_MINUTES``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.core.config import Settings
from dental_api.core.errors import AccessDecision, ClinicError, ErrorKind
from dental_api.core.logging import get_logger
from dental_api.core.security import (
    RESERVATION_SCOPE,
    create_token,
    decode_token,
    get_app_settings,
    get_bearer_token,
)
from dental_api.crud.reservation import find_latest_reservation_for_patient

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReservationClaim:
    reservation_id: int
    patient_name: str


@dataclass(frozen=True)
class ClaimResult:
    claim: Optional[ReservationClaim] = None
    failure: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.failure is None and self.claim is not None


@dataclass(frozen=True)
class IssuedToken:
    access_token: str
    reservation_id: int


def create_claim_token(
    reservation_id: int,
    patient_name: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.RESERVATION_TOKEN_TTL_MINUTES)
    return create_token(
        {"sub": str(reservation_id), "rid": reservation_id, "name": patient_name},
        settings,
        scope=RESERVATION_SCOPE,
        expires_delta=expires_delta,
    )


async def issue_access_token(
    db: AsyncSession, patient_name: str, phone_number: str, settings: Settings
) -> Optional[IssuedToken]:
    """None when no reservation matches the pair exactly."""
    reservation = await find_latest_reservation_for_patient(db, patient_name, phone_number)
    if reservation is None:
        logger.info("reservation_verify_no_match")
        return None
    token = create_claim_token(reservation.id, patient_name, settings)
    logger.info("reservation_token_issued", reservation_id=reservation.id)
    return IssuedToken(access_token=token, reservation_id=reservation.id)


def decode_claim(token: Optional[str], settings: Settings) -> ClaimResult:
    check = decode_token(token, settings, scope=RESERVATION_SCOPE)
    if not check.ok:
        return ClaimResult(failure=check.failure)
    rid = check.claims.get("rid")
    if not isinstance(rid, int) or isinstance(rid, bool):
        return ClaimResult(failure=ErrorKind.FORBIDDEN)
    return ClaimResult(claim=ReservationClaim(reservation_id=rid, patient_name=str(check.claims.get("name", ""))))


def authorize(claim: ReservationClaim, requested_id: int) -> AccessDecision:
    if claim.reservation_id != requested_id:
        logger.warning(
            "reservation_token_scope_denied",
            claim_id=claim.reservation_id,
            requested_id=requested_id,
        )
        return AccessDecision.deny(ErrorKind.FORBIDDEN, "Token does not grant access to this reservation")
    return AccessDecision.allow()


def require_reservation_claim(
    reservation_id: int,
    token: Optional[str] = Depends(get_bearer_token),
    settings: Settings = Depends(get_app_settings),
) -> ReservationClaim:
    """Route dependency for ``/reservations/{reservation_id}``."""
    result = decode_claim(token, settings)
    if not result.ok:
        raise ClinicError(result.failure or ErrorKind.FORBIDDEN)
    authorize(result.claim, reservation_id).raise_if_denied()
    return result.claim
