"""
Core — Lifecycle Status Rules

Transition table for account / pharmacy status and the propagation
rule that keeps a Pharmacist-user and the pharmacy they registered in
step. Pure functions: no queries, no saves. Services apply the results.

Banning a pharmacist only *suspends* their pharmacy, while banning a
pharmacy bans its pharmacists.

@file core/lifecycle.py
"""

from typing import NamedTuple

from core.exceptions import InvalidStateTransition
from core.models import LifecycleStatus

ACTIVE = LifecycleStatus.ACTIVE
SUSPENDED = LifecycleStatus.SUSPENDED
BANNED = LifecycleStatus.BANNED


# ---------------------------------------------------------------------------
# Direct transitions (Admin-initiated)
# ---------------------------------------------------------------------------

STATUS_TRANSITIONS = {
    ACTIVE: frozenset({SUSPENDED, BANNED}),
    SUSPENDED: frozenset({BANNED, ACTIVE}),
    BANNED: frozenset({ACTIVE}),
}


def ensure_transition(current: str, target: str) -> None:
    """Raise InvalidStateTransition unless ``current -> target`` is allowed."""
    allowed = STATUS_TRANSITIONS[LifecycleStatus(current)]
    if LifecycleStatus(target) not in allowed:
        raise InvalidStateTransition(
            detail=f'Cannot transition from {current} to {target}.',
        )


# ---------------------------------------------------------------------------
# User -> pharmacy
# ---------------------------------------------------------------------------

def pharmacy_status_after_user_change(user_status: str, pharmacy_status: str) -> LifecycleStatus | None:
    """
    New status for a pharmacist's pharmacy after the pharmacist moved to
    ``user_status``, or None when the pharmacy must be left alone.

    * suspended / banned user: pharmacy suspended, a banned pharmacy is
      never downgraded.
    * reactivated user: only a suspended pharmacy is reactivated.
    """
    user_status = LifecycleStatus(user_status)
    pharmacy_status = LifecycleStatus(pharmacy_status)

    if user_status in (SUSPENDED, BANNED):
        if pharmacy_status == ACTIVE:
            return SUSPENDED
        return None
    if user_status == ACTIVE:
        if pharmacy_status == SUSPENDED:
            return ACTIVE
        return None
    raise ValueError(f'Unhandled status {user_status!r}')


# ---------------------------------------------------------------------------
# Pharmacy -> pharmacists
# ---------------------------------------------------------------------------

class PharmacistCascade(NamedTuple):
    """Batch update: pharmacists currently in ``from_statuses`` move to ``to_status``."""

    from_statuses: frozenset
    to_status: LifecycleStatus


PHARMACIST_CASCADES = {
    # banned pharmacists stay banned
    SUSPENDED: PharmacistCascade(frozenset({ACTIVE}), SUSPENDED),
    BANNED: PharmacistCascade(frozenset({ACTIVE, SUSPENDED}), BANNED),
    ACTIVE: PharmacistCascade(frozenset({SUSPENDED, BANNED}), ACTIVE),
}


def pharmacist_cascade_for(pharmacy_status: str) -> PharmacistCascade:
    return PHARMACIST_CASCADES[LifecycleStatus(pharmacy_status)]
