"""
Users — Access Policy

Single evaluator for every role / status / verification / ownership
check. Permission classes and services both call it so HTTP and
non-HTTP callers get the same answer.

@file users/policy.py
"""

from dataclasses import dataclass
from enum import Enum

from rest_framework.exceptions import NotAuthenticated, PermissionDenied

from core.exceptions import AccountRestrictedError
from core.models import LifecycleStatus


class Outcome(str, Enum):
    ALLOW = 'allow'
    UNAUTHENTICATED = 'unauthenticated'
    UNAUTHORIZED = 'unauthorized'
    FORBIDDEN = 'forbidden'


@dataclass(frozen=True)
class AccessDecision:
    outcome: Outcome
    message: str = ''

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOW


ALLOW = AccessDecision(Outcome.ALLOW)


def _status_message(status: str, action: str) -> str:
    if status == LifecycleStatus.BANNED:
        return 'Your account is banned.'
    return f'Your account is {status}. You can log in, but you cannot {action}.'


def evaluate_access(
    user,
    *,
    roles=None,
    blocked_statuses=(),
    require_verified: bool = False,
    owner_email: str | None = None,
    action: str = 'perform this action',
) -> AccessDecision:
    """
    Decide whether ``user`` may perform ``action``.

    Checks run in order: authenticated, role allow-list, status gate,
    verification, then ownership. Ownership only binds Patients; staff
    roles that passed the role check act on any patient's records.
    """
    if user is None or not user.is_authenticated:
        return AccessDecision(Outcome.UNAUTHENTICATED, 'Access Denied. Please login.')

    if roles and user.role not in roles:
        allowed = ', '.join(sorted(str(r) for r in roles))
        return AccessDecision(Outcome.UNAUTHORIZED, f'Only {allowed} accounts can {action}.')

    if user.status in blocked_statuses:
        return AccessDecision(Outcome.FORBIDDEN, _status_message(user.status, action))

    if require_verified and not user.verified:
        return AccessDecision(
            Outcome.FORBIDDEN,
            f'Your account is pending verification. Please wait for admin approval before you {action}.',
        )

    if owner_email is not None and user.role == user.RoleChoices.PATIENT:
        if user.email.lower() != owner_email.strip().lower():
            return AccessDecision(Outcome.FORBIDDEN, f'You can only {action} that belong to you.')

    return ALLOW


def enforce_access(user, **rules) -> None:
    """Raise the matching API exception unless ``evaluate_access`` allows."""
    decision = evaluate_access(user, **rules)
    if decision.outcome is Outcome.UNAUTHENTICATED:
        raise NotAuthenticated(decision.message)
    if decision.outcome is Outcome.UNAUTHORIZED:
        raise PermissionDenied(decision.message)
    if decision.outcome is Outcome.FORBIDDEN:
        raise AccountRestrictedError(decision.message)
