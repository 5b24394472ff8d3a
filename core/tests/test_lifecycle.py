"""
Core — Lifecycle Rule Tests

The propagation rules are pure, so every status pair is checked
without touching the database.

@file core/tests/test_lifecycle.py
"""

import pytest

from core.exceptions import InvalidStateTransition
from core.lifecycle import (
    STATUS_TRANSITIONS,
    ensure_transition,
    pharmacist_cascade_for,
    pharmacy_status_after_user_change,
)
from core.models import LifecycleStatus

ACTIVE = LifecycleStatus.ACTIVE
SUSPENDED = LifecycleStatus.SUSPENDED
BANNED = LifecycleStatus.BANNED


class TestTransitions:
    def test_every_status_has_an_entry(self):
        assert set(STATUS_TRANSITIONS) == set(LifecycleStatus)

    @pytest.mark.parametrize('current,target', [
        (ACTIVE, SUSPENDED),
        (ACTIVE, BANNED),
        (SUSPENDED, BANNED),
        (SUSPENDED, ACTIVE),
        (BANNED, ACTIVE),
    ])
    def test_allowed(self, current, target):
        ensure_transition(current, target)

    @pytest.mark.parametrize('current,target', [
        (ACTIVE, ACTIVE),
        (SUSPENDED, SUSPENDED),
        (BANNED, BANNED),
        (BANNED, SUSPENDED),
    ])
    def test_rejected(self, current, target):
        with pytest.raises(InvalidStateTransition):
            ensure_transition(current, target)

    def test_accepts_plain_strings(self):
        ensure_transition('active', 'banned')


class TestPharmacyFollowsPharmacist:
    @pytest.mark.parametrize('user_status,pharmacy_status,expected', [
        (SUSPENDED, ACTIVE, SUSPENDED),
        (SUSPENDED, SUSPENDED, None),
        (SUSPENDED, BANNED, None),
        (BANNED, ACTIVE, SUSPENDED),
        (BANNED, SUSPENDED, None),
        (BANNED, BANNED, None),
        (ACTIVE, SUSPENDED, ACTIVE),
        (ACTIVE, ACTIVE, None),
        (ACTIVE, BANNED, None),
    ])
    def test_rule(self, user_status, pharmacy_status, expected):
        assert pharmacy_status_after_user_change(user_status, pharmacy_status) == expected

    def test_banned_pharmacist_only_suspends_pharmacy(self):
        assert pharmacy_status_after_user_change(BANNED, ACTIVE) == SUSPENDED

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            pharmacy_status_after_user_change('deleted', ACTIVE)


class TestPharmacistsFollowPharmacy:
    def test_suspend_touches_active_only(self):
        cascade = pharmacist_cascade_for(SUSPENDED)
        assert cascade.from_statuses == {ACTIVE}
        assert cascade.to_status == SUSPENDED

    def test_ban_reaches_suspended_too(self):
        cascade = pharmacist_cascade_for(BANNED)
        assert cascade.from_statuses == {ACTIVE, SUSPENDED}
        assert cascade.to_status == BANNED

    def test_reactivate_restores_suspended_and_banned(self):
        cascade = pharmacist_cascade_for(ACTIVE)
        assert cascade.from_statuses == {SUSPENDED, BANNED}
        assert cascade.to_status == ACTIVE
