"""
Users — DRF Permission Classes

Thin adapter from view attributes to the access policy.

@file users/permissions.py
"""

from rest_framework.permissions import BasePermission

from core.exceptions import AccountRestrictedError

from .authentication import BadRequestJWTAuthentication
from .models import User
from .policy import Outcome, evaluate_access


class AccessGate(BasePermission):
    """
    Evaluates the access policy with rules declared on the view.

    Usage::

        class IssuePrescriptionView(APIView):
            permission_classes = [AccessGate]
            allowed_roles = [User.RoleChoices.DOCTOR]
            blocked_statuses = [LifecycleStatus.SUSPENDED, LifecycleStatus.BANNED]
            require_verified = True
            restricted_action = 'issue prescriptions'

    Role mismatches answer 403 PERMISSION_DENIED, status / verification
    blocks answer 403 ACCOUNT_RESTRICTED, missing credentials 401.
    """

    def has_permission(self, request, view):
        decision = evaluate_access(
            request.user,
            roles=getattr(view, 'allowed_roles', None),
            blocked_statuses=getattr(view, 'blocked_statuses', ()),
            require_verified=getattr(view, 'require_verified', False),
            action=getattr(view, 'restricted_action', 'perform this action'),
        )
        if decision.outcome is Outcome.FORBIDDEN:
            raise AccountRestrictedError(decision.message)
        self.message = decision.message
        return decision.allowed


class AdminOnlyMixin:
    """View mixin for the /api/admin/ surface: Admin role, 400 on bad tokens."""

    authentication_classes = [BadRequestJWTAuthentication]
    permission_classes = [AccessGate]
    allowed_roles = [User.RoleChoices.ADMIN]
    restricted_action = 'use the admin console'
