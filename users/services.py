"""
Users — Service Layer

All user-related business logic. No HTTP context — services receive
plain Python arguments (plus an optional request for audit metadata)
and raise typed exceptions.

@file users/services.py
"""

import logging

from django.contrib.auth.models import update_last_login
from django.db import transaction
from django.db.models import Q
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken

from core.constants import (
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    AUDIT_ACTION_LOGIN,
    AUDIT_ACTION_LOGIN_FAILED,
    AUDIT_ACTION_STATUS_CHANGE,
    AUDIT_ACTION_VERIFY,
)
from core.exceptions import (
    AccountBannedError,
    BusinessRuleViolation,
    DuplicateResourceError,
    InvalidCredentialsError,
    ResourceNotFoundError,
)
from core.lifecycle import ensure_transition, pharmacy_status_after_user_change
from core.models import LifecycleStatus
from core.services import AuditService
from feedback.models import Feedback
from pharmacies.models import Pharmacy
from pharmacies.services import PharmacyService
from prescriptions.models import Prescription

from .models import User

logger = logging.getLogger('medlocator')


# ---------------------------------------------------------------------------
# User service
# ---------------------------------------------------------------------------

class UserService:
    """Admin-side management of accounts."""

    @staticmethod
    def _locked(user_id, **filters) -> User:
        try:
            return User.objects.select_for_update().get(pk=user_id, **filters)
        except User.DoesNotExist:
            raise ResourceNotFoundError(detail='User not found.')

    @staticmethod
    def search(query: str):
        """Case-insensitive substring match on name or email, with pharmacy info."""
        query = (query or '').strip()
        if not query:
            raise BusinessRuleViolation(detail='Search query is required.')
        return (
            User.objects
            .filter(Q(full_name__icontains=query) | Q(email__icontains=query))
            .select_related('pharmacy')
            .order_by('-created_at')
        )

    @classmethod
    @transaction.atomic
    def change_status(cls, *, user_id, new_status: str, actor=None, request=None) -> User:
        """
        Move the account to ``new_status``. A pharmacist's pharmacy follows
        the propagation rule in core.lifecycle within the same transaction.
        """
        user = cls._locked(user_id)
        ensure_transition(user.status, new_status)

        old_status = user.status
        user.status = new_status
        user.save(update_fields=['status', 'updated_at'])

        new_values = {'status': new_status}
        if user.is_pharmacist and user.pharmacy_id:
            pharmacy = Pharmacy.objects.select_for_update().get(pk=user.pharmacy_id)
            target = pharmacy_status_after_user_change(new_status, pharmacy.status)
            if target is not None:
                new_values['pharmacy'] = {
                    'id': str(pharmacy.pk), 'from': pharmacy.status, 'to': str(target),
                }
                pharmacy.status = target
                pharmacy.save(update_fields=['status', 'updated_at'])
                logger.info('Pharmacy %s moved to %s with pharmacist %s.', pharmacy.pk, target, user.pk)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_STATUS_CHANGE,
            model_name='User',
            object_id=user.pk,
            old_values={'status': old_status},
            new_values=new_values,
            **AuditService.request_meta(request),
        )
        logger.info('User %s %s -> %s by %s.', user.pk, old_status, new_status, actor)
        return user

    @classmethod
    @transaction.atomic
    def verify_doctor(cls, *, doctor_id, actor=None, request=None) -> User:
        try:
            doctor = cls._locked(doctor_id, role=User.RoleChoices.DOCTOR)
        except ResourceNotFoundError:
            raise ResourceNotFoundError(detail='Doctor not found.')

        doctor.verified = True
        doctor.save(update_fields=['verified', 'updated_at'])

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_VERIFY,
            model_name='User',
            object_id=doctor.pk,
            new_values={'verified': True},
            **AuditService.request_meta(request),
        )
        return doctor

    @classmethod
    @transaction.atomic
    def delete_user(cls, *, user_id, actor=None, request=None) -> dict[str, int]:
        """Delete an account with the feedback it wrote and the prescriptions it issued."""
        user = cls._locked(user_id)
        if actor is not None and user.pk == actor.pk:
            raise BusinessRuleViolation(detail='You cannot delete your own account.')

        snapshot = AuditService.snapshot(user, fields=['email', 'full_name', 'role', 'status'])
        counts = {
            'feedback': Feedback.objects.filter(patient=user).delete()[0],
            'prescriptions': Prescription.objects.filter(doctor=user).delete()[0],
        }
        user.delete()

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name='User',
            object_id=user_id,
            old_values=snapshot,
            new_values=counts,
            **AuditService.request_meta(request),
        )
        logger.info('User %s deleted by %s: %s', user_id, actor, counts)
        return counts


# ---------------------------------------------------------------------------
# Auth service
# ---------------------------------------------------------------------------

class AuthService:
    """Registration, login and token issuance."""

    REGISTRATION_MESSAGES = {
        User.RoleChoices.PHARMACIST: 'Registration successful! Your pharmacy is pending admin verification.',
        User.RoleChoices.DOCTOR: (
            'Registration successful! Your account is pending admin verification '
            'before you can issue prescriptions.'
        ),
    }
    DEFAULT_REGISTRATION_MESSAGE = 'Registration successful! Please login.'

    @classmethod
    def registration_message(cls, role: str) -> str:
        return cls.REGISTRATION_MESSAGES.get(role, cls.DEFAULT_REGISTRATION_MESSAGE)

    @staticmethod
    @transaction.atomic
    def register(
        *,
        full_name: str,
        email: str,
        password: str,
        role: str,
        phone_number: str = '',
        pharmacy_details: dict | None = None,
        request=None,
    ) -> tuple[User, Pharmacy | None]:
        """
        Create the account and, for a pharmacist who supplied pharmacy
        details, the pharmacy it is linked to. One transaction.
        """
        email = email.strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise DuplicateResourceError(detail='Email already registered')

        user = User.objects.create_user(
            email=email,
            password=password,
            full_name=full_name.strip(),
            role=role,
            phone_number=phone_number or '',
            verified=role not in User.ROLES_REQUIRING_VERIFICATION,
            status=LifecycleStatus.ACTIVE,
        )

        pharmacy = None
        if role == User.RoleChoices.PHARMACIST and pharmacy_details:
            pharmacy = PharmacyService.create_pharmacy(actor=user, **pharmacy_details)
            user.pharmacy = pharmacy
            user.save(update_fields=['pharmacy', 'updated_at'])

        AuditService.log(
            actor=user,
            action=AUDIT_ACTION_CREATE,
            model_name='User',
            object_id=user.pk,
            new_values={'email': email, 'role': role, 'pharmacy': str(pharmacy.pk) if pharmacy else None},
            **AuditService.request_meta(request),
        )
        logger.info('Registered %s account %s.', role, user.pk)
        return user, pharmacy

    @staticmethod
    def authenticate(*, email: str, password: str, request=None) -> User:
        """
        Resolve credentials to a user. A banned account is rejected before
        the password is looked at, so the answer never depends on it.
        """
        user = User.objects.filter(email__iexact=email.strip()).first()
        if user is None:
            raise InvalidCredentialsError(detail='User not found')

        meta = AuditService.request_meta(request)
        if user.status == LifecycleStatus.BANNED:
            AuditService.log(
                actor=user, action=AUDIT_ACTION_LOGIN_FAILED, model_name='User',
                object_id=user.pk, new_values={'reason': 'banned'}, **meta,
            )
            raise AccountBannedError()

        if not user.check_password(password):
            AuditService.log(
                actor=user, action=AUDIT_ACTION_LOGIN_FAILED, model_name='User',
                object_id=user.pk, new_values={'reason': 'password'}, **meta,
            )
            raise InvalidCredentialsError(detail='Invalid password')

        update_last_login(None, user)
        AuditService.log(
            actor=user, action=AUDIT_ACTION_LOGIN, model_name='User', object_id=user.pk, **meta,
        )
        return user

    @staticmethod
    def issue_tokens(user: User) -> dict[str, str]:
        """Access + refresh pair. The role claim is informational; checks use the DB row."""
        refresh = RefreshToken.for_user(user)
        refresh['role'] = user.role
        return {
            'token': str(refresh.access_token),
            'refresh': str(refresh),
        }

    @staticmethod
    def refresh_tokens(refresh: str) -> dict[str, str]:
        """
        New access token for a refresh token. The account is reloaded, so a
        refresh token issued before a ban stops working with the ban.
        """
        try:
            token = RefreshToken(refresh)
        except TokenError as exc:
            raise InvalidToken(exc.args[0]) from exc

        user = User.objects.filter(pk=token.get(api_settings.USER_ID_CLAIM)).first()
        if user is None or not user.is_active:
            raise InvalidToken('User not found')
        if user.status == LifecycleStatus.BANNED:
            raise AccountBannedError()

        token['role'] = user.role
        return {
            'token': str(token.access_token),
            'refresh': refresh,
        }
