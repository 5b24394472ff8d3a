"""
Prescriptions — Service Layer

Issuing by verified doctors, lookups by patients, pharmacists and
reception staff, and fulfilment / deletion. Every check goes through
the shared access policy so the same rules hold outside HTTP.

@file prescriptions/services.py
"""

import logging

from django.db import transaction
from django.db.models import F, OuterRef, Subquery

from core.constants import (
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    AUDIT_ACTION_STATUS_CHANGE,
    RECENT_PRESCRIPTIONS_DEFAULT_LIMIT,
    RECENT_PRESCRIPTIONS_MAX_LIMIT,
)
from core.exceptions import ResourceNotFoundError
from core.models import LifecycleStatus
from core.services import AuditService
from medicines.models import Medicine
from users.models import User
from users.policy import enforce_access

from .models import Prescription

logger = logging.getLogger('medlocator')

ISSUE_RULES = {
    'roles': [User.RoleChoices.DOCTOR],
    'blocked_statuses': [LifecycleStatus.SUSPENDED, LifecycleStatus.BANNED],
    'require_verified': True,
    'action': 'issue prescriptions',
}
OWNER_ROLES = [User.RoleChoices.PHARMACIST, User.RoleChoices.PATIENT]


def _patient_or_404(email: str) -> User:
    patient = User.objects.filter(email__iexact=email.strip(), role=User.RoleChoices.PATIENT).first()
    if patient is None:
        raise ResourceNotFoundError(detail='Patient not found')
    return patient


class PrescriptionService:

    @staticmethod
    def _locked(prescription_id) -> Prescription:
        try:
            return Prescription.objects.select_for_update().get(pk=prescription_id)
        except Prescription.DoesNotExist:
            raise ResourceNotFoundError(detail='Prescription not found')

    # ------------------------------------------------------------------
    # Doctor
    # ------------------------------------------------------------------

    @staticmethod
    @transaction.atomic
    def issue(*, doctor, patient_email: str, medicine_id, dosage: str = '', instructions: str = '', request=None) -> Prescription:
        enforce_access(doctor, **ISSUE_RULES)

        if not Medicine.objects.filter(pk=medicine_id).exists():
            raise ResourceNotFoundError(detail='Selected medicine does not exist')

        prescription = Prescription.objects.create(
            doctor=doctor,
            patient_email=patient_email.strip(),
            medicine_id=medicine_id,
            dosage=dosage or '',
            instructions=instructions or '',
        )
        AuditService.log(
            actor=doctor,
            action=AUDIT_ACTION_CREATE,
            model_name='Prescription',
            object_id=prescription.pk,
            new_values={'patient_email': prescription.patient_email, 'medicine': str(medicine_id)},
            **AuditService.request_meta(request),
        )
        logger.info('Prescription %s issued by doctor %s.', prescription.pk, doctor.pk)
        return prescription

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @staticmethod
    def for_patient_email(*, user, email: str):
        """A patient's own prescriptions; admins may read anyone's."""
        enforce_access(
            user,
            roles=[User.RoleChoices.PATIENT, User.RoleChoices.ADMIN],
            owner_email=email,
            action='view prescriptions',
        )
        return Prescription.objects.for_patient(email).select_related('medicine')

    @staticmethod
    def patient_records_for_pharmacist(email: str) -> tuple[User, object]:
        """The patient's contact details and every prescription written for them."""
        patient = _patient_or_404(email)
        prescriptions = (
            Prescription.objects.for_patient(email)
            .select_related('medicine', 'doctor')
            .order_by('-issued_at')
        )
        return patient, prescriptions

    @staticmethod
    def patient_records(email: str) -> tuple[User, object]:
        """Reception desk view: outstanding prescriptions only."""
        patient = _patient_or_404(email)
        prescriptions = (
            Prescription.objects.for_patient(email).unfulfilled()
            .select_related('medicine')
            .order_by('-issued_at')
        )
        return patient, prescriptions

    @staticmethod
    def recent(limit=None):
        """
        Most recent unfulfilled prescriptions, with the patient's name
        when the email belongs to a registered patient.
        """
        try:
            limit = int(limit)
        except (TypeError, ValueError):
            limit = RECENT_PRESCRIPTIONS_DEFAULT_LIMIT
        if limit <= 0:
            limit = RECENT_PRESCRIPTIONS_DEFAULT_LIMIT
        limit = min(limit, RECENT_PRESCRIPTIONS_MAX_LIMIT)

        patient_name = (
            User.objects
            .filter(email__iexact=OuterRef('patient_email'), role=User.RoleChoices.PATIENT)
            .values('full_name')[:1]
        )
        return (
            Prescription.objects.unfulfilled()
            .annotate(
                patient_name=Subquery(patient_name),
                doctor_name=F('doctor__full_name'),
                medicine_name=F('medicine__name'),
            )
            .order_by('-issued_at')[:limit]
        )

    # ------------------------------------------------------------------
    # Fulfil / delete
    # ------------------------------------------------------------------

    @classmethod
    @transaction.atomic
    def fulfill(cls, *, prescription_id, user, request=None) -> Prescription:
        enforce_access(user, roles=OWNER_ROLES, action='fulfill prescriptions')
        prescription = cls._locked(prescription_id)
        enforce_access(
            user, roles=OWNER_ROLES, owner_email=prescription.patient_email, action='fulfill prescriptions',
        )

        old_status = prescription.status
        prescription.status = Prescription.StatusChoices.FULFILLED
        prescription.save(update_fields=['status', 'updated_at'])

        AuditService.log(
            actor=user,
            action=AUDIT_ACTION_STATUS_CHANGE,
            model_name='Prescription',
            object_id=prescription.pk,
            old_values={'status': old_status},
            new_values={'status': prescription.status},
            **AuditService.request_meta(request),
        )
        return prescription

    @classmethod
    @transaction.atomic
    def delete(cls, *, prescription_id, user, request=None) -> None:
        enforce_access(user, roles=OWNER_ROLES, action='delete prescriptions')
        prescription = cls._locked(prescription_id)
        enforce_access(
            user, roles=OWNER_ROLES, owner_email=prescription.patient_email, action='delete prescriptions',
        )

        snapshot = AuditService.snapshot(prescription)
        prescription.delete()
        AuditService.log(
            actor=user,
            action=AUDIT_ACTION_DELETE,
            model_name='Prescription',
            object_id=prescription_id,
            old_values=snapshot,
            **AuditService.request_meta(request),
        )
        logger.info('Prescription %s deleted by %s.', prescription_id, user.pk)
