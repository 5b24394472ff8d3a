"""
Pharmacies — Service Layer

Pharmacy lifecycle: creation at pharmacist registration, admin
verification, status changes with propagation to the pharmacy's
pharmacists, and the cascading delete. All admin actions are audited.

@file pharmacies/services.py
"""

import logging

from django.db import transaction
from django.utils import timezone

from core.constants import (
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    AUDIT_ACTION_STATUS_CHANGE,
    AUDIT_ACTION_VERIFY,
)
from core.exceptions import DuplicateResourceError, ResourceNotFoundError
from core.lifecycle import ensure_transition, pharmacist_cascade_for
from core.services import AuditService
from feedback.models import Feedback
from inventory.models import InventoryEntry
from prescriptions.models import Prescription
from users.models import User

from .models import Pharmacy

logger = logging.getLogger('medlocator')

NO_PHARMACY_DETAIL = 'Pharmacy not found. Please ensure your pharmacy is verified by admin.'


class PharmacyService:
    """Create, verify, change status, delete."""

    @staticmethod
    def _locked(pharmacy_id) -> Pharmacy:
        try:
            return Pharmacy.objects.select_for_update().get(pk=pharmacy_id)
        except Pharmacy.DoesNotExist:
            raise ResourceNotFoundError(detail='Pharmacy not found.')

    @staticmethod
    def pharmacy_of(user) -> Pharmacy:
        """The pharmacy a pharmacist registered, or 404."""
        pharmacy = Pharmacy.objects.filter(pk=user.pharmacy_id).first() if user.pharmacy_id else None
        if pharmacy is None:
            raise ResourceNotFoundError(detail=NO_PHARMACY_DETAIL)
        return pharmacy

    @staticmethod
    @transaction.atomic
    def create_pharmacy(
        *,
        name: str,
        address: str,
        contact_number: str = '',
        latitude=None,
        longitude=None,
        actor=None,
    ) -> Pharmacy:
        """New pharmacies start unverified and active."""
        name = name.strip()
        if Pharmacy.objects.filter(name__iexact=name).exists():
            raise DuplicateResourceError(detail=f'A pharmacy named "{name}" is already registered.')

        pharmacy = Pharmacy.objects.create(
            name=name,
            address=address.strip(),
            contact_number=contact_number or '',
            latitude=latitude,
            longitude=longitude,
        )
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='Pharmacy',
            object_id=pharmacy.pk,
            new_values=AuditService.snapshot(pharmacy),
        )
        return pharmacy

    @classmethod
    @transaction.atomic
    def verify_pharmacy(cls, *, pharmacy_id, actor=None, request=None) -> Pharmacy:
        pharmacy = cls._locked(pharmacy_id)
        was_verified = pharmacy.verified
        pharmacy.verified = True
        pharmacy.save(update_fields=['verified', 'updated_at'])

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_VERIFY,
            model_name='Pharmacy',
            object_id=pharmacy.pk,
            old_values={'verified': was_verified},
            new_values={'verified': True},
            **AuditService.request_meta(request),
        )
        logger.info('Pharmacy %s verified by %s.', pharmacy.pk, actor)
        return pharmacy

    @classmethod
    @transaction.atomic
    def change_status(cls, *, pharmacy_id, new_status: str, actor=None, request=None) -> tuple[Pharmacy, int]:
        """
        Move the pharmacy to ``new_status`` and cascade to its pharmacists
        in one batch update. Returns the pharmacy and the number of
        pharmacist accounts changed.
        """
        pharmacy = cls._locked(pharmacy_id)
        ensure_transition(pharmacy.status, new_status)

        old_status = pharmacy.status
        pharmacy.status = new_status
        pharmacy.save(update_fields=['status', 'updated_at'])

        cascade = pharmacist_cascade_for(new_status)
        affected = (
            User.objects.pharmacists_of(pharmacy)
            .filter(status__in=cascade.from_statuses)
            .update(status=cascade.to_status, updated_at=timezone.now())
        )

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_STATUS_CHANGE,
            model_name='Pharmacy',
            object_id=pharmacy.pk,
            old_values={'status': old_status},
            new_values={'status': new_status, 'pharmacists_updated': affected},
            **AuditService.request_meta(request),
        )
        logger.info(
            'Pharmacy %s %s -> %s by %s (%d pharmacist(s) updated).',
            pharmacy.pk, old_status, new_status, actor, affected,
        )
        return pharmacy, affected

    @classmethod
    @transaction.atomic
    def delete_pharmacy(cls, *, pharmacy_id, actor=None, request=None) -> dict[str, int]:
        """
        Remove a pharmacy with everything that hangs off it: its
        pharmacists (with the prescriptions and feedback they wrote), its
        inventory and its feedback. Other users pointing at it are
        detached. All or nothing.
        """
        pharmacy = cls._locked(pharmacy_id)
        snapshot = AuditService.snapshot(pharmacy)

        pharmacist_ids = list(User.objects.pharmacists_of(pharmacy).values_list('pk', flat=True))
        counts = {
            'prescriptions': Prescription.objects.filter(doctor_id__in=pharmacist_ids).delete()[0],
            'feedback_by_pharmacists': Feedback.objects.filter(patient_id__in=pharmacist_ids).delete()[0],
        }
        User.objects.filter(pk__in=pharmacist_ids).delete()
        counts |= {
            'pharmacists': len(pharmacist_ids),
            'detached_users': User.objects.filter(pharmacy=pharmacy).update(pharmacy=None),
            'inventory': InventoryEntry.objects.filter(pharmacy=pharmacy).delete()[0],
            'feedback': Feedback.objects.filter(pharmacy=pharmacy).delete()[0],
        }
        pharmacy.delete()

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name='Pharmacy',
            object_id=pharmacy_id,
            old_values=snapshot,
            new_values=counts,
            **AuditService.request_meta(request),
        )
        logger.info('Pharmacy %s deleted by %s: %s', pharmacy_id, actor, counts)
        return counts
