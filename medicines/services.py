"""
Medicines — Service Layer

Catalogue reads and additions. Only the pharmacist of a verified
pharmacy may add a medicine; names are unique regardless of case.

@file medicines/services.py
"""

import logging

from django.db import transaction

from core.constants import AUDIT_ACTION_CREATE
from core.exceptions import AccountRestrictedError, DuplicateResourceError
from core.services import AuditService
from inventory.models import InventoryEntry
from pharmacies.services import PharmacyService

from .models import Medicine

logger = logging.getLogger('medlocator')


class MedicineService:

    @staticmethod
    def catalogue():
        return Medicine.objects.order_by('name')

    @staticmethod
    def in_stock():
        """Medicines available at one or more verified, active pharmacies."""
        available = InventoryEntry.objects.available().values('medicine_id')
        return Medicine.objects.filter(pk__in=available).order_by('name')

    @staticmethod
    @transaction.atomic
    def add_medicine(*, pharmacist, name: str, description: str = '', category: str = '', request=None) -> Medicine:
        pharmacy = PharmacyService.pharmacy_of(pharmacist)
        if not pharmacy.verified:
            raise AccountRestrictedError(
                detail='Only verified pharmacies can add new medicines. Please wait for admin verification.',
            )

        name = name.strip()
        if Medicine.objects.filter(name__iexact=name).exists():
            raise DuplicateResourceError(detail='A medicine with this name already exists in the system')

        medicine = Medicine.objects.create(
            name=name,
            description=(description or '').strip(),
            category=(category or '').strip(),
        )
        AuditService.log(
            actor=pharmacist,
            action=AUDIT_ACTION_CREATE,
            model_name='Medicine',
            object_id=medicine.pk,
            new_values={'name': medicine.name, 'pharmacy': str(pharmacy.pk)},
            **AuditService.request_meta(request),
        )
        logger.info('Medicine %s added by pharmacist %s.', medicine.name, pharmacist.pk)
        return medicine
