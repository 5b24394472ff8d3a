"""
Inventory — Service Layer

Patient-facing availability search and the pharmacist's stock upsert.
The stock status is never taken from the client; it is derived from the
quantity on every write.

@file inventory/services.py
"""

import logging
from decimal import Decimal

from django.db import transaction

from core.constants import AUDIT_ACTION_UPDATE
from core.exceptions import ResourceNotFoundError
from core.services import AuditService
from medicines.models import Medicine
from pharmacies.services import PharmacyService

from .models import InventoryEntry

logger = logging.getLogger('medlocator')


class InventoryService:

    @staticmethod
    def search(med_name: str = ''):
        """
        Entries matching ``med_name`` (case-insensitive substring) that are
        not out of stock, at verified and active pharmacies only.
        """
        return (
            InventoryEntry.objects.available()
            .filter(medicine__name__icontains=(med_name or '').strip())
            .select_related('medicine', 'pharmacy')
            .order_by('medicine__name', 'pharmacy__name')
        )

    @staticmethod
    def for_pharmacist(user):
        pharmacy = PharmacyService.pharmacy_of(user)
        return (
            InventoryEntry.objects.filter(pharmacy=pharmacy)
            .select_related('medicine')
            .order_by('medicine__name')
        )

    @staticmethod
    @transaction.atomic
    def upsert(*, pharmacist, medicine_id, quantity: int, price: Decimal, request=None) -> InventoryEntry:
        """
        Insert or overwrite the (pharmacy, medicine) row in a single
        statement. Returns the stored row.
        """
        if not Medicine.objects.filter(pk=medicine_id).exists():
            raise ResourceNotFoundError(detail='Selected medicine does not exist')
        pharmacy = PharmacyService.pharmacy_of(pharmacist)

        stock_status = InventoryEntry.status_for_quantity(quantity)
        InventoryEntry.objects.bulk_create(
            [
                InventoryEntry(
                    pharmacy=pharmacy,
                    medicine_id=medicine_id,
                    quantity=quantity,
                    price=price,
                    status=stock_status,
                ),
            ],
            update_conflicts=True,
            unique_fields=['pharmacy', 'medicine'],
            update_fields=['quantity', 'price', 'status', 'updated_at'],
        )
        entry = InventoryEntry.objects.select_related('medicine').get(pharmacy=pharmacy, medicine_id=medicine_id)

        AuditService.log(
            actor=pharmacist,
            action=AUDIT_ACTION_UPDATE,
            model_name='InventoryEntry',
            object_id=entry.pk,
            new_values={'quantity': quantity, 'price': str(price), 'status': stock_status},
            **AuditService.request_meta(request),
        )
        logger.info(
            'Stock of %s at pharmacy %s set to %d (%s).',
            entry.medicine.name, pharmacy.pk, quantity, stock_status,
        )
        return entry
