"""
Pharmacies — Django Admin Tests

Deleting from the admin site removes the same rows as the API delete.

@file pharmacies/tests/test_admin.py
"""

import pytest
from django.contrib.admin.sites import site
from django.test import RequestFactory

from core.models import AuditLog
from inventory.models import InventoryEntry
from pharmacies.admin import PharmacyAdmin
from pharmacies.models import Pharmacy
from prescriptions.models import Prescription
from tests.factories import AdminFactory, InventoryEntryFactory, PharmacistFactory, PrescriptionFactory
from users.models import User


@pytest.fixture
def admin_request():
    request = RequestFactory().post('/admin/pharmacies/pharmacy/')
    request.user = AdminFactory()
    return request


@pytest.fixture
def model_admin():
    return PharmacyAdmin(Pharmacy, site)


@pytest.mark.django_db
class TestPharmacyAdminDelete:
    def test_delete_model_removes_pharmacists(self, admin_request, model_admin):
        pharmacist = PharmacistFactory()
        pharmacy = pharmacist.pharmacy
        InventoryEntryFactory(pharmacy=pharmacy)
        PrescriptionFactory(doctor=pharmacist)

        model_admin.delete_model(admin_request, pharmacy)

        assert not Pharmacy.objects.filter(pk=pharmacy.pk).exists()
        assert not User.objects.filter(pk=pharmacist.pk).exists()
        assert not InventoryEntry.objects.filter(pharmacy_id=pharmacy.pk).exists()
        assert Prescription.objects.count() == 0
        assert AuditLog.objects.filter(
            action=AuditLog.ActionChoices.DELETE, model_name='Pharmacy', actor=admin_request.user,
        ).exists()

    def test_delete_selected_removes_every_pharmacist(self, admin_request, model_admin):
        pharmacists = PharmacistFactory.create_batch(2)
        ids = [p.pharmacy_id for p in pharmacists]

        model_admin.delete_queryset(admin_request, Pharmacy.objects.filter(pk__in=ids))

        assert not Pharmacy.objects.filter(pk__in=ids).exists()
        assert not User.objects.filter(pk__in=[p.pk for p in pharmacists]).exists()
