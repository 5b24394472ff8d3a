"""
Pharmacies — Model Tests

@file pharmacies/tests/test_models.py
"""

import pytest

from core.models import LifecycleStatus
from pharmacies.models import Pharmacy
from tests.factories import PharmacyFactory


@pytest.mark.django_db
class TestPharmacyVisibility:
    def test_visible_requires_verified_and_active(self):
        visible = PharmacyFactory()
        PharmacyFactory(verified=False)
        PharmacyFactory(status=LifecycleStatus.SUSPENDED)
        PharmacyFactory(status=LifecycleStatus.BANNED)
        assert list(Pharmacy.objects.visible_to_patients()) == [visible]

    @pytest.mark.parametrize('verified,status,expected', [
        (True, LifecycleStatus.ACTIVE, True),
        (False, LifecycleStatus.ACTIVE, False),
        (True, LifecycleStatus.SUSPENDED, False),
        (True, LifecycleStatus.BANNED, False),
    ])
    def test_property_matches_queryset(self, verified, status, expected):
        pharmacy = PharmacyFactory(verified=verified, status=status)
        assert pharmacy.is_visible_to_patients is expected
        assert Pharmacy.objects.visible_to_patients().filter(pk=pharmacy.pk).exists() is expected

    def test_new_pharmacy_defaults(self):
        pharmacy = Pharmacy.objects.create(name='Fresh', address='Somewhere')
        assert pharmacy.verified is False
        assert pharmacy.status == LifecycleStatus.ACTIVE
        assert str(pharmacy) == 'Fresh'
