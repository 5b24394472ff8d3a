"""
Prescriptions — Model Tests

@file prescriptions/tests/test_models.py
"""

import pytest

from prescriptions.models import Prescription
from tests.factories import PrescriptionFactory


@pytest.mark.django_db
class TestPrescriptionQuerySet:
    def test_for_patient_ignores_case(self):
        mine = PrescriptionFactory(patient_email='Abebe@Test.ET')
        PrescriptionFactory(patient_email='other@test.et')
        assert list(Prescription.objects.for_patient(' abebe@test.et ')) == [mine]

    def test_unfulfilled(self):
        pending = PrescriptionFactory()
        PrescriptionFactory(status=Prescription.StatusChoices.FULFILLED)
        assert list(Prescription.objects.unfulfilled()) == [pending]

    def test_defaults(self):
        prescription = PrescriptionFactory()
        assert prescription.status == 'pending'
        assert prescription.issued_at is not None
