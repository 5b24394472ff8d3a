"""
MedLocator — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

import pytest
from rest_framework.test import APIClient

from tests.factories import (
    AdminFactory,
    DoctorFactory,
    PatientFactory,
    PharmacistFactory,
    ReceptionistFactory,
)


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def patient(db):
    """Active patient with default password TestPass2026!"""
    return PatientFactory()


@pytest.fixture
def doctor(db):
    """Verified, active doctor."""
    return DoctorFactory()


@pytest.fixture
def pharmacist(db):
    """Verified pharmacist linked to a verified, active pharmacy."""
    return PharmacistFactory()


@pytest.fixture
def receptionist(db):
    return ReceptionistFactory()


@pytest.fixture
def admin_user(db):
    return AdminFactory()


def _client_for(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def patient_client(patient):
    return _client_for(patient)


@pytest.fixture
def doctor_client(doctor):
    return _client_for(doctor)


@pytest.fixture
def pharmacist_client(pharmacist):
    return _client_for(pharmacist)


@pytest.fixture
def receptionist_client(receptionist):
    return _client_for(receptionist)


@pytest.fixture
def admin_client(admin_user):
    """API client authenticated as an Admin."""
    return _client_for(admin_user)
