"""
Inventory — End-to-End Scenario

A pharmacist registers, the admin verifies the pharmacy, stock appears
in patient search, and suspending the pharmacist hides it again.

@file inventory/tests/test_end_to_end.py
"""

import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.models import LifecycleStatus
from pharmacies.models import Pharmacy
from users.models import User


def _login(email, password):
    client = APIClient()
    response = client.post(reverse('auth:login'), {'email': email, 'password': password}, format='json')
    assert response.status_code == status.HTTP_200_OK
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.json()['data']['token']}")
    return client


def _search(name):
    response = APIClient().get(reverse('inventory:search'), {'medName': name})
    assert response.status_code == status.HTTP_200_OK
    return response.json()['data']


@pytest.mark.django_db
def test_pharmacist_lifecycle_controls_search_visibility():
    User.objects.create_superuser(email='admin@test.et', password='Admin2026!', full_name='Admin')
    admin = _login('admin@test.et', 'Admin2026!')

    response = APIClient().post(reverse('auth:register'), {
        'fullName': 'Tigist Haile',
        'email': 'tigist@test.et',
        'password': 'Pharm2026!',
        'role': 'Pharmacist',
        'pharmacyDetails': {'pharmacyName': 'Kazanchis Pharmacy', 'pharmacyAddress': 'Kazanchis'},
    }, format='json')
    assert response.status_code == status.HTTP_201_CREATED
    pharmacy_id = response.json()['data']['pharmacy_id']
    pharmacist = _login('tigist@test.et', 'Pharm2026!')

    # unverified pharmacy cannot extend the catalogue
    response = pharmacist.post('/api/inventory/add-medicine', {'name': 'Salbutamol'}, format='json')
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = admin.put(reverse('admin-api:admin-pharmacy-verify', args=[pharmacy_id]))
    assert response.status_code == status.HTTP_200_OK

    response = pharmacist.post('/api/inventory/add-medicine', {'name': 'Salbutamol'}, format='json')
    assert response.status_code == status.HTTP_201_CREATED
    medicine_id = response.json()['data']['medicine']['id']

    response = pharmacist.post('/api/inventory/update', {
        'medicine_id': medicine_id, 'quantity': 12, 'price': '85.00',
    }, format='json')
    assert response.status_code == status.HTTP_200_OK
    assert [row['pharmacy'] for row in _search('salbu')] == ['Kazanchis Pharmacy']

    pharmacist_id = User.objects.get(email='tigist@test.et').pk
    response = admin.put(
        reverse('admin-api:admin-user-change-status', args=[pharmacist_id]), {'status': 'suspended'}, format='json',
    )
    assert response.status_code == status.HTTP_200_OK
    assert Pharmacy.objects.get(pk=pharmacy_id).status == LifecycleStatus.SUSPENDED
    assert _search('salbu') == []

    response = admin.put(
        reverse('admin-api:admin-user-change-status', args=[pharmacist_id]), {'status': 'active'}, format='json',
    )
    assert response.status_code == status.HTTP_200_OK
    assert len(_search('salbu')) == 1
