"""
Users — API Integration Tests

Auth endpoints and the admin account console.

@file users/tests/test_views.py
"""

import pytest
from django.urls import reverse, reverse_lazy
from rest_framework import status

from core.models import LifecycleStatus
from pharmacies.models import Pharmacy
from tests.factories import DoctorFactory, PatientFactory, PharmacistFactory, UserFactory
from users.models import User
from users.services import UserService


@pytest.mark.django_db
class TestRegisterEndpoint:
    url = reverse_lazy('auth:register')

    def test_register_patient(self, api_client):
        response = api_client.post(self.url, {
            'fullName': 'Meron Alemu',
            'email': 'Meron@Test.ET',
            'password': 'pw12345',
            'role': 'Patient',
            'phone': '0911 234 567',
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()['data']
        assert data['user']['email'] == 'meron@test.et'
        assert data['user']['phone_number'] == '0911234567'
        assert data['pharmacy_id'] is None
        assert data['message'] == 'Registration successful! Please login.'

    def test_register_pharmacist_with_pharmacy(self, api_client):
        response = api_client.post(self.url, {
            'fullName': 'Kebede Pharm',
            'email': 'kp@test.et',
            'password': 'pw12345',
            'role': 'Pharmacist',
            'pharmacyDetails': {
                'pharmacyName': 'Piassa Pharmacy',
                'pharmacyAddress': 'Piassa, Addis Ababa',
                'contactNumber': '+251911000000',
                'latitude': 9.0345678912,
                'longitude': 38.7512345678,
            },
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        pharmacy = Pharmacy.objects.get(pk=response.json()['data']['pharmacy_id'])
        assert pharmacy.verified is False
        assert str(pharmacy.latitude) == '9.034568'
        assert User.objects.get(email='kp@test.et').pharmacy == pharmacy

    def test_admin_role_not_self_registrable(self, api_client):
        response = api_client.post(self.url, {
            'fullName': 'Sneaky', 'email': 's@test.et', 'password': 'pw', 'role': 'Admin',
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['errors']['role'] == ['Invalid role selected']

    def test_bad_phone(self, api_client):
        response = api_client.post(self.url, {
            'fullName': 'Phone', 'email': 'p@test.et', 'password': 'pw', 'role': 'Patient', 'phone': '12345',
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'phone' in response.json()['errors']

    def test_duplicate_email(self, api_client):
        UserFactory(email='dupe@test.et')
        response = api_client.post(self.url, {
            'fullName': 'Dupe', 'email': 'dupe@test.et', 'password': 'pw', 'role': 'Patient',
        }, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.django_db
class TestLoginEndpoint:
    url = reverse_lazy('auth:login')

    def test_login_success(self, api_client):
        UserFactory(email='in@test.et', password='Login2026!!', role='Doctor', full_name='Dr In')
        response = api_client.post(self.url, {'email': 'in@test.et', 'password': 'Login2026!!'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        data = response.json()['data']
        assert data['token'] and data['refresh']
        assert data['user']['name'] == 'Dr In'
        assert data['user']['role'] == 'Doctor'

    def test_login_wrong_password(self, api_client):
        UserFactory(email='wrong@test.et', password='Login2026!!')
        response = api_client.post(self.url, {'email': 'wrong@test.et', 'password': 'x'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['code'] == 'INVALID_CREDENTIALS'

    @pytest.mark.parametrize('password', ['Login2026!!', 'not-the-password'])
    def test_banned_login_rejected(self, api_client, password):
        UserFactory(email='ban@test.et', password='Login2026!!', status=LifecycleStatus.BANNED)
        response = api_client.post(self.url, {'email': 'ban@test.et', 'password': password}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()['code'] == 'ACCOUNT_BANNED'

    def test_token_works_on_me(self, api_client):
        UserFactory(email='me@test.et', password='Login2026!!')
        token = api_client.post(
            self.url, {'email': 'me@test.et', 'password': 'Login2026!!'}, format='json',
        ).json()['data']['token']
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        response = api_client.get(reverse('auth:me'))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['email'] == 'me@test.et'


@pytest.mark.django_db
class TestRefreshEndpoint:
    url = reverse_lazy('auth:token-refresh')

    @staticmethod
    def _login(api_client, email='refresh@test.et'):
        user = UserFactory(email=email, password='Login2026!!')
        data = api_client.post(
            reverse('auth:login'), {'email': email, 'password': 'Login2026!!'}, format='json',
        ).json()['data']
        return user, data

    def test_refresh_uses_login_token_key(self, api_client):
        _, data = self._login(api_client)
        response = api_client.post(self.url, {'refresh': data['refresh']}, format='json')
        assert response.status_code == status.HTTP_200_OK
        body = response.json()['data']
        assert body['token'] and 'access' not in body

    def test_refresh_rejected_after_ban(self, api_client):
        user, data = self._login(api_client)
        UserService.change_status(user_id=user.pk, new_status=LifecycleStatus.BANNED)

        response = api_client.post(self.url, {'refresh': data['refresh']}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()['code'] == 'ACCOUNT_BANNED'

    def test_access_token_rejected_after_ban(self, api_client):
        user, data = self._login(api_client)
        UserService.change_status(user_id=user.pk, new_status=LifecycleStatus.BANNED)

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {data['token']}")
        response = api_client.get(reverse('auth:me'))
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()['code'] == 'ACCOUNT_BANNED'

    def test_garbled_refresh(self, api_client):
        response = api_client.post(self.url, {'refresh': 'not-a-jwt'}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestInvalidTokenCodes:
    def test_admin_surface_answers_400(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')
        response = api_client.get(reverse('admin-api:admin-user-list'))
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['code'] == 'INVALID_TOKEN'

    def test_inventory_answers_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')
        response = api_client.get(reverse('inventory:my-inventory'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_missing_token_answers_401(self, api_client):
        response = api_client.get(reverse('admin-api:admin-user-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestAdminUserConsole:
    def test_non_admin_forbidden(self, patient_client):
        response = patient_client.get(reverse('admin-api:admin-user-list'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_filter_by_role(self, admin_client):
        DoctorFactory.create_batch(2)
        PatientFactory()
        response = admin_client.get(reverse('admin-api:admin-user-list'), {'role': 'Doctor'})
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['meta']['count'] == 2
        assert {row['role'] for row in body['data']} == {'Doctor'}

    def test_search(self, admin_client):
        PharmacistFactory(full_name='Selam Bekele')
        response = admin_client.get(reverse('admin-api:admin-user-search'), {'query': 'selam'})
        assert response.status_code == status.HTTP_200_OK
        row = response.json()['data'][0]
        assert row['pharmacy_verified'] is True
        assert row['pharmacy_status'] == 'active'

    def test_search_requires_query(self, admin_client):
        response = admin_client.get(reverse('admin-api:admin-user-search'))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_change_status_propagates(self, admin_client):
        pharmacist = PharmacistFactory()
        response = admin_client.put(
            reverse('admin-api:admin-user-change-status', args=[pharmacist.pk]),
            {'status': 'suspended'}, format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['message'] == 'User suspended successfully.'
        pharmacist.pharmacy.refresh_from_db()
        assert pharmacist.pharmacy.status == LifecycleStatus.SUSPENDED

    def test_change_status_rejects_unknown_value(self, admin_client):
        patient = PatientFactory()
        response = admin_client.put(
            reverse('admin-api:admin-user-change-status', args=[patient.pk]),
            {'status': 'deleted'}, format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_verify_doctor(self, admin_client):
        doctor = DoctorFactory(verified=False)
        response = admin_client.put(reverse('admin-api:admin-doctor-verify', args=[doctor.pk]))
        assert response.status_code == status.HTTP_200_OK
        doctor.refresh_from_db()
        assert doctor.verified is True

    def test_delete_user(self, admin_client):
        patient = PatientFactory()
        response = admin_client.delete(reverse('admin-api:admin-user-detail', args=[patient.pk]))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['deleted'] == {'feedback': 0, 'prescriptions': 0}
        assert not User.objects.filter(pk=patient.pk).exists()
