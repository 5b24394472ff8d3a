"""
Prescriptions — API Integration Tests

Doctor / patient / pharmacist endpoints and the reception desk.

@file prescriptions/tests/test_views.py
"""

import pytest
from django.urls import reverse
from rest_framework import status

from core.models import LifecycleStatus
from prescriptions.models import Prescription
from tests.factories import DoctorFactory, MedicineFactory, PatientFactory, PrescriptionFactory


@pytest.mark.django_db
class TestIssueEndpoint:
    url = '/api/prescriptions/issue'

    def test_issue(self, doctor_client):
        medicine = MedicineFactory()
        response = doctor_client.post(self.url, {
            'patient_email': 'Patient@Test.ET',
            'medicine_id': str(medicine.pk),
            'dosage': '2x daily',
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()['data']
        assert data['patient_email'] == 'patient@test.et'
        assert data['medicine_name'] == medicine.name
        assert data['status'] == 'pending'

    def test_unverified_doctor(self, api_client):
        api_client.force_authenticate(user=DoctorFactory(verified=False))
        response = api_client.post(self.url, {
            'patient_email': 'p@test.et', 'medicine_id': str(MedicineFactory().pk),
        }, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()['code'] == 'ACCOUNT_RESTRICTED'

    def test_suspended_doctor_message(self, api_client):
        api_client.force_authenticate(user=DoctorFactory(status=LifecycleStatus.SUSPENDED))
        response = api_client.post(self.url, {
            'patient_email': 'p@test.et', 'medicine_id': str(MedicineFactory().pk),
        }, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()['errors']['detail'] == (
            'Your account is suspended. You can log in, but you cannot issue prescriptions.'
        )

    def test_patient_forbidden(self, patient_client):
        response = patient_client.post(self.url, {}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_token_is_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer garbage')
        response = api_client.post(self.url, {}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestPatientEndpoints:
    def test_my_prescriptions(self, patient, patient_client):
        PrescriptionFactory(patient_email=patient.email)
        PrescriptionFactory()
        response = patient_client.get(f'/api/prescriptions/my-prescriptions/{patient.email}')
        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()['data']) == 1

    def test_other_patients_prescriptions_forbidden(self, patient_client):
        response = patient_client.get('/api/prescriptions/my-prescriptions/someone@test.et')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_fulfill_own(self, patient, patient_client):
        prescription = PrescriptionFactory(patient_email=patient.email)
        response = patient_client.put(f'/api/prescriptions/{prescription.pk}/fulfill')
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['message'] == 'Prescription marked as fulfilled'

    def test_delete_own(self, patient, patient_client):
        prescription = PrescriptionFactory(patient_email=patient.email)
        response = patient_client.delete(f'/api/prescriptions/{prescription.pk}')
        assert response.status_code == status.HTTP_200_OK
        assert not Prescription.objects.exists()

    def test_delete_unknown(self, patient_client):
        response = patient_client.delete('/api/prescriptions/00000000-0000-0000-0000-000000000000')
        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestPharmacistLookup:
    def test_lookup(self, pharmacist_client):
        patient = PatientFactory(email='look@test.et', phone_number='0911000000')
        PrescriptionFactory(patient_email=patient.email)
        response = pharmacist_client.get('/api/prescriptions/patient/LOOK@test.et')
        assert response.status_code == status.HTTP_200_OK
        data = response.json()['data']
        assert data['patient'] == {'name': patient.full_name, 'email': 'look@test.et', 'phone': '0911000000'}
        assert data['prescriptions'][0]['doctor_name']

    def test_unknown_patient(self, pharmacist_client):
        response = pharmacist_client.get('/api/prescriptions/patient/nobody@test.et')
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_fulfill(self, pharmacist_client):
        prescription = PrescriptionFactory()
        response = pharmacist_client.put(f'/api/prescriptions/{prescription.pk}/fulfill')
        assert response.status_code == status.HTTP_200_OK
        prescription.refresh_from_db()
        assert prescription.status == Prescription.StatusChoices.FULFILLED


@pytest.mark.django_db
class TestReceptionDesk:
    def test_recent(self, receptionist_client):
        PrescriptionFactory.create_batch(3)
        response = receptionist_client.get(reverse('reception:recent-prescriptions'), {'limit': 2})
        assert response.status_code == status.HTTP_200_OK
        rows = response.json()['data']
        assert len(rows) == 2
        assert {'patient_name', 'doctor_name', 'medicine_name'} <= set(rows[0])

    def test_admin_allowed(self, admin_client):
        response = admin_client.get(reverse('reception:recent-prescriptions'))
        assert response.status_code == status.HTTP_200_OK

    def test_patient_records(self, receptionist_client):
        patient = PatientFactory(email='rec@test.et')
        PrescriptionFactory(patient_email=patient.email)
        PrescriptionFactory(patient_email=patient.email, status=Prescription.StatusChoices.FULFILLED)
        response = receptionist_client.get(reverse('reception:patient-records', args=['rec@test.et']))
        assert response.status_code == status.HTTP_200_OK
        data = response.json()['data']
        assert data['full_name'] == patient.full_name
        assert len(data['prescriptions']) == 1

    def test_doctor_forbidden(self, doctor_client):
        response = doctor_client.get(reverse('reception:recent-prescriptions'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_token_is_400(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer garbage')
        response = api_client.get(reverse('reception:recent-prescriptions'))
        assert response.status_code == status.HTTP_400_BAD_REQUEST
