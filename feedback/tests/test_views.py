"""
Feedback — API Integration Tests

@file feedback/tests/test_views.py
"""

import pytest
from django.urls import reverse
from rest_framework import status

from core.models import LifecycleStatus
from feedback.models import Feedback
from tests.factories import FeedbackFactory, PatientFactory, PharmacyFactory


@pytest.mark.django_db
class TestSubmitEndpoint:
    url = '/api/feedback/submit'

    def test_submit(self, patient_client):
        pharmacy = PharmacyFactory()
        response = patient_client.post(self.url, {
            'pharmacy_id': str(pharmacy.pk), 'rating': 5, 'comment': 'Great',
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()['data']['message'] == 'Feedback submitted for moderation'

    def test_rating_out_of_range(self, patient_client):
        response = patient_client.post(self.url, {
            'pharmacy_id': str(PharmacyFactory().pk), 'rating': 6, 'comment': 'x',
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['errors']['rating'] == ['Rating must be between 1 and 5']

    def test_suspended_patient(self, api_client):
        api_client.force_authenticate(user=PatientFactory(status=LifecycleStatus.SUSPENDED))
        response = api_client.post(self.url, {
            'pharmacy_id': str(PharmacyFactory().pk), 'rating': 3, 'comment': 'x',
        }, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()['errors']['detail'] == (
            'Your account is suspended. You can log in, but you cannot submit reviews/ratings.'
        )
        assert not Feedback.objects.exists()

    def test_invalid_token_is_400(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer garbage')
        response = api_client.post(self.url, {}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['code'] == 'INVALID_TOKEN'


@pytest.mark.django_db
class TestPublicListing:
    def test_approved_feedback_with_patient_name(self, api_client):
        pharmacy = PharmacyFactory()
        feedback = FeedbackFactory(pharmacy=pharmacy, status=Feedback.StatusChoices.APPROVED)
        FeedbackFactory(pharmacy=pharmacy)
        response = api_client.get(reverse('feedback:pharmacy-feedback', args=[pharmacy.pk]))
        assert response.status_code == status.HTTP_200_OK
        rows = response.json()['data']
        assert len(rows) == 1
        assert rows[0]['patient_name'] == feedback.patient.full_name


@pytest.mark.django_db
class TestModerationQueue:
    def test_pending_list(self, admin_client):
        FeedbackFactory()
        FeedbackFactory(status=Feedback.StatusChoices.APPROVED)
        response = admin_client.get(reverse('admin-api:admin-feedback-list'))
        assert response.status_code == status.HTTP_200_OK
        rows = response.json()['data']
        assert len(rows) == 1
        assert 'pharmacy_name' in rows[0]

    def test_remove(self, admin_client):
        feedback = FeedbackFactory()
        response = admin_client.put(
            reverse('admin-api:admin-feedback-detail', args=[feedback.pk]), {'status': 'Removed'}, format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['message'] == 'Feedback Removed'

    def test_invalid_status(self, admin_client):
        feedback = FeedbackFactory()
        response = admin_client.put(
            reverse('admin-api:admin-feedback-detail', args=[feedback.pk]), {'status': 'Pending'}, format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_patient_forbidden(self, patient_client):
        assert patient_client.get(reverse('admin-api:admin-feedback-list')).status_code == status.HTTP_403_FORBIDDEN
