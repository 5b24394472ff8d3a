"""
Feedback — Service Layer

Submission by patients, moderation by admins, and the read models for
the public pharmacy page and the pharmacist's own dashboard.

@file feedback/services.py
"""

import logging

from django.db import transaction
from django.db.models import Avg, Count

from core.constants import AUDIT_ACTION_UPDATE
from core.exceptions import ResourceNotFoundError
from core.models import LifecycleStatus
from core.services import AuditService
from pharmacies.models import Pharmacy
from users.models import User
from users.policy import enforce_access

from .models import Feedback

logger = logging.getLogger('medlocator')

SUBMIT_RULES = {
    'roles': [User.RoleChoices.PATIENT],
    'blocked_statuses': [LifecycleStatus.SUSPENDED, LifecycleStatus.BANNED],
    'action': 'submit reviews/ratings',
}


class FeedbackService:

    @staticmethod
    @transaction.atomic
    def submit(*, patient, pharmacy_id, rating: int, comment: str = '') -> Feedback:
        """Create Pending feedback. Restricted patients are refused before any insert."""
        enforce_access(patient, **SUBMIT_RULES)

        if not Pharmacy.objects.filter(pk=pharmacy_id).exists():
            raise ResourceNotFoundError(detail='Pharmacy not found.')

        feedback = Feedback.objects.create(
            patient=patient,
            pharmacy_id=pharmacy_id,
            rating=rating,
            comment=comment,
            status=Feedback.StatusChoices.PENDING,
        )
        logger.info('Feedback %s submitted by %s for pharmacy %s.', feedback.pk, patient.pk, pharmacy_id)
        return feedback

    @staticmethod
    def approved_for(pharmacy_id):
        return (
            Feedback.objects
            .filter(pharmacy_id=pharmacy_id, status=Feedback.StatusChoices.APPROVED)
            .select_related('patient')
            .order_by('-created_at')
        )

    @staticmethod
    def pending():
        return (
            Feedback.objects
            .filter(status=Feedback.StatusChoices.PENDING)
            .select_related('patient', 'pharmacy')
            .order_by('-created_at')
        )

    @classmethod
    def summary_for(cls, pharmacy: Pharmacy) -> dict:
        """
        Approved feedback of a pharmacy with its average rating (one
        decimal, as a string; None without reviews) and review count.
        """
        approved = cls.approved_for(pharmacy.pk)
        stats = approved.aggregate(avg_rating=Avg('rating'), total_reviews=Count('id'))
        avg = stats['avg_rating']
        return {
            'average_rating': f'{avg:.1f}' if avg is not None else None,
            'total_reviews': stats['total_reviews'] or 0,
            'feedback': approved,
        }

    @staticmethod
    @transaction.atomic
    def moderate(*, feedback_id, status: str, actor=None, request=None) -> Feedback:
        try:
            feedback = Feedback.objects.select_for_update().get(pk=feedback_id)
        except Feedback.DoesNotExist:
            raise ResourceNotFoundError(detail='Feedback not found.')

        old_status = feedback.status
        feedback.status = status
        feedback.save(update_fields=['status', 'updated_at'])

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_UPDATE,
            model_name='Feedback',
            object_id=feedback.pk,
            old_values={'status': old_status},
            new_values={'status': status},
            **AuditService.request_meta(request),
        )
        return feedback
