"""
Feedback — Models

Patient ratings of pharmacies. New feedback waits for moderation and
only Approved rows are ever shown publicly.

@file feedback/models.py
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel


class Feedback(BaseModel):

    class StatusChoices(models.TextChoices):
        PENDING = 'Pending', _('Pending')
        APPROVED = 'Approved', _('Approved')
        REMOVED = 'Removed', _('Removed')

    patient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='feedback_given',
        verbose_name=_('patient'),
    )
    pharmacy = models.ForeignKey(
        'pharmacies.Pharmacy',
        on_delete=models.CASCADE,
        related_name='feedback',
        verbose_name=_('pharmacy'),
    )
    rating = models.PositiveSmallIntegerField(
        _('rating'),
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    comment = models.TextField(_('comment'), blank=True)
    status = models.CharField(
        _('status'), max_length=10,
        choices=StatusChoices.choices,
        default=StatusChoices.PENDING,
        db_index=True,
    )

    class Meta:
        verbose_name = _('feedback')
        verbose_name_plural = _('feedback')
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=1, rating__lte=5),
                name='feedback_rating_between_1_and_5',
            ),
        ]
        indexes = [
            models.Index(fields=['pharmacy', 'status']),
        ]

    def __str__(self):
        return f'{self.rating}/5 for {self.pharmacy_id} ({self.status})'
