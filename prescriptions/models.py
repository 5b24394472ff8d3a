"""
Prescriptions — Models

A prescription written by a verified doctor. The patient is referenced
by email only, so prescriptions can be issued before the patient has an
account.

@file prescriptions/models.py
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel


class PrescriptionQuerySet(models.QuerySet):

    def for_patient(self, email: str):
        return self.filter(patient_email__iexact=email.strip())

    def unfulfilled(self):
        return self.exclude(status=Prescription.StatusChoices.FULFILLED)


class Prescription(BaseModel):

    class StatusChoices(models.TextChoices):
        PENDING = 'pending', _('Pending')
        FULFILLED = 'Fulfilled', _('Fulfilled')

    patient_email = models.EmailField(_('patient email'), db_index=True)
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='issued_prescriptions',
        verbose_name=_('doctor'),
    )
    medicine = models.ForeignKey(
        'medicines.Medicine',
        on_delete=models.PROTECT,
        related_name='prescriptions',
        verbose_name=_('medicine'),
    )
    dosage = models.CharField(_('dosage'), max_length=255, blank=True)
    instructions = models.TextField(_('instructions'), blank=True)
    status = models.CharField(
        _('status'), max_length=10,
        choices=StatusChoices.choices,
        default=StatusChoices.PENDING,
        db_index=True,
    )
    issued_at = models.DateTimeField(_('issued at'), default=timezone.now, db_index=True)

    objects = PrescriptionQuerySet.as_manager()

    class Meta:
        verbose_name = _('prescription')
        verbose_name_plural = _('prescriptions')
        ordering = ['-issued_at']

    def __str__(self):
        return f'{self.medicine_id} for {self.patient_email} ({self.status})'
