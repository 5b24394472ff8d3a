"""
Pharmacies — Models

A pharmacy registered by its pharmacist. Admin verification makes it
visible to patients; its lifecycle status follows the shared
active / suspended / banned model.

@file pharmacies/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel, LifecycleStatus


class PharmacyQuerySet(models.QuerySet):

    def visible_to_patients(self):
        """Verified and active: the only pharmacies patients can search."""
        return self.filter(verified=True, status=LifecycleStatus.ACTIVE)


class Pharmacy(BaseModel):
    """
    A retail pharmacy.

    Created unverified during pharmacist registration. Coordinates come
    from the map picker on the registration form.
    """

    name = models.CharField(_('name'), max_length=255, unique=True)
    address = models.CharField(_('address'), max_length=500)
    latitude = models.DecimalField(
        _('latitude'), max_digits=9, decimal_places=6,
        null=True, blank=True,
    )
    longitude = models.DecimalField(
        _('longitude'), max_digits=9, decimal_places=6,
        null=True, blank=True,
    )
    contact_number = models.CharField(_('contact number'), max_length=20, blank=True)

    verified = models.BooleanField(_('verified'), default=False, db_index=True)
    status = models.CharField(
        _('status'), max_length=10,
        choices=LifecycleStatus.choices,
        default=LifecycleStatus.ACTIVE,
        db_index=True,
    )

    objects = PharmacyQuerySet.as_manager()

    class Meta:
        verbose_name = _('pharmacy')
        verbose_name_plural = _('pharmacies')
        ordering = ['name']
        indexes = [
            models.Index(fields=['verified', 'status']),
        ]

    def __str__(self):
        return self.name

    @property
    def is_visible_to_patients(self) -> bool:
        return self.verified and self.status == LifecycleStatus.ACTIVE
