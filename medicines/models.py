"""
Medicines — Models

Shared medicine catalogue. Any verified pharmacy's pharmacist may add
an entry; names are unique regardless of case.

@file medicines/models.py
"""

from django.db import models
from django.db.models.functions import Lower
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel


class Medicine(BaseModel):
    """A catalogue entry referenced by inventory rows and prescriptions."""

    name = models.CharField(_('name'), max_length=255)
    description = models.TextField(_('description'), blank=True)
    category = models.CharField(_('category'), max_length=100, blank=True, db_index=True)

    class Meta:
        verbose_name = _('medicine')
        verbose_name_plural = _('medicines')
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(Lower('name'), name='unique_medicine_name_ci'),
        ]

    def __str__(self):
        return self.name
