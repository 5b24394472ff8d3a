"""
Users — Models

Custom User model with UUID PK, email-based auth, a single role per
account, the admin-granted ``verified`` flag and the shared lifecycle
status. Pharmacists are linked to the pharmacy they registered.

@file users/models.py
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.db.models.functions import Lower
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel, LifecycleStatus
from users.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin, BaseModel):
    """
    Custom user for MedLocator.

    Authentication is email-based (case-insensitive). ``verified`` is
    only meaningful for Doctors and Pharmacists; everyone else is
    verified at registration.
    """

    class RoleChoices(models.TextChoices):
        PATIENT = 'Patient', _('Patient')
        DOCTOR = 'Doctor', _('Doctor')
        PHARMACIST = 'Pharmacist', _('Pharmacist')
        RECEPTIONIST = 'Receptionist', _('Receptionist')
        ADMIN = 'Admin', _('Admin')

    # Roles whose professional actions wait for admin verification
    ROLES_REQUIRING_VERIFICATION = frozenset({RoleChoices.DOCTOR, RoleChoices.PHARMACIST})

    full_name = models.CharField(_('full name'), max_length=150)
    email = models.EmailField(_('email'), unique=True)
    phone_number = models.CharField(_('phone number'), max_length=20, blank=True)

    role = models.CharField(
        _('role'), max_length=15,
        choices=RoleChoices.choices, default=RoleChoices.PATIENT,
        db_index=True,
    )
    verified = models.BooleanField(_('verified'), default=False)
    status = models.CharField(
        _('status'), max_length=10,
        choices=LifecycleStatus.choices, default=LifecycleStatus.ACTIVE,
        db_index=True,
    )

    pharmacy = models.ForeignKey(
        'pharmacies.Pharmacy',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='members',
        verbose_name=_('pharmacy'),
    )

    is_staff = models.BooleanField(_('staff status'), default=False)
    is_active = models.BooleanField(_('active'), default=True)
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['full_name']

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(Lower('email'), name='unique_user_email_ci'),
        ]
        indexes = [
            models.Index(fields=['role', 'status']),
        ]

    def __str__(self):
        return f'{self.full_name} <{self.email}>'

    def get_full_name(self):
        return self.full_name or self.email

    def get_short_name(self):
        return self.full_name.split(' ')[0] if self.full_name else self.email

    @property
    def is_pharmacist(self) -> bool:
        return self.role == self.RoleChoices.PHARMACIST
