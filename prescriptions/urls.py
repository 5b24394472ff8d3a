"""
Prescriptions — URL Configuration

Routed under /api/prescriptions/.

@file prescriptions/urls.py
"""

from django.urls import path

from .views import (
    FulfillPrescriptionView,
    IssuePrescriptionView,
    MyPrescriptionsView,
    PharmacistPatientLookupView,
    PrescriptionDetailView,
)

app_name = 'prescriptions'

urlpatterns = [
    path('issue', IssuePrescriptionView.as_view(), name='issue'),
    path('my-prescriptions/<str:email>', MyPrescriptionsView.as_view(), name='my-prescriptions'),
    path('patient/<str:email>', PharmacistPatientLookupView.as_view(), name='patient'),
    path('<uuid:pk>/fulfill', FulfillPrescriptionView.as_view(), name='fulfill'),
    path('<uuid:pk>', PrescriptionDetailView.as_view(), name='detail'),
]
