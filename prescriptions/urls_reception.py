"""
Prescriptions — Reception URL Configuration

Routed under /api/reception/.

@file prescriptions/urls_reception.py
"""

from django.urls import path

from .views import PatientRecordsView, RecentPrescriptionsView

app_name = 'reception'

urlpatterns = [
    path('recent-prescriptions', RecentPrescriptionsView.as_view(), name='recent-prescriptions'),
    path('patient-records/<str:email>', PatientRecordsView.as_view(), name='patient-records'),
]
