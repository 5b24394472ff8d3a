"""
Pharmacies — Pharmacist URL Configuration

Routed under /api/pharmacist/.

@file pharmacies/urls.py
"""

from django.urls import path

from .views import PharmacistFeedbackView

app_name = 'pharmacist'

urlpatterns = [
    path('feedback', PharmacistFeedbackView.as_view(), name='feedback'),
]
