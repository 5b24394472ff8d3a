"""
Feedback — URL Configuration

Routed under /api/feedback/.

@file feedback/urls.py
"""

from django.urls import path

from .views import PharmacyFeedbackView, SubmitFeedbackView

app_name = 'feedback'

urlpatterns = [
    path('submit', SubmitFeedbackView.as_view(), name='submit'),
    path('<uuid:pharmacy_id>', PharmacyFeedbackView.as_view(), name='pharmacy-feedback'),
]
