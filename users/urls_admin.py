"""
Users — Admin URL Configuration

Account management routed under /api/admin/.

@file users/urls_admin.py
"""

from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import AdminUserViewSet, AdminVerifyDoctorView

router = SimpleRouter(trailing_slash=False)
router.register('users', AdminUserViewSet, basename='admin-user')

urlpatterns = [
    path('doctors/<uuid:pk>/verify', AdminVerifyDoctorView.as_view(), name='admin-doctor-verify'),
] + router.urls
