"""
Pharmacies — Admin URL Configuration

Pharmacy management routed under /api/admin/.

@file pharmacies/urls_admin.py
"""

from rest_framework.routers import SimpleRouter

from .views import AdminPharmacyViewSet

router = SimpleRouter(trailing_slash=False)
router.register('pharmacies', AdminPharmacyViewSet, basename='admin-pharmacy')

urlpatterns = router.urls
