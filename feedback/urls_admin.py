"""
Feedback — Admin URL Configuration

Moderation queue routed under /api/admin/.

@file feedback/urls_admin.py
"""

from rest_framework.routers import SimpleRouter

from .views import AdminFeedbackViewSet

router = SimpleRouter(trailing_slash=False)
router.register('feedback', AdminFeedbackViewSet, basename='admin-feedback')

urlpatterns = router.urls
