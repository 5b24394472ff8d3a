"""
MedLocator — Root URL Configuration

All API endpoints live under /api/. The catalogue and the stock
endpoints share the /api/inventory/ prefix; the admin console combines
the admin routes of the users, pharmacies and feedback apps.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse

from feedback.urls_admin import urlpatterns as feedback_admin_urls
from pharmacies.urls_admin import urlpatterns as pharmacy_admin_urls
from users.urls_admin import urlpatterns as user_admin_urls

admin.site.site_header = 'MedLocator Administration'
admin.site.site_title = 'MedLocator'
admin.site.index_title = 'Medicine Locator'


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """MedLocator API — endpoint directory."""
    return Response({
        'auth': {
            'register': reverse('auth:register', request=request, format=format),
            'login': reverse('auth:login', request=request, format=format),
            'refresh': reverse('auth:token-refresh', request=request, format=format),
            'me': reverse('auth:me', request=request, format=format),
        },
        'inventory': {
            'search': reverse('inventory:search', request=request, format=format),
            'all_medicines': reverse('medicines:all-medicines', request=request, format=format),
            'medicines': reverse('medicines:in-stock', request=request, format=format),
        },
        'prescriptions': {
            'issue': reverse('prescriptions:issue', request=request, format=format),
        },
        'reception': {
            'recent_prescriptions': reverse('reception:recent-prescriptions', request=request, format=format),
        },
        'feedback': {
            'submit': reverse('feedback:submit', request=request, format=format),
        },
        'pharmacist': {
            'feedback': reverse('pharmacist:feedback', request=request, format=format),
        },
        'admin': {
            'pharmacies': reverse('admin-api:admin-pharmacy-list', request=request, format=format),
            'users': reverse('admin-api:admin-user-list', request=request, format=format),
            'feedback': reverse('admin-api:admin-feedback-list', request=request, format=format),
        },
    })


admin_api_patterns = user_admin_urls + pharmacy_admin_urls + feedback_admin_urls

api_patterns = [
    path('', api_root, name='api-root'),
    path('auth/', include('users.urls', namespace='auth')),
    path('inventory/', include('medicines.urls', namespace='medicines')),
    path('inventory/', include('inventory.urls', namespace='inventory')),
    path('prescriptions/', include('prescriptions.urls', namespace='prescriptions')),
    path('reception/', include('prescriptions.urls_reception', namespace='reception')),
    path('feedback/', include('feedback.urls', namespace='feedback')),
    path('pharmacist/', include('pharmacies.urls', namespace='pharmacist')),
    path('admin/', include((admin_api_patterns, 'admin-api'))),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api-auth/', include('rest_framework.urls', namespace='rest_framework')),

    path('api/', include(api_patterns)),
]
