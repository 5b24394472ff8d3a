"""
Users — Auth URL Configuration

Endpoints: register, login, refresh, me.

@file users/urls.py
"""

from django.urls import path

from .views import LoginView, MeView, RegisterView, TokenRefreshAPIView

app_name = 'auth'

urlpatterns = [
    path('register', RegisterView.as_view(), name='register'),
    path('login', LoginView.as_view(), name='login'),
    path('refresh', TokenRefreshAPIView.as_view(), name='token-refresh'),
    path('me', MeView.as_view(), name='me'),
]
