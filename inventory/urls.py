"""
Inventory — URL Configuration

Routed under /api/inventory/ alongside the medicine catalogue.

@file inventory/urls.py
"""

from django.urls import path

from .views import InventorySearchView, InventoryUpdateView, MyInventoryView

app_name = 'inventory'

urlpatterns = [
    path('search', InventorySearchView.as_view(), name='search'),
    path('my-inventory', MyInventoryView.as_view(), name='my-inventory'),
    path('update', InventoryUpdateView.as_view(), name='update'),
]
