"""
Medicines — URL Configuration

Catalogue endpoints, routed under /api/inventory/.

@file medicines/urls.py
"""

from django.urls import path

from .views import AddMedicineView, CatalogueView, InStockMedicinesView

app_name = 'medicines'

urlpatterns = [
    path('all-medicines', CatalogueView.as_view(), name='all-medicines'),
    path('medicines', InStockMedicinesView.as_view(), name='in-stock'),
    path('add-medicine', AddMedicineView.as_view(), name='add-medicine'),
]
