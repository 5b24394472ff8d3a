"""
Medicines — Views

Catalogue endpoints, routed under /api/inventory/ next to the stock
endpoints they feed.

@file medicines/views.py
"""

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from users.models import User
from users.permissions import AccessGate

from .serializers import MedicineOptionSerializer, MedicineSerializer
from .services import MedicineService


class CatalogueView(APIView):
    """GET /api/inventory/all-medicines — every catalogue entry, by name."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response(MedicineOptionSerializer(MedicineService.catalogue(), many=True).data)


class InStockMedicinesView(APIView):
    """GET /api/inventory/medicines — prescribable medicines (in stock somewhere visible)."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response(MedicineOptionSerializer(MedicineService.in_stock(), many=True).data)


class AddMedicineView(APIView):
    """POST /api/inventory/add-medicine — pharmacist of a verified pharmacy."""

    permission_classes = [AccessGate]
    allowed_roles = [User.RoleChoices.PHARMACIST]
    restricted_action = 'add new medicines'

    def post(self, request):
        serializer = MedicineSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        medicine = MedicineService.add_medicine(
            pharmacist=request.user, request=request, **serializer.validated_data,
        )
        return Response(
            {
                'message': 'Medicine added successfully',
                'medicine': MedicineSerializer(medicine).data,
            },
            status=status.HTTP_201_CREATED,
        )
