"""
Inventory — Views

Public availability search plus the pharmacist's own stock list and
upsert. Routed under /api/inventory/; bad tokens answer 401 here.

@file inventory/views.py
"""

from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from users.models import User
from users.permissions import AccessGate

from .serializers import AvailabilitySerializer, InventoryUpdateSerializer, PharmacyStockSerializer
from .services import InventoryService


class InventorySearchView(APIView):
    """GET /api/inventory/search?medName=..."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        entries = InventoryService.search(request.query_params.get('medName', ''))
        return Response(AvailabilitySerializer(entries, many=True).data)


class MyInventoryView(APIView):
    """GET /api/inventory/my-inventory"""

    permission_classes = [AccessGate]
    allowed_roles = [User.RoleChoices.PHARMACIST]
    restricted_action = 'access this'

    def get(self, request):
        entries = InventoryService.for_pharmacist(request.user)
        return Response(PharmacyStockSerializer(entries, many=True).data)


class InventoryUpdateView(APIView):
    """POST /api/inventory/update — insert or overwrite one stock row."""

    permission_classes = [AccessGate]
    allowed_roles = [User.RoleChoices.PHARMACIST]
    restricted_action = 'update inventory'

    def post(self, request):
        serializer = InventoryUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = InventoryService.upsert(pharmacist=request.user, request=request, **serializer.validated_data)
        return Response({
            'message': 'Stock updated successfully',
            'status': entry.status,
            'entry': PharmacyStockSerializer(entry).data,
        })
