"""
Pharmacies — Views

Admin pharmacy management (list, verify, status, delete) and the
pharmacist's view of feedback about their own pharmacy.

@file pharmacies/views.py
"""

from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from core.constants import UUID_LOOKUP_REGEX
from feedback.serializers import FeedbackReadSerializer
from feedback.services import FeedbackService
from users.authentication import BadRequestJWTAuthentication
from users.models import User
from users.permissions import AccessGate, AdminOnlyMixin
from users.serializers import ChangeStatusSerializer

from .models import Pharmacy
from .serializers import PharmacyReadSerializer, PharmacySummarySerializer
from .services import PharmacyService


class AdminPharmacyViewSet(AdminOnlyMixin, mixins.ListModelMixin, mixins.DestroyModelMixin, viewsets.GenericViewSet):
    """
    /api/admin/pharmacies — list, verify, change status, delete.

    Status changes cascade to the pharmacy's pharmacists; deletion
    cascades to everything the pharmacy owns.
    """

    serializer_class = PharmacyReadSerializer
    lookup_value_regex = UUID_LOOKUP_REGEX
    filterset_fields = ['verified', 'status']
    search_fields = ['name', 'address']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return Pharmacy.objects.all()

    def destroy(self, request, pk=None):
        counts = PharmacyService.delete_pharmacy(pharmacy_id=pk, actor=request.user, request=request)
        return Response({'message': 'Pharmacy deleted successfully.', 'deleted': counts})

    @action(detail=True, methods=['put'], url_path='verify')
    def verify(self, request, pk=None):
        pharmacy = PharmacyService.verify_pharmacy(pharmacy_id=pk, actor=request.user, request=request)
        return Response({
            'message': 'Pharmacy verified successfully. The pharmacist can now manage inventory and view feedback.',
            'pharmacy': PharmacyReadSerializer(pharmacy).data,
        })

    @action(detail=True, methods=['put'], url_path='status')
    def change_status(self, request, pk=None):
        serializer = ChangeStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data['status']

        pharmacy, affected = PharmacyService.change_status(
            pharmacy_id=pk, new_status=new_status, actor=request.user, request=request,
        )
        label = 'reactivated' if new_status == 'active' else new_status
        return Response({
            'message': f'Pharmacy {label} successfully.',
            'pharmacy': PharmacyReadSerializer(pharmacy).data,
            'pharmacists_updated': affected,
        })


class PharmacistFeedbackView(APIView):
    """GET /api/pharmacist/feedback — approved feedback about the caller's pharmacy."""

    authentication_classes = [BadRequestJWTAuthentication]
    permission_classes = [AccessGate]
    allowed_roles = [User.RoleChoices.PHARMACIST]
    restricted_action = 'view pharmacy feedback'

    def get(self, request):
        pharmacy = PharmacyService.pharmacy_of(request.user)
        summary = FeedbackService.summary_for(pharmacy)
        return Response({
            'pharmacy': PharmacySummarySerializer(pharmacy).data,
            'average_rating': summary['average_rating'],
            'total_reviews': summary['total_reviews'],
            'feedback': FeedbackReadSerializer(summary['feedback'], many=True).data,
        })
