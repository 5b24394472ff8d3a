"""
Feedback — Views

Patient submission, the public per-pharmacy listing, and the admin
moderation queue.

@file feedback/views.py
"""

from rest_framework import mixins, status, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.constants import UUID_LOOKUP_REGEX
from users.authentication import BadRequestJWTAuthentication
from users.permissions import AccessGate, AdminOnlyMixin

from .serializers import (
    FeedbackModerationSerializer,
    FeedbackReadSerializer,
    FeedbackSubmitSerializer,
    ModerateFeedbackSerializer,
)
from .services import SUBMIT_RULES, FeedbackService


class SubmitFeedbackView(APIView):
    """POST /api/feedback/submit — active patients only; lands in moderation."""

    authentication_classes = [BadRequestJWTAuthentication]
    permission_classes = [AccessGate]
    allowed_roles = SUBMIT_RULES['roles']
    blocked_statuses = SUBMIT_RULES['blocked_statuses']
    restricted_action = SUBMIT_RULES['action']

    def post(self, request):
        serializer = FeedbackSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        feedback = FeedbackService.submit(patient=request.user, **serializer.validated_data)
        return Response(
            {
                'message': 'Feedback submitted for moderation',
                'feedback': FeedbackReadSerializer(feedback).data,
            },
            status=status.HTTP_201_CREATED,
        )


class PharmacyFeedbackView(APIView):
    """GET /api/feedback/<pharmacy_id> — approved feedback, newest first."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request, pharmacy_id):
        feedback = FeedbackService.approved_for(pharmacy_id)
        return Response(FeedbackReadSerializer(feedback, many=True).data)


class AdminFeedbackViewSet(AdminOnlyMixin, mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    /api/admin/feedback — pending queue; PUT /api/admin/feedback/<id>
    approves or removes one entry.
    """

    serializer_class = FeedbackModerationSerializer
    lookup_value_regex = UUID_LOOKUP_REGEX
    pagination_class = None

    def get_queryset(self):
        return FeedbackService.pending()

    def update(self, request, pk=None):
        serializer = ModerateFeedbackSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data['status']
        feedback = FeedbackService.moderate(
            feedback_id=pk, status=new_status, actor=request.user, request=request,
        )
        return Response({
            'message': f'Feedback {new_status}',
            'feedback': FeedbackModerationSerializer(feedback).data,
        })
