"""
Users — Views

Auth endpoints (register, login, refresh, me) and the admin account
management surface (list, search, status, verify doctor, delete).

@file users/views.py
"""

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.constants import UUID_LOOKUP_REGEX

from .models import User
from .permissions import AdminOnlyMixin
from .serializers import (
    ChangeStatusSerializer,
    LoginSerializer,
    LoginUserSerializer,
    RefreshSerializer,
    RegisterSerializer,
    UserReadSerializer,
    UserSearchResultSerializer,
)
from .services import AuthService, UserService


# ---------------------------------------------------------------------------
# Auth views
# ---------------------------------------------------------------------------

class RegisterView(APIView):
    """
    POST /api/auth/register — Create an account (and pharmacy for pharmacists).

    Admin is not a self-registrable role; earlier releases accepted
    `role: "Admin"` here. Admin accounts are created with createsuperuser.
    """
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_scope = 'anon'

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user, pharmacy = AuthService.register(
            full_name=data['full_name'],
            email=data['email'],
            password=data['password'],
            role=data['role'],
            phone_number=data.get('phone_number') or '',
            pharmacy_details=data.get('pharmacy_details'),
            request=request,
        )
        return Response(
            {
                'user': UserReadSerializer(user).data,
                'pharmacy_id': str(pharmacy.pk) if pharmacy else None,
                'message': AuthService.registration_message(user.role),
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """POST /api/auth/login — Authenticate and obtain a JWT pair."""
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_scope = 'anon'

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = AuthService.authenticate(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
            request=request,
        )
        return Response({
            **AuthService.issue_tokens(user),
            'user': LoginUserSerializer(user).data,
        })


class TokenRefreshAPIView(APIView):
    """
    POST /api/auth/refresh — Exchange a refresh token for a new access token.

    Answers with the same `token` key as login. Banned accounts get 403.
    """
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_scope = 'anon'

    def post(self, request):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return Response(AuthService.refresh_tokens(serializer.validated_data['refresh']))


class MeView(APIView):
    """GET /api/auth/me — Return the current authenticated user."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserReadSerializer(request.user).data)


# ---------------------------------------------------------------------------
# Admin: account management
# ---------------------------------------------------------------------------

class AdminUserViewSet(AdminOnlyMixin, mixins.ListModelMixin, mixins.DestroyModelMixin, viewsets.GenericViewSet):
    """
    /api/admin/users — list (newest first), search, change status, delete.
    """

    serializer_class = UserReadSerializer
    lookup_value_regex = UUID_LOOKUP_REGEX
    filterset_fields = ['role', 'status', 'verified']
    ordering_fields = ['created_at', 'full_name', 'email']
    ordering = ['-created_at']

    def get_queryset(self):
        return User.objects.select_related('pharmacy')

    def destroy(self, request, pk=None):
        counts = UserService.delete_user(user_id=pk, actor=request.user, request=request)
        return Response({'message': 'User deleted successfully.', 'deleted': counts})

    @action(detail=False, methods=['get'], url_path='search')
    def search(self, request):
        users = UserService.search(request.query_params.get('query', ''))
        return Response(UserSearchResultSerializer(users, many=True).data)

    @action(detail=True, methods=['put'], url_path='status')
    def change_status(self, request, pk=None):
        serializer = ChangeStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data['status']

        user = UserService.change_status(
            user_id=pk, new_status=new_status, actor=request.user, request=request,
        )
        label = 'reactivated' if new_status == 'active' else new_status
        return Response({
            'message': f'User {label} successfully.',
            'user': UserReadSerializer(user).data,
        })


class AdminVerifyDoctorView(AdminOnlyMixin, APIView):
    """PUT /api/admin/doctors/<id>/verify"""

    def put(self, request, pk):
        doctor = UserService.verify_doctor(doctor_id=pk, actor=request.user, request=request)
        return Response({
            'message': 'Doctor verified successfully. They can now issue prescriptions.',
            'user': UserReadSerializer(doctor).data,
        })
