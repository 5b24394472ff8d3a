"""
Prescriptions — Views

Doctor, patient and pharmacist endpoints under /api/prescriptions/
(bad tokens answer 401), and the reception desk under /api/reception/
(bad tokens answer 400).

@file prescriptions/views.py
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from users.authentication import BadRequestJWTAuthentication
from users.models import User
from users.permissions import AccessGate

from .serializers import (
    IssuePrescriptionSerializer,
    OutstandingPrescriptionSerializer,
    PatientContactSerializer,
    PatientPrescriptionSerializer,
    PrescriptionSerializer,
    RecentPrescriptionSerializer,
)
from .services import ISSUE_RULES, OWNER_ROLES, PrescriptionService


# ---------------------------------------------------------------------------
# /api/prescriptions/
# ---------------------------------------------------------------------------

class IssuePrescriptionView(APIView):
    permission_classes = [AccessGate]
    allowed_roles = ISSUE_RULES['roles']
    blocked_statuses = ISSUE_RULES['blocked_statuses']
    require_verified = ISSUE_RULES['require_verified']
    restricted_action = ISSUE_RULES['action']

    def post(self, request):
        serializer = IssuePrescriptionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        prescription = PrescriptionService.issue(doctor=request.user, request=request, **serializer.validated_data)
        return Response(PrescriptionSerializer(prescription).data, status=status.HTTP_201_CREATED)


class MyPrescriptionsView(APIView):
    """GET /api/prescriptions/my-prescriptions/<email>"""

    permission_classes = [AccessGate]
    allowed_roles = [User.RoleChoices.PATIENT, User.RoleChoices.ADMIN]
    restricted_action = 'view prescriptions'

    def get(self, request, email):
        prescriptions = PrescriptionService.for_patient_email(user=request.user, email=email)
        return Response(PrescriptionSerializer(prescriptions, many=True).data)


class PharmacistPatientLookupView(APIView):
    """GET /api/prescriptions/patient/<email>"""

    permission_classes = [AccessGate]
    allowed_roles = [User.RoleChoices.PHARMACIST]
    restricted_action = 'access patient prescriptions'

    def get(self, request, email):
        patient, prescriptions = PrescriptionService.patient_records_for_pharmacist(email)
        return Response({
            'patient': PatientContactSerializer(patient).data,
            'prescriptions': PatientPrescriptionSerializer(prescriptions, many=True).data,
        })


class FulfillPrescriptionView(APIView):
    permission_classes = [AccessGate]
    allowed_roles = OWNER_ROLES
    restricted_action = 'fulfill prescriptions'

    def put(self, request, pk):
        prescription = PrescriptionService.fulfill(prescription_id=pk, user=request.user, request=request)
        return Response({
            'message': 'Prescription marked as fulfilled',
            'prescription': PrescriptionSerializer(prescription).data,
        })


class PrescriptionDetailView(APIView):
    permission_classes = [AccessGate]
    allowed_roles = OWNER_ROLES
    restricted_action = 'delete prescriptions'

    def delete(self, request, pk):
        PrescriptionService.delete(prescription_id=pk, user=request.user, request=request)
        return Response({'message': 'Prescription deleted successfully'})


# ---------------------------------------------------------------------------
# /api/reception/
# ---------------------------------------------------------------------------

class ReceptionMixin:
    authentication_classes = [BadRequestJWTAuthentication]
    permission_classes = [AccessGate]
    allowed_roles = [User.RoleChoices.RECEPTIONIST, User.RoleChoices.ADMIN]
    restricted_action = 'use the reception desk'


class RecentPrescriptionsView(ReceptionMixin, APIView):
    """GET /api/reception/recent-prescriptions?limit=50"""

    def get(self, request):
        prescriptions = PrescriptionService.recent(request.query_params.get('limit'))
        return Response(RecentPrescriptionSerializer(prescriptions, many=True).data)


class PatientRecordsView(ReceptionMixin, APIView):
    """GET /api/reception/patient-records/<email>"""

    def get(self, request, email):
        patient, prescriptions = PrescriptionService.patient_records(email)
        return Response({
            'full_name': patient.full_name,
            'email': patient.email,
            'phone': patient.phone_number,
            'prescriptions': OutstandingPrescriptionSerializer(prescriptions, many=True).data,
        })
