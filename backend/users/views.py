# backend/users/views.py
from django.db.models import Q
from rest_framework import status, generics
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.decorators import api_view, permission_classes
from rest_framework_simplejwt.tokens import RefreshToken
from django.contrib.auth import authenticate
from drf_spectacular.utils import extend_schema, OpenApiExample
from .models import User, Student
from .serializers import (
    UserSerializer, StudentSerializer, StudentCreateSerializer, LoginSerializer,
)
from .permissions import IsAdmissionRole, IsAdmissionOrRegistrar
import logging

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    from django.contrib.auth import logout as django_logout
    django_logout(request)
    resp = Response(status=204)
    resp.delete_cookie('access'); resp.delete_cookie('refresh')
    return resp


class LoginView(generics.CreateAPIView):
    permission_classes = [AllowAny]
    serializer_class = LoginSerializer

    @extend_schema(
        request=LoginSerializer,
        responses={200: dict},
        examples=[OpenApiExample('Login', value={'username': 'registrar', 'password': 'ChangeMe123!'})],
    )
    def create(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        user = authenticate(
            request,
            username=s.validated_data["username"],
            password=s.validated_data["password"],
        )
        if not user:
            logger.warning("Failed login for %s", s.validated_data["username"])
            return Response({"error": "Invalid credentials"}, status=status.HTTP_401_UNAUTHORIZED)

        refresh = RefreshToken.for_user(user)
        return Response({
            "user": UserSerializer(user).data,
            "tokens": {
                "access": str(refresh.access_token),
                "refresh": str(refresh),
            },
        }, status=status.HTTP_200_OK)


class MeView(APIView):
    """Current user, plus the student profile when there is one."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        data = {"user": UserSerializer(request.user).data, "student": None}
        student = Student.objects.select_related("program").filter(user=request.user).first()
        if student:
            data["student"] = StudentSerializer(student).data
        return Response(data, status=status.HTTP_200_OK)


class StudentListCreateView(APIView):
    """
    GET  ?q=  search students by number, name or email (admission/registrar)
    POST      create a student user + profile (admission)
    """

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAdmissionRole()]
        return [IsAdmissionOrRegistrar()]

    def get(self, request):
        q = (request.query_params.get("q") or "").strip()
        qs = Student.objects.select_related("user", "program")
        if q:
            qs = qs.filter(
                Q(student_no__icontains=q) |
                Q(user__first_name__icontains=q) |
                Q(user__last_name__icontains=q) |
                Q(user__email__icontains=q)
            )
        return Response({"students": StudentSerializer(qs[:50], many=True).data}, status=200)

    @extend_schema(request=StudentCreateSerializer, responses={201: StudentSerializer})
    def post(self, request):
        s = StudentCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        student = s.save()
        logger.info("Admission %s created student %s", request.user.username, student.student_no)
        return Response({"student": StudentSerializer(student).data}, status=status.HTTP_201_CREATED)


class StudentDetailView(generics.RetrieveAPIView):
    queryset = Student.objects.select_related("user", "program")
    serializer_class = StudentSerializer
    permission_classes = [IsAdmissionOrRegistrar]


class UserSearchView(APIView):
    permission_classes = [IsAdmissionOrRegistrar]

    def get(self, request):
        q = (request.query_params.get("q") or "").strip()
        if not q:
            return Response([], status=200)

        qs = User.objects.all()
        if "@" in q:
            qs = qs.filter(email__icontains=q)
        else:
            qs = qs.filter(
                Q(username__icontains=q) |
                Q(first_name__icontains=q) |
                Q(last_name__icontains=q)
            )
        role = request.query_params.get("role")
        if role:
            qs = qs.filter(role=role.upper())
        data = [{
            "id": u.id,
            "name": u.get_full_name() or u.username,
            "username": u.username,
            "email": u.email,
            "role": u.role,
        } for u in qs.order_by("username")[:10]]
        return Response(data, status=200)
