# enrollment/views.py
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiExample

from college_portal.exceptions import NotFoundError
from users.models import Student
from users.permissions import IsAdmissionOrRegistrar, IsStudentRole
from .models import Enrollment
from .recommendation import recommend_for_student, recommend_subjects
from .serializers import EnrollRequestSerializer, EnrollmentSerializer, RecommendationResultSerializer
from .services import enroll_student
import logging

logger = logging.getLogger(__name__)


class RecommendationView(APIView):
    """
    Subjects a student may take in the active term, each with its open sections.
    """
    permission_classes = [IsAdmissionOrRegistrar]

    @extend_schema(responses={200: RecommendationResultSerializer})
    def get(self, request, student_id):
        result = recommend_for_student(student_id)
        return Response(RecommendationResultSerializer(result).data)


class MyRecommendationView(APIView):
    """The signed-in student's own recommendations."""
    permission_classes = [IsStudentRole]

    @extend_schema(responses={200: RecommendationResultSerializer})
    def get(self, request):
        student = Student.objects.select_related("program").filter(user=request.user).first()
        if student is None:
            raise NotFoundError("Student profile not found.")
        return Response(RecommendationResultSerializer(recommend_subjects(student)).data)


class EnrollView(APIView):
    permission_classes = [IsAdmissionOrRegistrar]

    @extend_schema(
        request=EnrollRequestSerializer,
        responses={201: EnrollmentSerializer},
        examples=[OpenApiExample('Enroll', value={'studentId': 1, 'sectionIds': [1, 3]})],
    )
    def post(self, request):
        s = EnrollRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        enrollment = enroll_student(s.validated_data["studentId"], s.validated_data["sectionIds"])
        enrollment = (
            Enrollment.objects
            .select_related("term")
            .prefetch_related("subjects__section", "subjects__subject")
            .get(pk=enrollment.pk)
        )
        logger.info("%s enrolled student %s", request.user.username, enrollment.student_id)
        return Response({"enrollment": EnrollmentSerializer(enrollment).data}, status=status.HTTP_201_CREATED)
