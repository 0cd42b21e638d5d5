# grades/views.py
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiExample

from college_portal.exceptions import AuthorizationError, NotFoundError
from curriculum.models import Section
from enrollment.models import EnrollmentSubject
from terms.services import get_active_term
from users.models import Student
from users.permissions import IsProfessorRole, IsRegistrarRole, IsRegistrarOrDean, IsStudentRole
from .serializers import (
    EncodeGradesSerializer, GradeSerializer, PendingGradeSerializer,
    ProfessorSectionSerializer, RosterEntrySerializer, serialize_grade_report,
)
from .services import approve_grade, encode_grades, pending_grades, student_grade_report
import logging

logger = logging.getLogger(__name__)


class ProfessorSectionListView(APIView):
    """Sections handled by the signed-in professor."""
    permission_classes = [IsProfessorRole]

    def get(self, request):
        qs = Section.objects.filter(professor=request.user).select_related("subject")
        term = get_active_term()
        if request.query_params.get("active") and term:
            qs = qs.filter(semester=term.semester, academic_year=term.school_year)
        return Response({"sections": ProfessorSectionSerializer(qs, many=True).data})


class SectionRosterView(APIView):
    """
    Students in a section for the active term, with their current grade.
    """
    permission_classes = [IsProfessorRole]

    def get(self, request, section_id):
        section = get_object_or_404(Section, pk=section_id)
        if section.professor_id != request.user.pk and not request.user.is_staff:
            raise AuthorizationError("You are not assigned to this section.")
        qs = (
            EnrollmentSubject.objects
            .filter(section=section)
            .select_related("subject", "enrollment__student__user", "grade")
            .order_by("enrollment__student__user__last_name", "id")
        )
        term = get_active_term()
        if term:
            qs = qs.filter(enrollment__term=term)
        return Response({"roster": RosterEntrySerializer(qs, many=True).data})


class EncodeGradesView(APIView):
    """
    POST {grades: [{enrollmentSubjectId, value, remarks?}]}
    All rows are validated first and saved together, or none are.
    """
    permission_classes = [IsProfessorRole]

    @extend_schema(
        request=EncodeGradesSerializer,
        responses={200: dict},
        examples=[OpenApiExample('Encode', value={'grades': [{'enrollmentSubjectId': 1, 'value': '1.75', 'remarks': ''}]})],
    )
    def post(self, request, section_id):
        s = EncodeGradesSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        encode_grades(section_id, request.user, s.to_rows())
        return Response({"message": "Grades submitted for approval."}, status=status.HTTP_200_OK)


class PendingGradesView(APIView):
    permission_classes = [IsRegistrarRole]

    def get(self, request):
        return Response({"pending": PendingGradeSerializer(pending_grades(), many=True).data})


class ApproveGradeView(APIView):
    permission_classes = [IsRegistrarRole]

    @extend_schema(request=None, responses={200: GradeSerializer})
    def post(self, request, grade_id):
        grade = approve_grade(grade_id, actor=request.user)
        return Response({"grade": GradeSerializer(grade).data})


class MyGradesView(APIView):
    """The signed-in student's enrollments, grades and GPA (approved grades only)."""
    permission_classes = [IsStudentRole]

    def get(self, request):
        student = Student.objects.filter(user=request.user).first()
        if student is None:
            raise NotFoundError("Student profile not found.")
        return Response(serialize_grade_report(student_grade_report(student)))


class StudentGradesView(APIView):
    """Registrar/dean view of any student's grade report."""
    permission_classes = [IsRegistrarOrDean]

    def get(self, request, student_id):
        student = get_object_or_404(Student, pk=student_id)
        return Response(serialize_grade_report(student_grade_report(student)))
