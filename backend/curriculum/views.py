# curriculum/views.py
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiExample

from users.permissions import IsRegistrarRole, IsRegistrarOrDean, DeanReadOnly
from .models import Program, Subject, ProgramSubject, Section
from .serializers import (
    ProgramSerializer, ProgramDetailSerializer, SubjectSerializer,
    ProgramSubjectSerializer, SectionSerializer,
)
import logging

logger = logging.getLogger(__name__)


class ProtectedDestroyMixin:
    """Answer 409 instead of 500 when historical rows still reference the object."""

    def destroy(self, request, *args, **kwargs):
        try:
            return super().destroy(request, *args, **kwargs)
        except ProtectedError:
            return Response(
                {"detail": "This record is referenced by enrollments or sections and cannot be deleted."},
                status=status.HTTP_409_CONFLICT,
            )


class ProgramListCreateView(generics.ListCreateAPIView):
    """List programs (registrar/dean) or create new ones (registrar)."""
    queryset = Program.objects.all()
    serializer_class = ProgramSerializer
    permission_classes = [IsRegistrarOrDean, DeanReadOnly]


class ProgramDetailView(ProtectedDestroyMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Program.objects.prefetch_related("program_subjects__subject")
    permission_classes = [IsRegistrarOrDean, DeanReadOnly]

    def get_serializer_class(self):
        if self.request.method == "GET":
            return ProgramDetailSerializer
        return ProgramSerializer


class SubjectListCreateView(generics.ListCreateAPIView):
    queryset = Subject.objects.select_related("prerequisite")
    serializer_class = SubjectSerializer
    permission_classes = [IsRegistrarOrDean, DeanReadOnly]


class SubjectDetailView(ProtectedDestroyMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Subject.objects.select_related("prerequisite")
    serializer_class = SubjectSerializer
    permission_classes = [IsRegistrarOrDean, DeanReadOnly]


class ProgramSubjectView(APIView):
    """
    POST   map a subject into a program's curriculum
    DELETE remove the mapping
    """
    permission_classes = [IsRegistrarRole]

    @extend_schema(
        request=ProgramSubjectSerializer,
        responses={201: ProgramSubjectSerializer},
        examples=[OpenApiExample('Mapping', value={'recommended_year': 1, 'recommended_semester': 'FIRST'}, request_only=True)],
    )
    def post(self, request, program_id, subject_id):
        program = get_object_or_404(Program, pk=program_id)
        subject = get_object_or_404(Subject, pk=subject_id)
        s = ProgramSubjectSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        if ProgramSubject.objects.filter(program=program, subject=subject).exists():
            return Response({"detail": f"{subject.code} is already mapped to {program.code}."}, status=400)
        mapping = s.save(program=program, subject=subject)
        logger.info("Mapped %s into %s", subject.code, program.code)
        return Response({"mapping": ProgramSubjectSerializer(mapping).data}, status=status.HTTP_201_CREATED)

    def delete(self, request, program_id, subject_id):
        mapping = get_object_or_404(ProgramSubject, program_id=program_id, subject_id=subject_id)
        mapping.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class SectionListCreateView(generics.ListCreateAPIView):
    """List sections (optionally ?semester=&academic_year=&subject=) or create one."""
    serializer_class = SectionSerializer
    permission_classes = [IsRegistrarOrDean, DeanReadOnly]

    def get_queryset(self):
        qs = Section.objects.select_related("subject", "professor")
        semester = self.request.query_params.get("semester")
        year = self.request.query_params.get("academic_year")
        subject = self.request.query_params.get("subject")
        if semester:
            qs = qs.filter(semester=semester.upper())
        if year:
            qs = qs.filter(academic_year=year)
        if subject:
            qs = qs.filter(subject_id=subject)
        return qs


class SectionDetailView(ProtectedDestroyMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Section.objects.select_related("subject", "professor")
    serializer_class = SectionSerializer
    permission_classes = [IsRegistrarOrDean, DeanReadOnly]
