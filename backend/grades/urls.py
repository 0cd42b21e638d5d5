# backend/grades/urls.py
from django.urls import path
from .views import (
    ProfessorSectionListView, SectionRosterView, EncodeGradesView,
    PendingGradesView, ApproveGradeView, MyGradesView, StudentGradesView,
)

app_name = "grades"

urlpatterns = [
    # professor
    path("professor/sections/", ProfessorSectionListView.as_view(), name="professor_sections"),
    path("professor/sections/<int:section_id>/roster/", SectionRosterView.as_view(), name="roster"),
    path("professor/sections/<int:section_id>/grades/", EncodeGradesView.as_view(), name="encode"),

    # registrar
    path("registrar/pending/", PendingGradesView.as_view(), name="pending"),
    path("registrar/<int:grade_id>/approve/", ApproveGradeView.as_view(), name="approve"),

    # students
    path("student/me/", MyGradesView.as_view(), name="my_grades"),
    path("students/<int:student_id>/", StudentGradesView.as_view(), name="student_grades"),
]
