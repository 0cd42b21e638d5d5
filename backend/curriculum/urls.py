# curriculum/urls.py
from django.urls import path
from . import views

app_name = "curriculum"

urlpatterns = [
    path("programs/", views.ProgramListCreateView.as_view(), name="program_list"),
    path("programs/<int:pk>/", views.ProgramDetailView.as_view(), name="program_detail"),
    path("programs/<int:program_id>/subjects/<int:subject_id>/", views.ProgramSubjectView.as_view(), name="program_subject"),
    path("subjects/", views.SubjectListCreateView.as_view(), name="subject_list"),
    path("subjects/<int:pk>/", views.SubjectDetailView.as_view(), name="subject_detail"),
    path("sections/", views.SectionListCreateView.as_view(), name="section_list"),
    path("sections/<int:pk>/", views.SectionDetailView.as_view(), name="section_detail"),
]
