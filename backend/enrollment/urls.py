# backend/enrollment/urls.py
from django.urls import path
from .views import RecommendationView, MyRecommendationView, EnrollView

app_name = "enrollment"

urlpatterns = [
    path("recommendations/me/", MyRecommendationView.as_view(), name="my_recommendations"),
    path("recommendations/<int:student_id>/", RecommendationView.as_view(), name="recommendations"),
    path("enroll/", EnrollView.as_view(), name="enroll"),
]
