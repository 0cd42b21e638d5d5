# backend/terms/urls.py
from django.urls import path
from .views import TermListCreateView, TermActivateView, ActiveTermView

app_name = "terms"

urlpatterns = [
    path("", TermListCreateView.as_view(), name="list"),
    path("active/", ActiveTermView.as_view(), name="active"),
    path("<int:pk>/activate/", TermActivateView.as_view(), name="activate"),
]
