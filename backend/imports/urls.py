# backend/imports/urls.py
from django.urls import path
from .views import UploadImportView, UploadJobListView

app_name = "imports"

urlpatterns = [
    path("jobs/", UploadJobListView.as_view(), name="imports-jobs"),
    path("upload/", UploadImportView.as_view(), name="imports-upload"),
]
