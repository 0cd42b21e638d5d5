# backend/college_portal/urls.py
from django.contrib import admin
from django.urls import include, path
from django.http import JsonResponse
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

def health_view(request):
    return JsonResponse({"status": "ok"})

urlpatterns = [
    # HEALTH
    path("health/", health_view, name="health"),

    # DJANGO ADMIN
    path("admin/", admin.site.urls),

    # API DOCS
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),

    # Accounts / Users
    path("api/users/", include(("users.urls", "accounts"), namespace="accounts")),

    # APP APIs
    path("api/", include([
        path("terms/", include("terms.urls")),
        path("curriculum/", include("curriculum.urls")),
        path("enrollment/", include("enrollment.urls")),
        path("grades/", include("grades.urls")),
        path("imports/", include("imports.urls")),
    ])),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
