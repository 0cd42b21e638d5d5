from django.apps import AppConfig
from django.contrib import admin


class CollegePortalConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "college_portal"
    verbose_name = "College Portal"

    def ready(self) -> None:
        """Configure admin site when the app is ready"""
        from django.conf import settings

        # Set admin site titles
        admin.site.site_header = getattr(
            settings, "ADMIN_SITE_HEADER", "College Portal Administration"
        )
        admin.site.site_title = getattr(
            settings, "ADMIN_SITE_TITLE", "College Portal Admin"
        )
        admin.site.index_title = getattr(
            settings, "ADMIN_INDEX_TITLE", "Registrar and Records Administration"
        )
