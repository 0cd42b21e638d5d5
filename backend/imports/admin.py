from django.contrib import admin
from .models import UploadJob


@admin.register(UploadJob)
class UploadJobAdmin(admin.ModelAdmin):
    list_display = ("id", "original_name", "import_type", "ok", "rows_ok", "rows_error", "created_by", "started_at")
    list_filter = ("import_type", "ok")
    search_fields = ("original_name", "created_by__username")
    readonly_fields = [f.name for f in UploadJob._meta.fields]

    # jobs are only created by uploads
    def has_add_permission(self, request):
        return False
