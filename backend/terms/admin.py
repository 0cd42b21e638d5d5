from django.contrib import admin, messages
from .models import AcademicTerm
from .services import activate_term


@admin.register(AcademicTerm)
class AcademicTermAdmin(admin.ModelAdmin):
    list_display = ["school_year", "semester", "is_active", "created_at"]
    list_filter = ["semester", "is_active"]
    readonly_fields = ["is_active", "created_at"]
    actions = ["make_active"]

    @admin.action(description="Make selected term the active term")
    def make_active(self, request, queryset):
        if queryset.count() != 1:
            self.message_user(request, "Select exactly one term.", level=messages.ERROR)
            return
        term = activate_term(queryset.first().pk)
        self.message_user(request, f"{term} is now active.", level=messages.SUCCESS)
