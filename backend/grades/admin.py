from django.contrib import admin
from .models import Grade
from .services import approve_grade


@admin.register(Grade)
class GradeAdmin(admin.ModelAdmin):
    list_display = ['enrollment_subject', 'get_value', 'approved', 'encoded_by', 'date_encoded', 'repeat_eligible_date']
    list_filter = ['approved', 'value', 'date_encoded']
    search_fields = [
        'enrollment_subject__enrollment__student__student_no',
        'enrollment_subject__subject__code',
        'encoded_by__username',
    ]
    ordering = ['-date_encoded']
    raw_id_fields = ['enrollment_subject', 'encoded_by']
    readonly_fields = ['date_encoded', 'repeat_eligible_date']
    actions = ['approve_selected']

    def get_value(self, obj):
        return obj.display
    get_value.short_description = 'Grade'

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description="Approve selected grades")
    def approve_selected(self, request, queryset):
        count = 0
        for grade in queryset.filter(approved=False):
            approve_grade(grade.pk, actor=request.user)
            count += 1
        self.message_user(request, f"Approved {count} grade(s).")
