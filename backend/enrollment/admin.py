from django.contrib import admin
from .models import Enrollment, EnrollmentSubject


class EnrollmentSubjectInline(admin.TabularInline):
    model = EnrollmentSubject
    extra = 0
    fields = ['subject', 'section', 'units']
    readonly_fields = ['units']
    raw_id_fields = ['section', 'subject']


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    inlines = [EnrollmentSubjectInline]
    list_display = ['student', 'term', 'status', 'total_units', 'date_enrolled']
    list_filter = ['status', 'term']
    search_fields = ['student__student_no', 'student__user__first_name', 'student__user__last_name']
    ordering = ['-date_enrolled']
    raw_id_fields = ['student']
    readonly_fields = ['date_enrolled', 'total_units']
