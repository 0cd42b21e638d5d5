from django.contrib import admin
from .models import Program, Subject, ProgramSubject, Section


class ProgramSubjectInline(admin.TabularInline):
    model = ProgramSubject
    extra = 0
    fields = ['subject', 'recommended_year', 'recommended_semester']
    autocomplete_fields = ['subject']


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    inlines = [ProgramSubjectInline]
    list_display = ['code', 'name', 'department', 'created_at']
    list_filter = ['department', 'created_at']
    search_fields = ['code', 'name']
    ordering = ['code']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Subject)
class SubjectAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'units', 'subject_type', 'prerequisite', 'created_at']
    list_filter = ['subject_type', 'units', 'created_at']
    search_fields = ['code', 'name']
    ordering = ['code']
    readonly_fields = ['created_at', 'updated_at']
    autocomplete_fields = ['prerequisite']


@admin.register(Section)
class SectionAdmin(admin.ModelAdmin):
    list_display = ['name', 'subject', 'professor', 'max_slots', 'academic_year', 'semester', 'status']
    list_filter = ['status', 'academic_year', 'semester', 'created_at']
    search_fields = ['name', 'subject__code', 'subject__name', 'professor__username']
    ordering = ['-academic_year', 'semester', 'name']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'subject', 'professor', 'status')
        }),
        ('Scheduling', {
            'fields': ('academic_year', 'semester', 'schedule', 'max_slots')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
