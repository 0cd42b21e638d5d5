from django.contrib import admin
from django import forms
from .models import User, Student, Role


class StudentInline(admin.StackedInline):
    """Student profile shown on the owning user."""
    model = Student
    extra = 0
    fields = ['student_no', 'program', 'year_level', 'created_at']
    readonly_fields = ['created_at']
    autocomplete_fields = ['program']


class UserAdminForm(forms.ModelForm):
    """User form with an optional raw password field for creating accounts."""
    new_password = forms.CharField(
        required=False,
        widget=forms.PasswordInput,
        help_text="Leave blank to keep the current password."
    )

    class Meta:
        model = User
        fields = ['username', 'email', 'first_name', 'last_name', 'role', 'is_active', 'is_staff']


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin for User with role filter and student profile inline."""
    form = UserAdminForm
    inlines = [StudentInline]
    list_display = ['username', 'email', 'first_name', 'last_name', 'role', 'is_active', 'is_staff', 'created_at']
    list_filter = ['role', 'is_active', 'is_staff', 'created_at']
    search_fields = ['username', 'email', 'first_name', 'last_name']
    ordering = ['username']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Authentication', {
            'fields': ('username', 'new_password')
        }),
        ('Personal Information', {
            'fields': ('email', 'first_name', 'last_name')
        }),
        ('Role', {
            'fields': ('role',),
            'description': 'A user holds exactly one role. Students also need a profile below.'
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff'),
        }),
        ('Important Dates', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_inlines(self, request, obj):
        if obj is None or obj.role != Role.STUDENT:
            return []
        return super().get_inlines(request, obj)

    def save_model(self, request, obj, form, change):
        password = form.cleaned_data.get('new_password')
        if password:
            obj.set_password(password)
        elif not change:
            obj.set_unusable_password()
        super().save_model(request, obj, form, change)


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ['student_no', 'get_name', 'program', 'year_level', 'created_at']
    list_filter = ['program', 'year_level']
    search_fields = ['student_no', 'user__username', 'user__first_name', 'user__last_name', 'user__email']
    ordering = ['student_no']
    raw_id_fields = ['user']
    readonly_fields = ['created_at', 'updated_at']

    def get_name(self, obj):
        return obj.user.get_full_name()
    get_name.short_description = 'Name'
