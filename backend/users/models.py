# backend/users/models.py
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.db import transaction
from rich.console import Console
import logging

console = Console()
logger = logging.getLogger(__name__)


class Role(models.TextChoices):
    STUDENT = "STUDENT", "Student"
    PROFESSOR = "PROFESSOR", "Professor"
    REGISTRAR = "REGISTRAR", "Registrar"
    ADMISSION = "ADMISSION", "Admission"
    DEAN = "DEAN", "Dean"


class UserManager(BaseUserManager):
    """Custom user manager for username-based authentication with a single role per user."""

    def create_user(self, username, password=None, role=None, **extra_fields):
        if not username:
            raise ValueError("The username field must be set")

        extra_fields.setdefault('is_active', True)
        if extra_fields.get('email'):
            extra_fields['email'] = self.normalize_email(extra_fields['email'])

        if not role:
            role = Role.STUDENT
            console.print(f"[yellow]No role specified for user {username}, assigning default role: {role}[/yellow]")
        if role not in Role.values:
            raise ValueError(f"Role '{role}' does not exist. Available roles: {', '.join(Role.values)}")

        user = self.model(username=username, role=role, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        logger.info("Created user %s (%s)", username, role)
        return user

    def create_superuser(self, username, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_active', True)
        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        return self.create_user(username, password, role=Role.REGISTRAR, **extra_fields)

    def create_student(self, username, password=None, *, program, year_level, student_no=None, **extra_fields):
        """Create a STUDENT user together with its Student profile."""
        with transaction.atomic():
            user = self.create_user(username, password, role=Role.STUDENT, **extra_fields)
            student = Student.objects.create(
                user=user,
                program=program,
                year_level=year_level,
                student_no=student_no or Student.next_student_no(),
            )
        return student


class User(AbstractBaseUser):
    """
    Custom User model with username as the unique identifier.
    The role is a discriminant; role-specific data lives in profile tables (Student).
    """
    username    = models.CharField(max_length=150, unique=True, null=False, blank=False)
    email       = models.EmailField(unique=False, null=True, blank=True)
    first_name  = models.CharField(max_length=150, blank=True)
    last_name   = models.CharField(max_length=150, blank=True)
    role        = models.CharField(max_length=20, choices=Role.choices, default=Role.STUDENT)
    is_active   = models.BooleanField(default=True)
    is_staff    = models.BooleanField(default=False)
    created_at  = models.DateTimeField(default=timezone.now)
    updated_at  = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD  = 'username'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    def get_full_name(self):
        full_name = f'{self.first_name} {self.last_name}'.strip()
        return full_name or self.username

    def get_short_name(self):
        return self.first_name or self.username

    # Required methods for Django admin compatibility without PermissionsMixin
    def has_perm(self, perm, obj=None):
        return self.is_staff

    def has_module_perms(self, app_label):
        return self.is_staff

    def has_role(self, *roles):
        """True if the user's role is any of `roles`."""
        return self.role in roles

    def assign_role(self, role):
        if role not in Role.values:
            raise ValueError(f"Role '{role}' does not exist. Available roles: {', '.join(Role.values)}")
        self.role = role
        self.save(update_fields=['role', 'updated_at'])


class Student(models.Model):
    """Student profile - the academic identity of a STUDENT user."""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='student_profile')
    student_no = models.CharField(max_length=32, unique=True)
    program = models.ForeignKey(
        'curriculum.Program',
        on_delete=models.PROTECT,
        related_name='students',
    )
    year_level = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['student_no']
        verbose_name = 'Student'
        verbose_name_plural = 'Students'

    def __str__(self):
        return f"{self.student_no} - {self.user.get_full_name()}"

    @staticmethod
    def next_student_no():
        stamp = timezone.now().strftime('%Y%m%d%H%M%S%f')
        return f"S{stamp}"
