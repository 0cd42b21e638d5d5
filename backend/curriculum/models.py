#curriculum/models.py
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from terms.models import Semester


class SubjectType(models.TextChoices):
    MAJOR = "MAJOR", "Major"
    MINOR = "MINOR", "Minor"


class Program(models.Model):
    """
    Model representing a degree program (e.g. BSCS).
    """
    code = models.CharField(
        max_length=20,
        unique=True,
        help_text="Unique program code (e.g., BSCS)"
    )
    name = models.CharField(
        max_length=255,
        help_text="Full name of the program"
    )
    department = models.CharField(max_length=100, blank=True)
    description = models.TextField(blank=True)
    subjects = models.ManyToManyField(
        "Subject",
        through="ProgramSubject",
        related_name="programs",
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['code']
        verbose_name = 'Program'
        verbose_name_plural = 'Programs'

    def __str__(self):
        return f"{self.code} - {self.name}"

    def clean(self):
        if self.code:
            self.code = self.code.upper().strip()


class Subject(models.Model):
    """
    Model representing a subject in the catalogue.
    Units are copied onto EnrollmentSubject at enroll time, so editing them
    does not rewrite historical transcripts.
    """
    code = models.CharField(
        max_length=20,
        unique=True,
        help_text="Unique subject code (e.g., CS101)"
    )
    name = models.CharField(
        max_length=255,
        help_text="Full name of the subject"
    )
    units = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Credit units"
    )
    subject_type = models.CharField(
        max_length=10,
        choices=SubjectType.choices,
        default=SubjectType.MINOR,
        help_text="MAJOR subjects have a shorter repeat window after a failing grade"
    )
    prerequisite = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="dependents",
        help_text="Subject that must be passed first (optional)"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['code']
        verbose_name = 'Subject'
        verbose_name_plural = 'Subjects'

    def __str__(self):
        return f"{self.code} - {self.name}"

    def clean(self):
        from django.core.exceptions import ValidationError
        if self.code:
            self.code = self.code.upper().strip()
        if self.pk and self.prerequisite_id == self.pk:
            raise ValidationError({"prerequisite": "A subject cannot be its own prerequisite."})


class ProgramSubject(models.Model):
    """
    Curriculum entry: a subject in a program with its recommended placement.
    A null recommended_year means the subject is recommended regardless of year.
    """
    program = models.ForeignKey(
        Program,
        on_delete=models.CASCADE,
        related_name='program_subjects',
    )
    subject = models.ForeignKey(
        Subject,
        on_delete=models.CASCADE,
        related_name='program_subjects',
    )
    recommended_year = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
    )
    recommended_semester = models.CharField(
        max_length=10,
        choices=Semester.choices,
        null=True,
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['program__code', 'id']
        verbose_name = 'Program Subject'
        verbose_name_plural = 'Program Subjects'
        constraints = [
            models.UniqueConstraint(fields=['program', 'subject'], name='unique_program_subject'),
        ]

    def __str__(self):
        year = f" (Y{self.recommended_year})" if self.recommended_year else ""
        return f"{self.subject.code} in {self.program.code}{year}"


class SectionStatus(models.TextChoices):
    OPEN = "OPEN", "Open"
    CLOSED = "CLOSED", "Closed"


class Section(models.Model):
    """
    A class offering of one subject, handled by one professor, in one term.
    Live occupancy is derived from EnrollmentSubject rows, never stored.
    """
    name = models.CharField(max_length=50, help_text="Section name (e.g., CS101-A)")
    subject = models.ForeignKey(
        Subject,
        on_delete=models.PROTECT,
        related_name='sections',
    )
    professor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='sections',
        limit_choices_to={'role': 'PROFESSOR'},
    )
    max_slots = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    semester = models.CharField(max_length=10, choices=Semester.choices)
    academic_year = models.CharField(max_length=9, help_text="School year, e.g. 2025-2026")
    schedule = models.CharField(max_length=255, blank=True)
    status = models.CharField(
        max_length=10,
        choices=SectionStatus.choices,
        default=SectionStatus.OPEN,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['academic_year', 'semester', 'name']
        verbose_name = 'Section'
        verbose_name_plural = 'Sections'
        indexes = [
            models.Index(fields=['academic_year', 'semester', 'status'], name='section_term_status_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.subject.code}, {self.academic_year} {self.semester})"
