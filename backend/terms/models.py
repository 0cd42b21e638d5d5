from django.db import models


class Semester(models.TextChoices):
    FIRST = "FIRST", "First Semester"
    SECOND = "SECOND", "Second Semester"
    SUMMER = "SUMMER", "Summer"


class AcademicTerm(models.Model):
    school_year = models.CharField(max_length=9, help_text="School year, e.g. 2025-2026")
    semester = models.CharField(max_length=10, choices=Semester.choices)
    # At most one active term; kept by terms.services.activate_term, not by a constraint.
    is_active = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-school_year", "semester"]
        constraints = [
            models.UniqueConstraint(fields=["school_year", "semester"], name="unique_term_school_year_semester"),
        ]

    def __str__(self):
        c = " (active)" if self.is_active else ""
        return f"{self.school_year} {self.get_semester_display()}{c}"
