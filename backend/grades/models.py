#grades/models.py
from django.conf import settings
from django.db import models
from django.utils import timezone

from .grading import GradeValue, to_display


class Grade(models.Model):
    """
    The grade for one EnrollmentSubject.
    Re-encoding overwrites the row and clears `approved`; grades are never deleted.
    """
    enrollment_subject = models.OneToOneField(
        "enrollment.EnrollmentSubject",
        on_delete=models.PROTECT,
        related_name="grade",
    )
    value = models.CharField(max_length=8, choices=GradeValue.choices)
    remarks = models.CharField(max_length=255, blank=True, default="")
    encoded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="encoded_grades",
    )
    date_encoded = models.DateTimeField(default=timezone.now)
    approved = models.BooleanField(default=False)
    # set only for 5.0 and INC
    repeat_eligible_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["date_encoded", "id"]
        indexes = [
            models.Index(fields=["approved", "date_encoded"], name="grade_approved_encoded_idx"),
        ]

    def __str__(self):
        return f"{self.enrollment_subject} = {self.display}"

    @property
    def display(self):
        return to_display(self.value)
