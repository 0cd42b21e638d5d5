#enrollment/models.py
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class EnrollmentStatus(models.TextChoices):
    CONFIRMED = "CONFIRMED", "Confirmed"
    PENDING = "PENDING", "Pending"


class Enrollment(models.Model):
    """
    A student's registration for one academic term.
    """
    student = models.ForeignKey(
        "users.Student",
        on_delete=models.PROTECT,
        related_name="enrollments",
    )
    term = models.ForeignKey(
        "terms.AcademicTerm",
        on_delete=models.PROTECT,
        related_name="enrollments",
    )
    status = models.CharField(
        max_length=10,
        choices=EnrollmentStatus.choices,
        default=EnrollmentStatus.CONFIRMED,
    )
    date_enrolled = models.DateTimeField(default=timezone.now)
    total_units = models.PositiveIntegerField(default=0)  # sum of EnrollmentSubject.units

    class Meta:
        ordering = ["-date_enrolled", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["student", "term"], name="unique_enrollment_student_term"),
        ]

    def __str__(self):
        return f"{self.student.student_no} @ {self.term}"

    def recompute_total_units(self):
        total = self.subjects.aggregate(total=models.Sum("units"))["total"] or 0
        if total != self.total_units:
            self.total_units = total
            self.save(update_fields=["total_units"])
        return total


class EnrollmentSubject(models.Model):
    """
    One subject taken in one section as part of an enrollment.
    `units` is a copy of Subject.units at enroll time.
    """
    enrollment = models.ForeignKey(
        Enrollment,
        on_delete=models.CASCADE,
        related_name="subjects",
    )
    section = models.ForeignKey(
        "curriculum.Section",
        on_delete=models.PROTECT,
        related_name="enrollment_subjects",
    )
    subject = models.ForeignKey(
        "curriculum.Subject",
        on_delete=models.PROTECT,
        related_name="enrollment_subjects",
    )
    units = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["enrollment", "subject"], name="unique_enrollment_subject"),
        ]

    def __str__(self):
        return f"{self.enrollment.student.student_no}: {self.subject.code} ({self.section.name})"
