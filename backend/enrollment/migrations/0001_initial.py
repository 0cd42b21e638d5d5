import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("users", "0002_student"),
        ("terms", "0001_initial"),
        ("curriculum", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Enrollment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(
                    choices=[("CONFIRMED", "Confirmed"), ("PENDING", "Pending")], default="CONFIRMED", max_length=10,
                )),
                ("date_enrolled", models.DateTimeField(default=django.utils.timezone.now)),
                ("total_units", models.PositiveIntegerField(default=0)),
                ("student", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name="enrollments", to="users.student",
                )),
                ("term", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name="enrollments", to="terms.academicterm",
                )),
            ],
            options={
                "ordering": ["-date_enrolled", "-id"],
            },
        ),
        migrations.CreateModel(
            name="EnrollmentSubject",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("units", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("enrollment", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="subjects", to="enrollment.enrollment",
                )),
                ("section", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name="enrollment_subjects", to="curriculum.section",
                )),
                ("subject", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name="enrollment_subjects", to="curriculum.subject",
                )),
            ],
            options={
                "ordering": ["id"],
            },
        ),
        migrations.AddConstraint(
            model_name="enrollment",
            constraint=models.UniqueConstraint(fields=("student", "term"), name="unique_enrollment_student_term"),
        ),
        migrations.AddConstraint(
            model_name="enrollmentsubject",
            constraint=models.UniqueConstraint(fields=("enrollment", "subject"), name="unique_enrollment_subject"),
        ),
    ]
