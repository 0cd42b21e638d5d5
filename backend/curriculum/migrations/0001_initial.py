import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

SEMESTER_CHOICES = [("FIRST", "First Semester"), ("SECOND", "Second Semester"), ("SUMMER", "Summer")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("terms", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Program",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(help_text="Unique program code (e.g., BSCS)", max_length=20, unique=True)),
                ("name", models.CharField(help_text="Full name of the program", max_length=255)),
                ("department", models.CharField(blank=True, max_length=100)),
                ("description", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Program",
                "verbose_name_plural": "Programs",
                "ordering": ["code"],
            },
        ),
        migrations.CreateModel(
            name="Subject",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(help_text="Unique subject code (e.g., CS101)", max_length=20, unique=True)),
                ("name", models.CharField(help_text="Full name of the subject", max_length=255)),
                ("units", models.PositiveIntegerField(
                    help_text="Credit units", validators=[django.core.validators.MinValueValidator(1)],
                )),
                ("subject_type", models.CharField(
                    choices=[("MAJOR", "Major"), ("MINOR", "Minor")],
                    default="MINOR",
                    help_text="MAJOR subjects have a shorter repeat window after a failing grade",
                    max_length=10,
                )),
                ("prerequisite", models.ForeignKey(
                    blank=True,
                    help_text="Subject that must be passed first (optional)",
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="dependents",
                    to="curriculum.subject",
                )),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Subject",
                "verbose_name_plural": "Subjects",
                "ordering": ["code"],
            },
        ),
        migrations.CreateModel(
            name="ProgramSubject",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("recommended_year", models.PositiveSmallIntegerField(
                    blank=True, null=True, validators=[django.core.validators.MinValueValidator(1)],
                )),
                ("recommended_semester", models.CharField(blank=True, choices=SEMESTER_CHOICES, max_length=10, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("program", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="program_subjects", to="curriculum.program",
                )),
                ("subject", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="program_subjects", to="curriculum.subject",
                )),
            ],
            options={
                "verbose_name": "Program Subject",
                "verbose_name_plural": "Program Subjects",
                "ordering": ["program__code", "id"],
            },
        ),
        migrations.AddConstraint(
            model_name="programsubject",
            constraint=models.UniqueConstraint(fields=("program", "subject"), name="unique_program_subject"),
        ),
        migrations.AddField(
            model_name="program",
            name="subjects",
            field=models.ManyToManyField(
                blank=True, related_name="programs", through="curriculum.ProgramSubject", to="curriculum.subject",
            ),
        ),
        migrations.CreateModel(
            name="Section",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(help_text="Section name (e.g., CS101-A)", max_length=50)),
                ("max_slots", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("semester", models.CharField(choices=SEMESTER_CHOICES, max_length=10)),
                ("academic_year", models.CharField(help_text="School year, e.g. 2025-2026", max_length=9)),
                ("schedule", models.CharField(blank=True, max_length=255)),
                ("status", models.CharField(
                    choices=[("OPEN", "Open"), ("CLOSED", "Closed")], default="OPEN", max_length=10,
                )),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("professor", models.ForeignKey(
                    limit_choices_to={"role": "PROFESSOR"},
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="sections",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("subject", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name="sections", to="curriculum.subject",
                )),
            ],
            options={
                "verbose_name": "Section",
                "verbose_name_plural": "Sections",
                "ordering": ["academic_year", "semester", "name"],
                "indexes": [models.Index(fields=["academic_year", "semester", "status"], name="section_term_status_idx")],
            },
        ),
    ]
