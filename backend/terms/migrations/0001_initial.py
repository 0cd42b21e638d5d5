from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AcademicTerm",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("school_year", models.CharField(help_text="School year, e.g. 2025-2026", max_length=9)),
                ("semester", models.CharField(
                    choices=[("FIRST", "First Semester"), ("SECOND", "Second Semester"), ("SUMMER", "Summer")],
                    max_length=10,
                )),
                ("is_active", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-school_year", "semester"],
            },
        ),
        migrations.AddConstraint(
            model_name="academicterm",
            constraint=models.UniqueConstraint(fields=("school_year", "semester"), name="unique_term_school_year_semester"),
        ),
    ]
