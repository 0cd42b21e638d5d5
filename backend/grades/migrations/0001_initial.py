import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("enrollment", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Grade",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("value", models.CharField(
                    choices=[
                        ("G1_0", "1.0"), ("G1_25", "1.25"), ("G1_5", "1.5"), ("G1_75", "1.75"),
                        ("G2_0", "2.0"), ("G2_25", "2.25"), ("G2_5", "2.5"), ("G2_75", "2.75"),
                        ("G3_0", "3.0"), ("G4_0", "4.0"), ("G5_0", "5.0"), ("INC", "INC"), ("DRP", "DRP"),
                    ],
                    max_length=8,
                )),
                ("remarks", models.CharField(blank=True, default="", max_length=255)),
                ("date_encoded", models.DateTimeField(default=django.utils.timezone.now)),
                ("approved", models.BooleanField(default=False)),
                ("repeat_eligible_date", models.DateTimeField(blank=True, null=True)),
                ("encoded_by", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="encoded_grades",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("enrollment_subject", models.OneToOneField(
                    on_delete=django.db.models.deletion.PROTECT, related_name="grade", to="enrollment.enrollmentsubject",
                )),
            ],
            options={
                "ordering": ["date_encoded", "id"],
                "indexes": [models.Index(fields=["approved", "date_encoded"], name="grade_approved_encoded_idx")],
            },
        ),
    ]
