# imports/models.py
from django.conf import settings
from django.db import models
from django.utils import timezone


class ImportType(models.TextChoices):
    CURRICULUM = "curriculum", "Curriculum (programs, subjects and mappings)"


class UploadJob(models.Model):
    """
    One uploaded spreadsheet and the outcome of loading it.
    `log` holds one line per rejected row; `summary` the created/linked counts.
    """
    file = models.FileField(upload_to="uploads/curriculum/")
    original_name = models.CharField(max_length=255, blank=True)
    import_type = models.CharField(max_length=32, choices=ImportType.choices, default=ImportType.CURRICULUM)
    started_at = models.DateTimeField(auto_now_add=True)
    finished_at = models.DateTimeField(null=True, blank=True)
    ok = models.BooleanField(default=False)
    rows_total = models.PositiveIntegerField(default=0)
    rows_ok = models.PositiveIntegerField(default=0)
    rows_error = models.PositiveIntegerField(default=0)
    summary = models.JSONField(default=dict, blank=True)
    log = models.TextField(blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="upload_jobs",
    )

    class Meta:
        ordering = ["-started_at", "-id"]

    def __str__(self):
        return f"{self.get_import_type_display()} {self.original_name or self.file.name} @ {self.started_at:%Y-%m-%d %H:%M}"

    def finish(self, *, rows_total=None, rows_ok=None, errors=(), summary=None):
        if rows_total is not None:
            self.rows_total = rows_total
        if rows_ok is not None:
            self.rows_ok = rows_ok
        errors = list(errors)
        self.rows_error = len(errors)
        self.log = "\n".join(errors)
        if summary is not None:
            self.summary = summary
        self.ok = not errors
        self.finished_at = timezone.now()
        self.save(update_fields=[
            "rows_total", "rows_ok", "rows_error", "log", "summary", "ok", "finished_at",
        ])
