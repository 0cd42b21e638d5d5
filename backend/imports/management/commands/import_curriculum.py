from pathlib import Path

from django.core.files import File
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from rich.console import Console
from rich.table import Table

from imports.models import ImportType, UploadJob
from imports.services import import_curriculum

console = Console()


class Command(BaseCommand):
    help = "Import programs, subjects, prerequisites and program mappings from a .csv or .xlsx sheet"

    def add_arguments(self, parser):
        parser.add_argument("path", help="Path to the curriculum .csv or .xlsx file")

    def handle(self, *args, **opts):
        path = Path(opts["path"])
        if not path.exists():
            raise CommandError(f"File not found: {path}")
        if path.suffix.lower() not in (".csv", ".xlsx"):
            raise CommandError("Only .csv and .xlsx files are supported")

        with path.open("rb") as fh:
            job = UploadJob.objects.create(
                file=File(fh, name=path.name), original_name=path.name, import_type=ImportType.CURRICULUM,
            )

        with job.file.open("rb") as f, transaction.atomic():
            result = import_curriculum(f, job, filename=path.name)

        table = Table(title=f"Curriculum import (job {job.pk})")
        table.add_column("Item")
        table.add_column("Count", justify="right")
        for key, value in result.items():
            table.add_row(key, str(value))
        console.print(table)

        if job.log:
            console.print(f"[yellow]{job.log}[/yellow]")
        if job.ok:
            self.stdout.write(self.style.SUCCESS("Curriculum imported."))
        else:
            self.stdout.write(self.style.WARNING(f"Curriculum imported with {job.rows_error} error(s)."))
