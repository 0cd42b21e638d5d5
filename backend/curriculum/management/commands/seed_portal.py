"""
Django management command to seed a minimal working portal.
Usage: python manage.py seed_portal [--password ChangeMe123!]
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from users.models import User, Student, Role
from terms.models import AcademicTerm, Semester
from terms.services import activate_term
from curriculum.models import Program, Subject, SubjectType, ProgramSubject, Section, SectionStatus

DEFAULT_PASSWORD = 'ChangeMe123!'

USERS = [
    {'username': 'student', 'first_name': 'Samantha', 'last_name': 'Student', 'role': Role.STUDENT},
    {'username': 'professor', 'first_name': 'Peter', 'last_name': 'Professor', 'role': Role.PROFESSOR},
    {'username': 'registrar', 'first_name': 'Rachel', 'last_name': 'Registrar', 'role': Role.REGISTRAR},
    {'username': 'admission', 'first_name': 'Alicia', 'last_name': 'Admission', 'role': Role.ADMISSION},
    {'username': 'dean', 'first_name': 'Derek', 'last_name': 'Dean', 'role': Role.DEAN},
]


class Command(BaseCommand):
    help = 'Seed sample users, the BSCS program, two subjects, an active term and two sections'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.console = Console()

    def add_arguments(self, parser):
        parser.add_argument('--password', default=DEFAULT_PASSWORD, help='Password for every seeded user')

    def handle(self, *args, **options):
        self.console.print(Panel.fit("[bold blue]Portal Seed Command[/bold blue]",
                                     subtitle="Loading sample data into database"))
        password = options['password']
        results = []

        with transaction.atomic():
            users = {}
            for data in USERS:
                user, created = User.objects.update_or_create(
                    username=data['username'],
                    defaults={
                        'email': f"{data['username']}@example.com",
                        'first_name': data['first_name'],
                        'last_name': data['last_name'],
                        'role': data['role'],
                    },
                )
                user.set_password(password)
                user.save(update_fields=['password'])
                users[data['role']] = user
                results.append(('User', user.username, created))

            program, created = Program.objects.get_or_create(
                code='BSCS',
                defaults={'name': 'BS Computer Science', 'department': 'CS',
                          'description': 'Computer Science program'},
            )
            results.append(('Program', program.code, created))

            cs101, created = Subject.objects.get_or_create(
                code='CS101',
                defaults={'name': 'Intro to Computing', 'units': 3, 'subject_type': SubjectType.MINOR},
            )
            results.append(('Subject', cs101.code, created))
            cs102, created = Subject.objects.get_or_create(
                code='CS102',
                defaults={'name': 'Data Structures', 'units': 3, 'subject_type': SubjectType.MAJOR,
                          'prerequisite': cs101},
            )
            results.append(('Subject', cs102.code, created))

            for subject, semester in ((cs101, Semester.FIRST), (cs102, Semester.SECOND)):
                mapping, created = ProgramSubject.objects.update_or_create(
                    program=program, subject=subject,
                    defaults={'recommended_year': 1, 'recommended_semester': semester},
                )
                results.append(('Mapping', str(mapping), created))

            term, created = AcademicTerm.objects.get_or_create(school_year='2025-2026', semester=Semester.FIRST)
            term = activate_term(term.pk)
            results.append(('Term', str(term), created))

            for name in ('CS101-A', 'CS101-B'):
                section, created = Section.objects.get_or_create(
                    name=name,
                    academic_year=term.school_year,
                    semester=term.semester,
                    defaults={'subject': cs101, 'professor': users[Role.PROFESSOR],
                              'max_slots': 40, 'status': SectionStatus.OPEN},
                )
                results.append(('Section', section.name, created))

            student, created = Student.objects.update_or_create(
                user=users[Role.STUDENT],
                defaults={'student_no': 'S20250001', 'program': program, 'year_level': 1},
            )
            results.append(('Student', student.student_no, created))

        table = Table(title="Portal Seed Results")
        table.add_column("Kind", style="cyan", no_wrap=True)
        table.add_column("Record", style="magenta")
        table.add_column("Status", style="green")
        for kind, label, created in results:
            table.add_row(kind, label, "[green]Created[/green]" if created else "[blue]Exists[/blue]")
        self.console.print(table)

        created_count = sum(1 for r in results if r[2])
        self.console.print("\n[bold green]✓ Portal seeding completed successfully![/bold green]")
        self.console.print(f"Default password: {password}")
        self.stdout.write(
            self.style.SUCCESS(f'Seeded {created_count} new records, {len(results) - created_count} already existed.')
        )
