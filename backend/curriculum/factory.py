"""
Factories for programs, subjects, curriculum mappings and sections.
"""
import factory
from factory.django import DjangoModelFactory
from factory.fuzzy import FuzzyChoice

from terms.models import Semester
from curriculum.models import Program, Subject, SubjectType, ProgramSubject, Section, SectionStatus


class ProgramFactory(DjangoModelFactory):
    class Meta:
        model = Program
        django_get_or_create = ('code',)

    code = factory.Sequence(lambda n: f"BS{n:02d}")
    name = factory.LazyAttribute(lambda obj: f"Bachelor of Science {obj.code}")
    department = factory.Faker('word')


class SubjectFactory(DjangoModelFactory):
    class Meta:
        model = Subject
        django_get_or_create = ('code',)

    code = factory.Sequence(lambda n: f"SUB{n:03d}")
    name = factory.Faker('catch_phrase')
    units = FuzzyChoice([2, 3, 4])
    subject_type = SubjectType.MINOR
    prerequisite = None


class ProgramSubjectFactory(DjangoModelFactory):
    class Meta:
        model = ProgramSubject

    program = factory.SubFactory(ProgramFactory)
    subject = factory.SubFactory(SubjectFactory)
    recommended_year = None
    recommended_semester = None


class SectionFactory(DjangoModelFactory):
    class Meta:
        model = Section

    name = factory.LazyAttributeSequence(lambda obj, n: f"{obj.subject.code}-{n}")
    subject = factory.SubFactory(SubjectFactory)
    professor = factory.SubFactory('users.factory.ProfessorUserFactory')
    max_slots = 40
    semester = Semester.FIRST
    academic_year = "2025-2026"
    schedule = "MWF 09:00-10:00"
    status = SectionStatus.OPEN
