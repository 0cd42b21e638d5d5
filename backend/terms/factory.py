import factory
from factory.django import DjangoModelFactory

from terms.models import AcademicTerm, Semester


class AcademicTermFactory(DjangoModelFactory):
    class Meta:
        model = AcademicTerm
        django_get_or_create = ('school_year', 'semester')

    school_year = "2025-2026"
    semester = Semester.FIRST
    is_active = False


class ActiveTermFactory(AcademicTermFactory):
    is_active = True
