"""
Factory classes for generating test data using Factory Boy and Faker.
"""
import factory
from factory.django import DjangoModelFactory
from django.contrib.auth import get_user_model
from users.models import Role, Student

User = get_user_model()


class UserFactory(DjangoModelFactory):
    """Factory for creating User instances."""

    class Meta:
        model = User
        django_get_or_create = ('username',)

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    role = Role.STUDENT
    is_active = True
    is_staff = False

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        """Set password for the user."""
        if not create:
            return
        password = extracted or 'defaultpass123'
        self.set_password(password)
        self.save()


class StaffUserFactory(UserFactory):
    """Factory for creating staff User instances."""

    is_staff = True
    role = Role.REGISTRAR


# Predefined factories for each role
class ProfessorUserFactory(UserFactory):
    username = factory.Sequence(lambda n: f"prof{n}")
    role = Role.PROFESSOR


class RegistrarUserFactory(UserFactory):
    username = factory.Sequence(lambda n: f"registrar{n}")
    role = Role.REGISTRAR


class AdmissionUserFactory(UserFactory):
    username = factory.Sequence(lambda n: f"admission{n}")
    role = Role.ADMISSION


class DeanUserFactory(UserFactory):
    username = factory.Sequence(lambda n: f"dean{n}")
    role = Role.DEAN


class StudentFactory(DjangoModelFactory):
    """Factory for a Student profile; creates the STUDENT user and a program as needed."""

    class Meta:
        model = Student

    user = factory.SubFactory(UserFactory, username=factory.Sequence(lambda n: f"student{n}"), role=Role.STUDENT)
    student_no = factory.Sequence(lambda n: f"S2025{n:04d}")
    program = factory.SubFactory('curriculum.factory.ProgramFactory')
    year_level = 1
