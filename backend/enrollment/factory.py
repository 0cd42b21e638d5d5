import factory
from factory.django import DjangoModelFactory

from enrollment.models import Enrollment, EnrollmentStatus, EnrollmentSubject


class EnrollmentFactory(DjangoModelFactory):
    class Meta:
        model = Enrollment

    student = factory.SubFactory('users.factory.StudentFactory')
    term = factory.SubFactory('terms.factory.ActiveTermFactory')
    status = EnrollmentStatus.CONFIRMED


class EnrollmentSubjectFactory(DjangoModelFactory):
    """Defaults the subject and units to the section's own subject."""

    class Meta:
        model = EnrollmentSubject

    enrollment = factory.SubFactory(EnrollmentFactory)
    section = factory.SubFactory('curriculum.factory.SectionFactory')
    subject = factory.SelfAttribute('section.subject')
    units = factory.SelfAttribute('subject.units')
