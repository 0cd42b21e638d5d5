import factory
from factory.django import DjangoModelFactory
from django.utils import timezone

from grades.grading import to_storage
from grades.models import Grade


class GradeFactory(DjangoModelFactory):
    """Pass `token='1.75'` to set the value by its display token."""

    class Meta:
        model = Grade

    class Params:
        token = "1.0"

    enrollment_subject = factory.SubFactory('enrollment.factory.EnrollmentSubjectFactory')
    value = factory.LazyAttribute(lambda obj: to_storage(obj.token))
    remarks = ""
    encoded_by = factory.SelfAttribute('enrollment_subject.section.professor')
    date_encoded = factory.LazyFunction(timezone.now)
    approved = False
    repeat_eligible_date = None
