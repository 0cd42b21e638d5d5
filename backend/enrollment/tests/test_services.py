"""
Test enrollment and section capacity.
"""
from unittest import mock

from django.db import IntegrityError
from django.db.models.query import QuerySet
from django.test import TestCase

from college_portal.exceptions import CapacityError, ConflictError, NotFoundError, ValidationError
from curriculum.factory import SectionFactory, SubjectFactory
from curriculum.models import SectionStatus
from enrollment.factory import EnrollmentSubjectFactory
from enrollment.models import Enrollment, EnrollmentSubject
from enrollment.services import MAX_TERM_UNITS, enroll_student, enrolled_units, section_occupancy
from terms.factory import AcademicTermFactory, ActiveTermFactory
from users.factory import StudentFactory


class SectionOccupancyTestCase(TestCase):

    def test_counts_only_the_given_term(self):
        term = ActiveTermFactory()
        other = AcademicTermFactory(school_year="2024-2025")
        section = SectionFactory()
        EnrollmentSubjectFactory(section=section, enrollment__term=term)
        EnrollmentSubjectFactory(section=section, enrollment__term=term)
        EnrollmentSubjectFactory(section=section, enrollment__term=other)

        self.assertEqual(section_occupancy(term), {section.pk: 2})
        self.assertEqual(section_occupancy(term, [section.pk + 1]), {})


class EnrollStudentTestCase(TestCase):

    def setUp(self):
        self.term = ActiveTermFactory()
        self.student = StudentFactory()

    def test_enroll_creates_enrollment_with_unit_snapshot(self):
        a = SectionFactory(subject=SubjectFactory(units=3))
        b = SectionFactory(subject=SubjectFactory(units=4))

        enrollment = enroll_student(self.student.pk, [a.pk, b.pk])

        self.assertEqual(enrollment.term, self.term)
        self.assertEqual(enrollment.total_units, 7)
        self.assertEqual(enrollment.subjects.count(), 2)

        a.subject.units = 5
        a.subject.save()
        self.assertEqual(EnrollmentSubject.objects.get(section=a).units, 3)

    def test_full_section_rejects_whole_batch(self):
        full = SectionFactory(max_slots=1)
        EnrollmentSubjectFactory(section=full, enrollment__term=self.term)
        free = SectionFactory(max_slots=40)

        with self.assertRaises(CapacityError) as cm:
            enroll_student(self.student.pk, [free.pk, full.pk])

        self.assertEqual(cm.exception.section, full)
        self.assertEqual(cm.exception.detail["section"], full.pk)
        self.assertEqual(str(cm.exception.detail["detail"]), f"Section {full.name} is full.")
        self.assertFalse(Enrollment.objects.filter(student=self.student).exists())
        self.assertEqual(section_occupancy(self.term, [free.pk]), {})

    def test_reuses_existing_enrollment(self):
        first = enroll_student(self.student.pk, [SectionFactory(subject=SubjectFactory(units=3)).pk])
        second = enroll_student(self.student.pk, [SectionFactory(subject=SubjectFactory(units=2)).pk])

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(second.total_units, 5)
        self.assertEqual(Enrollment.objects.filter(student=self.student).count(), 1)

    def test_same_subject_twice_in_term_conflicts(self):
        subject = SubjectFactory()
        enroll_student(self.student.pk, [SectionFactory(subject=subject).pk])
        with self.assertRaises(ConflictError):
            enroll_student(self.student.pk, [SectionFactory(subject=subject).pk])

    def test_same_subject_twice_in_one_request_conflicts(self):
        subject = SubjectFactory()
        with self.assertRaises(ConflictError):
            enroll_student(self.student.pk, [SectionFactory(subject=subject).pk, SectionFactory(subject=subject).pk])
        self.assertFalse(Enrollment.objects.exists())

    def test_no_active_term(self):
        self.term.is_active = False
        self.term.save()
        with self.assertRaises(ConflictError):
            enroll_student(self.student.pk, [SectionFactory().pk])

    def test_unknown_sections(self):
        section = SectionFactory()
        with self.assertRaises(ValidationError) as cm:
            enroll_student(self.student.pk, [section.pk, 99999])
        self.assertIn("99999", str(cm.exception.detail))
        self.assertFalse(Enrollment.objects.exists())

    def test_empty_and_duplicate_ids(self):
        with self.assertRaises(ValidationError):
            enroll_student(self.student.pk, [])
        section = SectionFactory()
        with self.assertRaises(ValidationError):
            enroll_student(self.student.pk, [section.pk, section.pk])

    def test_unknown_student(self):
        with self.assertRaises(NotFoundError):
            enroll_student(123456, [SectionFactory().pk])

    def test_section_from_another_term(self):
        section = SectionFactory(academic_year="2024-2025")
        with self.assertRaises(ValidationError):
            enroll_student(self.student.pk, [section.pk])

    def test_closed_section(self):
        section = SectionFactory(status=SectionStatus.CLOSED)
        with self.assertRaises(ValidationError):
            enroll_student(self.student.pk, [section.pk])

    def test_second_count_over_capacity_rolls_back(self):
        section = SectionFactory(max_slots=1)
        # a concurrent enrollment takes the seat between the check and the insert
        counts = [{}, {section.pk: 2}]
        with mock.patch("enrollment.services.section_occupancy", side_effect=counts):
            with self.assertRaises(CapacityError) as cm:
                enroll_student(self.student.pk, [section.pk])

        self.assertEqual(cm.exception.section, section)
        self.assertEqual(EnrollmentSubject.objects.count(), 0)
        self.assertFalse(Enrollment.objects.exists())

    def test_lost_create_race_is_a_conflict(self):
        section = SectionFactory()
        with mock.patch.object(QuerySet, "get_or_create", side_effect=IntegrityError("duplicate")):
            with self.assertRaises(ConflictError):
                enroll_student(self.student.pk, [section.pk])
        self.assertEqual(EnrollmentSubject.objects.count(), 0)


class TermUnitLimitTestCase(TestCase):

    def setUp(self):
        self.term = ActiveTermFactory()
        self.student = StudentFactory()

    def _sections(self, *units):
        return [SectionFactory(subject=SubjectFactory(units=u)).pk for u in units]

    def test_up_to_the_limit_is_allowed(self):
        enrollment = enroll_student(self.student.pk, self._sections(4, 4, 4, 4, 4, 4, 3, 3))
        self.assertEqual(enrollment.total_units, MAX_TERM_UNITS)
        self.assertEqual(enrolled_units(self.student, self.term), 30)

    def test_request_over_the_limit_is_rejected(self):
        with self.assertRaises(ValidationError) as cm:
            enroll_student(self.student.pk, self._sections(4, 4, 4, 4, 4, 4, 4, 3))
        self.assertIn("Unit limit exceeded", str(cm.exception.detail))
        self.assertFalse(Enrollment.objects.exists())

    def test_limit_counts_units_already_enrolled(self):
        enroll_student(self.student.pk, self._sections(4, 4, 4, 4, 4, 4, 3))
        with self.assertRaises(ValidationError):
            enroll_student(self.student.pk, self._sections(4))

        self.assertEqual(enrolled_units(self.student, self.term), 27)
        enrollment = enroll_student(self.student.pk, self._sections(3))
        self.assertEqual(enrollment.total_units, 30)

    def test_enrolled_units_without_enrollment(self):
        self.assertEqual(enrolled_units(self.student, self.term), 0)
