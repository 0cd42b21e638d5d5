"""
Test subject recommendations.
"""
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from college_portal.exceptions import NotFoundError
from curriculum.factory import ProgramFactory, SectionFactory, SubjectFactory
from curriculum.models import ProgramSubject, SectionStatus, SubjectType
from enrollment.factory import EnrollmentSubjectFactory
from enrollment.recommendation import recommend_for_student, recommend_subjects
from grades.factory import GradeFactory
from terms.factory import AcademicTermFactory, ActiveTermFactory
from users.factory import StudentFactory


class RecommendationTestCase(TestCase):

    def setUp(self):
        self.term = ActiveTermFactory()
        self.program = ProgramFactory(code="BSCS")
        self.student = StudentFactory(program=self.program, year_level=1)
        self.years = iter(range(2010, 2024))

    def _map(self, subject, year=None):
        return ProgramSubject.objects.create(program=self.program, subject=subject, recommended_year=year)

    def _grade(self, subject, token, **kwargs):
        """Grade `subject` in a fresh past term; one subject per term enrollment."""
        year = next(self.years)
        term = AcademicTermFactory(school_year=f"{year}-{year + 1}")
        es = EnrollmentSubjectFactory(
            enrollment__student=self.student,
            enrollment__term=term,
            section=SectionFactory(subject=subject, academic_year=term.school_year),
        )
        return GradeFactory(enrollment_subject=es, token=token, **kwargs)

    def _codes(self, result=None):
        result = result or recommend_subjects(self.student)
        return [r.subject.code for r in result.recommendations]

    def test_no_active_term(self):
        self.term.is_active = False
        self.term.save()
        self._map(SubjectFactory())

        result = recommend_subjects(self.student)

        self.assertIsNone(result.term)
        self.assertEqual(result.recommendations, [])

    def test_unit_budget_reflects_current_enrollment(self):
        EnrollmentSubjectFactory(
            enrollment__student=self.student,
            enrollment__term=self.term,
            section=SectionFactory(subject=SubjectFactory(units=4)),
        )

        result = recommend_subjects(self.student)

        self.assertEqual(result.max_units, 30)
        self.assertEqual(result.enrolled_units, 4)
        self.assertEqual(result.remaining_units, 26)

    def test_untaken_subject_is_recommended(self):
        subject = SubjectFactory(code="CS101")
        self._map(subject)
        section = SectionFactory(subject=subject, max_slots=40)

        result = recommend_subjects(self.student)

        self.assertEqual(result.term, self.term)
        self.assertEqual(self._codes(result), ["CS101"])
        option = result.recommendations[0].sections[0]
        self.assertEqual(option.section, section)
        self.assertEqual(option.available_slots, 40)

    def test_passed_subject_is_excluded(self):
        subject = SubjectFactory(code="CS101")
        self._map(subject)
        self._grade(subject, "1.75")
        self.assertEqual(self._codes(), [])

    def test_failed_major_waits_for_repeat_date(self):
        subject = SubjectFactory(code="CS102", subject_type=SubjectType.MAJOR)
        self._map(subject)
        now = timezone.now()
        grade = self._grade(
            subject, "5.0",
            date_encoded=now - timedelta(days=1),
            repeat_eligible_date=now + timedelta(days=180),
        )
        self.assertEqual(self._codes(), [])

        grade.repeat_eligible_date = now - timedelta(days=1)
        grade.save()
        self.assertEqual(self._codes(), ["CS102"])

    def test_failed_without_repeat_date_stays_excluded(self):
        subject = SubjectFactory(code="CS102")
        self._map(subject)
        self._grade(subject, "INC", repeat_eligible_date=None)
        self.assertEqual(self._codes(), [])

    def test_dropped_subject_is_recommended(self):
        subject = SubjectFactory(code="CS101")
        self._map(subject)
        self._grade(subject, "DRP")
        self.assertEqual(self._codes(), ["CS101"])

    def test_latest_grade_wins(self):
        subject = SubjectFactory(code="CS101")
        self._map(subject)
        now = timezone.now()
        self._grade(subject, "1.0", date_encoded=now - timedelta(days=30))
        self._grade(subject, "DRP", date_encoded=now - timedelta(days=1))
        self.assertEqual(self._codes(), ["CS101"])

    def test_prerequisite_must_be_passed(self):
        cs101 = SubjectFactory(code="CS101")
        cs102 = SubjectFactory(code="CS102", prerequisite=cs101)
        self._map(cs102)
        self.assertEqual(self._codes(), [])

        self._grade(cs101, "4.0")
        self.assertEqual(self._codes(), [])

        self._grade(cs101, "2.0")
        self.assertEqual(self._codes(), ["CS102"])

    def test_year_filter_and_mapping_order(self):
        self._map(SubjectFactory(code="Y2"), year=2)
        self._map(SubjectFactory(code="ANY"))
        self._map(SubjectFactory(code="Y1"), year=1)
        self.assertEqual(self._codes(), ["ANY", "Y1"])

    def test_full_and_closed_sections_are_dropped_but_subject_kept(self):
        subject = SubjectFactory(code="CS101")
        self._map(subject)
        full = SectionFactory(subject=subject, max_slots=1)
        EnrollmentSubjectFactory(section=full, enrollment__term=self.term)
        SectionFactory(subject=subject, status=SectionStatus.CLOSED)
        SectionFactory(subject=subject, academic_year="2024-2025")

        result = recommend_subjects(self.student)

        self.assertEqual(self._codes(result), ["CS101"])
        self.assertEqual(result.recommendations[0].sections, [])

    def test_available_slots(self):
        subject = SubjectFactory(code="CS101")
        self._map(subject)
        section = SectionFactory(subject=subject, max_slots=3)
        EnrollmentSubjectFactory(section=section, enrollment__term=self.term)

        result = recommend_subjects(self.student)

        self.assertEqual(result.recommendations[0].sections[0].available_slots, 2)

    def test_other_program_subjects_ignored(self):
        ProgramSubject.objects.create(program=ProgramFactory(code="BSIT"), subject=SubjectFactory(code="IT101"))
        self.assertEqual(self._codes(), [])

    def test_recommend_for_unknown_student(self):
        with self.assertRaises(NotFoundError):
            recommend_for_student(999999)
