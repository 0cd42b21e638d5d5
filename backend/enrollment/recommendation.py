"""
Subject recommendations for the active term.

A subject from the student's program is recommended when it fits the
student's year level, has not been passed, is not inside a repeat wait
window, and its prerequisite (if any) has been passed. Each recommended
subject carries the open sections of the active term that still have seats.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from django.utils import timezone

from college_portal.exceptions import NotFoundError
from curriculum.models import ProgramSubject, Section, SectionStatus, Subject
from grades.grading import is_passing_grade, requires_repeat_wait, to_display
from grades.models import Grade
from terms.models import AcademicTerm
from terms.services import get_active_term
from users.models import Student
from .services import MAX_TERM_UNITS, enrolled_units, section_occupancy

log = logging.getLogger(__name__)


@dataclass
class SectionOption:
    """An open section with at least one free seat."""
    section: Section
    available_slots: int


@dataclass
class Recommendation:
    subject: Subject
    sections: list = field(default_factory=list)  # SectionOption, may be empty


@dataclass
class RecommendationResult:
    term: Optional[AcademicTerm]
    recommendations: list = field(default_factory=list)
    max_units: int = MAX_TERM_UNITS
    enrolled_units: int = 0

    @property
    def remaining_units(self):
        return max(self.max_units - self.enrolled_units, 0)


def latest_grades_by_subject(student):
    """
    {subject_id: Grade} holding the most recent grade per subject.
    Ordered by (date_encoded, id) so the later id wins a timestamp tie.
    """
    grades = (
        Grade.objects
        .filter(enrollment_subject__enrollment__student=student)
        .select_related("enrollment_subject")
        .order_by("date_encoded", "id")
    )
    history = {}
    for grade in grades:
        history[grade.enrollment_subject.subject_id] = grade
    return history


def _is_blocked(subject, history, now):
    latest = history.get(subject.pk)
    if latest is not None:
        token = to_display(latest.value)
        if is_passing_grade(token):
            return "passed"
        if requires_repeat_wait(token):
            # no date recorded means the wait cannot be shown to be over
            if latest.repeat_eligible_date is None or latest.repeat_eligible_date >= now:
                return "repeat wait"
    if subject.prerequisite_id:
        prereq = history.get(subject.prerequisite_id)
        if prereq is None or not is_passing_grade(to_display(prereq.value)):
            return "prerequisite not passed"
    return None


def recommend_subjects(student, now=None):
    """Build the recommendation list for `student` against the active term."""
    term = get_active_term()
    if term is None:
        return RecommendationResult(term=None, recommendations=[])

    now = now or timezone.now()
    carried = enrolled_units(student, term)
    history = latest_grades_by_subject(student)

    mappings = (
        ProgramSubject.objects
        .filter(program_id=student.program_id)
        .select_related("subject", "subject__prerequisite")
        .order_by("id")
    )

    subjects = []
    for mapping in mappings:
        if mapping.recommended_year is not None and mapping.recommended_year != student.year_level:
            continue
        reason = _is_blocked(mapping.subject, history, now)
        if reason:
            log.debug("Skipping %s for %s: %s", mapping.subject.code, student.student_no, reason)
            continue
        subjects.append(mapping.subject)

    if not subjects:
        return RecommendationResult(term=term, recommendations=[], enrolled_units=carried)

    sections = (
        Section.objects
        .filter(
            subject__in=subjects,
            semester=term.semester,
            academic_year=term.school_year,
            status=SectionStatus.OPEN,
        )
        .select_related("subject", "professor")
        .order_by("id")
    )
    occupancy = section_occupancy(term, [s.pk for s in sections])

    by_subject = {}
    for section in sections:
        available = section.max_slots - occupancy.get(section.pk, 0)
        if available > 0:
            by_subject.setdefault(section.subject_id, []).append(SectionOption(section, available))

    return RecommendationResult(
        term=term,
        recommendations=[Recommendation(subject, by_subject.get(subject.pk, [])) for subject in subjects],
        enrolled_units=carried,
    )


def recommend_for_student(student_id, now=None):
    student = Student.objects.select_related("program").filter(pk=student_id).first()
    if student is None:
        raise NotFoundError(f"Student {student_id} not found.")
    return recommend_subjects(student, now=now)
