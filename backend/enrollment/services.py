# enrollment/services.py
import logging

from django.db import IntegrityError, transaction
from django.db.models import Count, Sum

from college_portal.exceptions import (
    CapacityError, ConflictError, NotFoundError, ValidationError,
)
from curriculum.models import Section, SectionStatus
from terms.services import get_active_term
from users.models import Student
from .models import Enrollment, EnrollmentStatus, EnrollmentSubject

log = logging.getLogger(__name__)

# per student, per term
MAX_TERM_UNITS = 30


def section_occupancy(term, section_ids=None):
    """
    {section_id: taken seats} for enrollments in `term`.
    Sections nobody enrolled in are absent from the dict.
    """
    qs = EnrollmentSubject.objects.filter(enrollment__term=term)
    if section_ids is not None:
        qs = qs.filter(section_id__in=list(section_ids))
    rows = qs.values("section_id").annotate(taken=Count("id")).order_by()
    return {row["section_id"]: row["taken"] for row in rows}


def enrolled_units(student, term):
    """Units the student already carries in `term` (0 when not enrolled)."""
    total = (
        EnrollmentSubject.objects
        .filter(enrollment__student=student, enrollment__term=term)
        .aggregate(total=Sum("units"))["total"]
    )
    return total or 0


def _clean_section_ids(section_ids):
    if not section_ids:
        raise ValidationError("At least one section is required.")
    try:
        ids = [int(s) for s in section_ids]
    except (TypeError, ValueError):
        raise ValidationError("Section ids must be integers.")
    if len(set(ids)) != len(ids):
        raise ValidationError("Duplicate section ids in request.")
    return ids


def _check_capacity(sections, occupancy):
    for section in sections:
        taken = occupancy.get(section.pk, 0)
        if taken >= section.max_slots:
            log.warning("Section %s is full (%s/%s)", section.name, taken, section.max_slots)
            raise CapacityError(section, taken)


def enroll_student(student_id, section_ids, term=None):
    """
    Enroll a student into `section_ids` for the active term (or `term`).

    All-or-nothing: sections are row-locked while seats are counted, the
    rows are inserted, then occupancy is counted again before commit. Any
    failure rolls back every row written by this call.
    Reuses the student's enrollment for the term when one already exists.
    """
    term = term or get_active_term()
    if term is None:
        raise ConflictError("No active academic term.")

    ids = _clean_section_ids(section_ids)

    student = Student.objects.select_related("user").filter(pk=student_id).first()
    if student is None:
        raise NotFoundError(f"Student {student_id} not found.")

    with transaction.atomic():
        # lock in pk order so concurrent batches cannot deadlock each other
        sections = list(
            Section.objects.select_for_update()
            .select_related("subject")
            .filter(pk__in=ids)
            .order_by("pk")
        )
        found = {s.pk for s in sections}
        missing = [i for i in ids if i not in found]
        if missing:
            raise ValidationError(f"Unknown sections: {', '.join(str(i) for i in missing)}.")

        for section in sections:
            if section.semester != term.semester or section.academic_year != term.school_year:
                raise ValidationError(f"Section {section.name} is not offered in {term.school_year} {term.semester}.")
            if section.status != SectionStatus.OPEN:
                raise ValidationError(f"Section {section.name} is closed.")

        _check_capacity(sections, section_occupancy(term, ids))

        if len({s.subject_id for s in sections}) != len(sections):
            raise ConflictError("The same subject was requested in more than one section.")

        try:
            enrollment, _ = Enrollment.objects.select_for_update().get_or_create(
                student=student,
                term=term,
                defaults={"status": EnrollmentStatus.CONFIRMED},
            )
        except IntegrityError:
            # another request created the (student, term) row first
            log.warning("Concurrent enrollment for %s in %s", student.student_no, term)
            raise ConflictError("This student is already being enrolled for the term. Try again.")
        taken = set(enrollment.subjects.values_list("subject_id", flat=True))
        dup = [s for s in sections if s.subject_id in taken]
        if dup:
            codes = ", ".join(s.subject.code for s in dup)
            raise ConflictError(f"Already enrolled in {codes} for this term.")

        requested = sum(s.subject.units for s in sections)
        carried = enrolled_units(student, term)
        if carried + requested > MAX_TERM_UNITS:
            raise ValidationError(
                f"Unit limit exceeded (max {MAX_TERM_UNITS}): {carried} enrolled, {requested} requested."
            )

        EnrollmentSubject.objects.bulk_create([
            EnrollmentSubject(
                enrollment=enrollment,
                section=section,
                subject_id=section.subject_id,
                units=section.subject.units,
            )
            for section in sections
        ])

        # seats may have been taken between the first count and the insert
        occupancy = section_occupancy(term, ids)
        for section in sections:
            if occupancy.get(section.pk, 0) > section.max_slots:
                raise CapacityError(section, occupancy[section.pk])

        enrollment.recompute_total_units()

    log.info(
        "Enrolled %s in %s for %s (%s units)",
        student.student_no, ", ".join(s.name for s in sections), term, enrollment.total_units,
    )
    return enrollment
