# grades/services.py
import logging

from django.db import transaction
from django.utils import timezone

from college_portal.exceptions import AuthorizationError, NotFoundError, ValidationError
from curriculum.models import Section
from enrollment.models import Enrollment, EnrollmentSubject
from users.models import Role
from .grading import (
    compute_gpa, is_valid_grade_token, normalize_token, repeat_eligibility_date,
    requires_repeat_wait, to_display, to_storage,
)
from .models import Grade

log = logging.getLogger(__name__)


def _owns_section(professor, section):
    return professor is not None and section.professor_id == professor.pk


def _write_grade(enrollment_subject, token, remarks, professor, now):
    token = normalize_token(token)
    if requires_repeat_wait(token):
        eligible = repeat_eligibility_date(enrollment_subject.subject.subject_type, now)
    else:
        eligible = None
    grade, created = Grade.objects.update_or_create(
        enrollment_subject=enrollment_subject,
        defaults={
            "value": to_storage(token),
            "remarks": remarks or "",
            "encoded_by": professor,
            "date_encoded": now,
            "approved": False,
            "repeat_eligible_date": eligible,
        },
    )
    log.info(
        "%s grade %s for enrollment subject %s by %s",
        "Encoded" if created else "Re-encoded", token, enrollment_subject.pk, professor.username,
    )
    return grade


def encode_grade(enrollment_subject, token, remarks, professor, now=None):
    """
    Create or overwrite the grade for one enrollment subject.
    Every encode leaves the grade pending approval.
    """
    if not is_valid_grade_token(token):
        raise ValidationError(f"Invalid grade value: {token!r}.")
    if not _owns_section(professor, enrollment_subject.section):
        log.warning("User %s tried to grade section %s", getattr(professor, "username", None), enrollment_subject.section_id)
        raise AuthorizationError("You do not handle this section.")
    with transaction.atomic():
        return _write_grade(enrollment_subject, token, remarks, professor, now or timezone.now())


def encode_grades(section_id, professor, rows, now=None):
    """
    Encode a batch of grades for one section.

    `rows` is a list of dicts with enrollment_subject_id, value and optional
    remarks. Every row is validated before anything is written, then all
    rows are saved in one transaction.
    """
    section = Section.objects.filter(pk=section_id).first()
    if section is None:
        raise NotFoundError(f"Section {section_id} not found.")
    if not _owns_section(professor, section):
        log.warning("User %s tried to grade section %s", getattr(professor, "username", None), section_id)
        raise AuthorizationError("You do not handle this section.")
    if not rows:
        raise ValidationError("No grades submitted.")

    invalid = [row.get("value") for row in rows if not is_valid_grade_token(row.get("value"))]
    if invalid:
        raise ValidationError(f"Invalid grade value(s): {', '.join(repr(v) for v in invalid)}.")

    ids = [row.get("enrollment_subject_id") for row in rows]
    if len(set(ids)) != len(ids):
        raise ValidationError("Each enrollment subject may appear only once per batch.")
    targets = {
        es.pk: es
        for es in EnrollmentSubject.objects.select_related("subject", "section").filter(pk__in=ids)
    }
    foreign = [i for i in ids if i not in targets or targets[i].section_id != section.pk]
    if foreign:
        raise ValidationError(
            f"Enrollment subject(s) {', '.join(str(i) for i in foreign)} do not belong to section {section.name}."
        )

    now = now or timezone.now()
    with transaction.atomic():
        grades = [
            _write_grade(targets[row["enrollment_subject_id"]], row["value"], row.get("remarks"), professor, now)
            for row in rows
        ]
    log.info("Section %s: %s grade(s) submitted for approval by %s", section.name, len(grades), professor.username)
    return grades


def approve_grade(grade_id, actor=None):
    """
    Mark a grade approved. Approving twice is a no-op.
    `actor` is checked when given; views pass request.user.
    """
    if actor is not None and not (actor.is_staff or actor.role == Role.REGISTRAR):
        raise AuthorizationError("Only the registrar can approve grades.")
    with transaction.atomic():
        grade = Grade.objects.select_for_update().filter(pk=grade_id).first()
        if grade is None:
            raise NotFoundError(f"Grade {grade_id} not found.")
        if not grade.approved:
            grade.approved = True
            grade.save(update_fields=["approved"])
            log.info("Approved grade %s (%s)", grade.pk, grade.display)
    return grade


def pending_grades():
    return (
        Grade.objects
        .filter(approved=False)
        .select_related(
            "encoded_by",
            "enrollment_subject__subject",
            "enrollment_subject__section",
            "enrollment_subject__enrollment__student__user",
            "enrollment_subject__enrollment__term",
        )
        .order_by("date_encoded", "id")
    )


def student_grade_report(student):
    """
    Enrollments newest first, with every subject and its grade (if any).
    The GPA only counts approved grades.
    """
    enrollments = (
        Enrollment.objects
        .filter(student=student)
        .select_related("term")
        .prefetch_related("subjects__subject", "subjects__section", "subjects__grade")
        .order_by("-date_enrolled", "-id")
    )
    report = []
    approved_tokens = []
    for enrollment in enrollments:
        subjects = []
        for es in enrollment.subjects.all():
            grade = getattr(es, "grade", None)
            if grade is not None and grade.approved:
                approved_tokens.append(to_display(grade.value))
            subjects.append({"enrollment_subject": es, "subject": es.subject, "section": es.section, "grade": grade})
        report.append({"enrollment": enrollment, "term": enrollment.term, "subjects": subjects})
    return {"enrollments": report, "gpa": compute_gpa(approved_tokens)}
