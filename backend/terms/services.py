import logging

from django.db import transaction

from college_portal.exceptions import NotFoundError
from .models import AcademicTerm

log = logging.getLogger(__name__)


def get_active_term():
    """The term currently open for enrollment and grading, or None."""
    return AcademicTerm.objects.filter(is_active=True).order_by("-pk").first()


def activate_term(term_id):
    """
    Make `term_id` the only active term.
    Deactivate-all and activate-one run in the same transaction so readers
    never see zero or two active terms.
    """
    with transaction.atomic():
        term = AcademicTerm.objects.select_for_update().filter(pk=term_id).first()
        if term is None:
            raise NotFoundError(f"Academic term {term_id} not found.")
        AcademicTerm.objects.filter(is_active=True).exclude(pk=term.pk).update(is_active=False)
        if not term.is_active:
            term.is_active = True
            term.save(update_fields=["is_active"])
    log.info("Activated academic term %s", term)
    return term


def create_term(*, school_year, semester, make_active=False):
    term = AcademicTerm.objects.create(school_year=school_year, semester=semester)
    if make_active:
        term = activate_term(term.pk)
    return term
