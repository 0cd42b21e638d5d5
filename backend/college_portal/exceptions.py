# backend/college_portal/exceptions.py
"""
Typed failures raised by the service layer.

Each one is a DRF ``APIException`` so a view can let it propagate and the
default exception handler renders ``{"detail": ...}`` with the right status.
"""
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, PermissionDenied


class ValidationError(APIException):
    """Malformed or unrecognized input (bad grade token, unknown section id)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."
    default_code = "invalid"


class AuthorizationError(PermissionDenied):
    """The actor is not allowed to touch this record."""
    default_detail = "You do not have permission to perform this action."
    default_code = "not_authorized"


class NotFoundError(NotFound):
    default_detail = "Not found."
    default_code = "not_found"


class ConflictError(APIException):
    """A business precondition does not hold (no active term, duplicate subject)."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Request conflicts with the current state."
    default_code = "conflict"


class CapacityError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Section is full."
    default_code = "section_full"

    def __init__(self, section, occupancy=None):
        self.section = section
        self.occupancy = occupancy
        super().__init__(f"Section {section.name} is full.")
        # keep the section id numeric in the response body
        self.detail = {"detail": self.detail, "section": section.pk}
