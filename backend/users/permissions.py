# backend/users/permissions.py
from rest_framework.permissions import BasePermission, SAFE_METHODS

from .models import Role


def role_name(user):
    return getattr(user, "role", None) if user and user.is_authenticated else None


class IsAuthenticatedAndHasRole(BasePermission):
    required_roles = ()  # override per subclass
    message = "You do not have permission to access this resource."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        # Staff bypass = treat as registrar/admin
        if request.user.is_staff:
            return True
        rn = role_name(request.user)
        return rn in self.required_roles if self.required_roles else True


# ---- Role gates ----------------------------------------------------------------

class IsStudentRole(IsAuthenticatedAndHasRole):
    required_roles = (Role.STUDENT,)

class IsProfessorRole(IsAuthenticatedAndHasRole):
    required_roles = (Role.PROFESSOR,)

class IsRegistrarRole(IsAuthenticatedAndHasRole):
    required_roles = (Role.REGISTRAR,)

class IsAdmissionRole(IsAuthenticatedAndHasRole):
    required_roles = (Role.ADMISSION,)

class IsRegistrarOrDean(IsAuthenticatedAndHasRole):
    required_roles = (Role.REGISTRAR, Role.DEAN)

class IsAdmissionOrRegistrar(IsAuthenticatedAndHasRole):
    required_roles = (Role.ADMISSION, Role.REGISTRAR)


# ---- Composable behavior guards ----------------------------------------------

class DeanReadOnly(BasePermission):
    """
    Deans may only perform SAFE_METHODS.
    Other roles unaffected.
    """
    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.user.is_staff:
            return True
        if role_name(request.user) == Role.DEAN:
            return request.method in SAFE_METHODS
        return True
