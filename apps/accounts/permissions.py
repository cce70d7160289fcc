from rest_framework.permissions import BasePermission

from .services import is_admin, is_super_admin


class IsAdmin(BasePermission):
    """Allows access to users with an admin or super_admin profile."""
    message = 'Acesso restrito a administradores.'

    def has_permission(self, request, view):
        return is_admin(request.user)


class IsSuperAdmin(BasePermission):
    message = 'Acesso restrito a super administradores.'

    def has_permission(self, request, view):
        return is_super_admin(request.user)
