from rest_framework.permissions import BasePermission


def _is_superuser(user):
    return bool(getattr(user, "is_superuser", False))


def _is_admin(user):
    return _is_superuser(user) or bool(getattr(user, "is_admin", lambda: False)())


def _is_doctor(user):
    return bool(getattr(user, "is_doctor", lambda: False)())


def _is_cashier(user):
    return bool(getattr(user, "is_cashier", lambda: False)())


def can_prescribe(user):
    return _is_admin(user) or _is_doctor(user)


def can_dispense(user):
    return _is_admin(user) or _is_cashier(user)


class _RolePermission(BasePermission):
    def allows(self, user):
        raise NotImplementedError

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return self.allows(user)


class IsAdminRole(_RolePermission):
    message = "Only administrators can perform this action."

    def allows(self, user):
        return _is_admin(user)


class IsDoctorOrAdmin(_RolePermission):
    message = "Only doctors and administrators can perform this action."

    def allows(self, user):
        return can_prescribe(user)


class IsCashierOrAdmin(_RolePermission):
    message = "Only cashiers and administrators can perform this action."

    def allows(self, user):
        return can_dispense(user)
