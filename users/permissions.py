from rest_framework import permissions

from .models import AdminAccount

BACK_OFFICE_ROLES = (AdminAccount.SUPER_ADMIN, AdminAccount.ADMIN, AdminAccount.MANAGER)


def _role_of(account):
    if isinstance(account, str):
        return account
    return getattr(account, 'role', None)


def can_manage(acting, target):
    """
    Whether ``acting`` may edit or delete ``target``.

    Accepts accounts or bare role strings. A super admin manages anyone, an
    admin manages everyone except super admins, a manager manages no one.
    Self-deletion is refused by the delete endpoint, not here.
    """
    acting_role = _role_of(acting)
    target_role = _role_of(target)

    if acting_role == AdminAccount.SUPER_ADMIN:
        return True
    if acting_role == AdminAccount.ADMIN and target_role != AdminAccount.SUPER_ADMIN:
        return True
    return False


class IsBackOfficeAdmin(permissions.BasePermission):
    """
    Active account holding one of the back-office roles
    """
    message = 'Back-office access required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and user.is_active
            and _role_of(user) in BACK_OFFICE_ROLES
        )


class CanManageAccount(permissions.BasePermission):
    """
    Read access for any back-office account, writes only where can_manage allows
    """
    message = 'You do not have permission to manage this account.'

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        return can_manage(request.user, obj)
