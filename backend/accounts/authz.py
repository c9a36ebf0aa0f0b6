# accounts/authz.py
"""
Authorization utilities.

Provides:
- ActorContext: Immutable context for the current request
- resolve_actor: Extract actor context from request
- require_role: Check the actor's role against an allow-list
- allow_roles: DRF permission class factory built on require_role

Roles are flat: ADMIN, ACCOUNTANT, USER and VIEWER are mutually
exclusive and not ordered. ADMIN is the only override; it passes
every allow-list.
"""

from dataclasses import dataclass

from rest_framework.exceptions import NotAuthenticated, PermissionDenied
from rest_framework.permissions import BasePermission

from accounts.models import Company, User

# Roles allowed to create and update business records (ADMIN is implicit).
WRITE_ROLES = (User.Role.ACCOUNTANT,)


@dataclass(frozen=True)
class ActorContext:
    """
    Immutable context for the current actor (principal + tenant).

    Passed explicitly to commands so they never reach for request state.

    Attributes:
        user: The authenticated user
        company: The user's company (tenant)
        role: The user's role at resolution time
    """
    user: User
    company: Company
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == User.Role.ADMIN

    def has_role(self, *roles: str) -> bool:
        if self.is_admin:
            return True
        return self.role in roles


def resolve_actor(request) -> ActorContext:
    """
    Extract ActorContext from the current request.

    Raises:
        NotAuthenticated: If no principal is attached to the request
        PermissionDenied: If the principal has no company
    """
    user = getattr(request, "user", None)

    if not user or not user.is_authenticated:
        raise NotAuthenticated("Access denied. Please authenticate.")

    cached = getattr(request, "_actor_context", None)
    if cached is not None and cached.user.pk == user.pk:
        return cached

    if user.company_id is None:
        raise PermissionDenied("Your account is not attached to a company.")

    actor = ActorContext(user=user, company=user.company, role=user.role)
    request._actor_context = actor
    return actor


def require_role(actor: ActorContext, *roles: str) -> None:
    """
    Require that the actor's role is in ``roles`` (ADMIN always passes).

    Raises PermissionDenied naming the allow-list and the caller's role.

    Example:
        require_role(actor, User.Role.ACCOUNTANT)
    """
    if actor.has_role(*roles):
        return
    required = ", ".join([User.Role.ADMIN, *roles])
    raise PermissionDenied(
        f"Access denied. Required roles: {required}. Your role: {actor.role}"
    )


def allow_roles(*roles: str) -> type[BasePermission]:
    """
    Build a DRF permission class that admits only ``roles`` (plus ADMIN).

    Must be listed after IsAuthenticated. ``safe_methods_open`` lets
    read requests through so list/create views can share one class.

    Usage:
        permission_classes = [IsAuthenticated, allow_roles(User.Role.ACCOUNTANT)]
    """

    class RolePermission(BasePermission):
        allowed_roles = roles
        safe_methods_open = True

        def has_permission(self, request, view):
            if self.safe_methods_open and request.method in ("GET", "HEAD", "OPTIONS"):
                return True
            require_role(resolve_actor(request), *self.allowed_roles)
            return True

    RolePermission.__name__ = ("Allow" + "".join(r.title() for r in roles)) if roles else "AdminOnly"
    return RolePermission


def admin_only() -> type[BasePermission]:
    """Permission class admitting ADMIN for every method."""
    permission = allow_roles()
    permission.safe_methods_open = False
    return permission


CanWrite = allow_roles(*WRITE_ROLES)
AdminOnly = admin_only()
