# accounts/commands.py
"""
Command layer for accounts operations.

Commands are the single point where business operations happen.
Views parse and authorize; commands validate business rules, mutate
state inside a transaction and return a CommandResult.

Also home of the shared CommandResult and the per-company sequence
allocator used by other apps.
"""

import logging

from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction

from accounts.authz import ActorContext
from accounts.models import Company, CompanySequence, User

logger = logging.getLogger(__name__)


class CommandResult:
    """
    Wrapper for command results with success/failure info.

    Usage:
        result = register_signup(email=..., password=..., ...)
        if result.success:
            user = result.data["user"]
        else:
            error_message = result.error
    """

    def __init__(self, success: bool, data=None, error: str = None, code: str = None):
        self.success = success
        self.data = data
        self.error = error
        self.code = code

    @classmethod
    def ok(cls, data=None):
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, code: str = "invalid"):
        return cls(success=False, error=error, code=code)

    @classmethod
    def conflict(cls, error: str):
        return cls.fail(error, code="conflict")


def next_company_sequence(company, name: str) -> int:
    """
    Allocate the next sequence value for a company/name pair.
    Uses select_for_update to avoid concurrent duplicates.
    Must run inside a transaction.
    """
    try:
        seq = CompanySequence.objects.select_for_update().get(
            company=company,
            name=name,
        )
    except CompanySequence.DoesNotExist:
        try:
            with transaction.atomic():
                seq = CompanySequence.objects.create(
                    company=company,
                    name=name,
                    next_value=1,
                )
        except IntegrityError:
            seq = CompanySequence.objects.select_for_update().get(
                company=company,
                name=name,
            )

    value = seq.next_value
    seq.next_value = value + 1
    seq.save(update_fields=["next_value", "updated_at"])
    return value


@transaction.atomic
def register_signup(email: str, password: str, name: str, company_name: str) -> CommandResult:
    """
    Register a new company together with its first user.

    The first user of a company is always an ADMIN.

    Returns:
        CommandResult with {"user": User, "company": Company}
    """
    if User.objects.filter(email=email).exists():
        return CommandResult.conflict("User already exists")

    company = Company.objects.create(name=company_name)
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=name,
                role=User.Role.ADMIN,
                company=company,
            )
    except IntegrityError:
        transaction.set_rollback(True)
        return CommandResult.conflict("User already exists")

    logger.info(
        "Company registered",
        extra={"company_id": company.id, "user_id": user.id},
    )
    return CommandResult.ok({"user": user, "company": company})


def login(email: str, password: str, request=None) -> CommandResult:
    """
    Check credentials for an active user.

    Returns:
        CommandResult with the User, or a failure with code
        "authentication_failed" (the view answers 401).
    """
    user = User.objects.select_related("company").filter(email=email).first()
    if user is None or not user.is_active:
        logger.info("Login rejected: unknown or inactive account", extra={"email": email})
        return CommandResult.fail("Invalid credentials or inactive account", code="authentication_failed")

    if authenticate(request=request, email=email, password=password) is None:
        logger.info("Login rejected: bad password", extra={"user_id": user.id})
        return CommandResult.fail("Invalid credentials", code="authentication_failed")

    return CommandResult.ok(user)


@transaction.atomic
def update_profile(actor: ActorContext, **updates) -> CommandResult:
    """
    Update the actor's own name and/or email.

    Returns:
        CommandResult with the updated User
    """
    user = User.objects.select_for_update().get(pk=actor.user.pk)

    email = updates.get("email")
    if email and email != user.email:
        if User.objects.filter(email=email).exclude(pk=user.pk).exists():
            return CommandResult.conflict("Email already in use.")
        user.email = email

    if "name" in updates:
        user.name = updates["name"]

    user.save(update_fields=["email", "name", "updated_at"])
    return CommandResult.ok(user)


@transaction.atomic
def create_company_user(
    actor: ActorContext,
    email: str,
    name: str,
    password: str,
    role: str = User.Role.USER,
) -> CommandResult:
    """
    Create a user inside the actor's company.

    Returns:
        CommandResult with the created User
    """
    if User.objects.filter(email=email).exists():
        return CommandResult.conflict(f"User with email '{email}' already exists.")

    user = User.objects.create_user(
        email=email,
        password=password,
        name=name,
        role=role,
        company=actor.company,
    )
    logger.info(
        "User created",
        extra={"company_id": actor.company.id, "user_id": user.id, "role": role},
    )
    return CommandResult.ok(user)


@transaction.atomic
def deactivate_user(actor: ActorContext, user: User) -> CommandResult:
    """Revoke access for a user of the actor's company (soft delete)."""
    if user.pk == actor.user.pk:
        return CommandResult.fail("You cannot deactivate your own account.")

    user.is_active = False
    user.save(update_fields=["is_active", "updated_at"])
    logger.info(
        "User deactivated",
        extra={"company_id": actor.company.id, "user_id": user.id},
    )
    return CommandResult.ok(user)
