# checks/policies.py
"""
Status transition policy for checks.

PENDING is the only unlocked state. A pending check may be marked
CLEARED, BOUNCED or CANCELLED; all three are terminal.

Policies are pure functions returning (allowed, reason).
"""

from .models import Check

TERMINAL_STATUSES = frozenset({
    Check.Status.CLEARED,
    Check.Status.BOUNCED,
    Check.Status.CANCELLED,
})


def can_change_check_status(check: Check, new_status: str) -> tuple[bool, str]:
    """
    Returns:
        (True, "") if the transition is allowed
        (False, reason) if not
    """
    if check.status in TERMINAL_STATUSES:
        return False, f"Check is {check.status} and can no longer change status."
    if new_status not in TERMINAL_STATUSES:
        return False, f"Cannot change a PENDING check to {new_status}."
    return True, ""
