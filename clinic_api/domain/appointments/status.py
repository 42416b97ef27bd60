"""Appointment status lifecycle.

pending -> confirmed -> completed, and pending/confirmed -> cancelled.
completed and cancelled are terminal. Re-setting the current status is a no-op.
"""

from ...errors import ValidationError

ALLOWED_TRANSITIONS = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}


def can_transition(current: str, new: str) -> bool:
    return current == new or new in ALLOWED_TRANSITIONS.get(current, set())


def ensure_transition(current: str, new: str) -> None:
    if not can_transition(current, new):
        raise ValidationError(f"Cannot change status from '{current}' to '{new}'")
