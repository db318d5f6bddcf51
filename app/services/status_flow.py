from __future__ import annotations

from app.core.errors import InvalidTransition

SCHEDULE_STATUSES = ("scheduled", "confirmed", "completed", "cancelled")
BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")

TERMINAL_STATUSES = frozenset({"completed", "cancelled"})

SCHEDULE_TRANSITIONS: dict[str, frozenset[str]] = {
    "scheduled": frozenset({"confirmed", "cancelled"}),
    "confirmed": frozenset({"completed", "cancelled"}),
    "completed": frozenset(),
    "cancelled": frozenset(),
}

BOOKING_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"confirmed", "cancelled"}),
    "confirmed": frozenset({"completed", "cancelled"}),
    "completed": frozenset(),
    "cancelled": frozenset(),
}

PAYMENT_STATUSES = ("pending", "verified", "rejected")

# Pending payments are reviewed once; a wrong decision is fixed by deleting the row
PAYMENT_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"verified", "rejected"}),
    "verified": frozenset(),
    "rejected": frozenset(),
}


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES


def ensure_transition(current: str, target: str, transitions: dict[str, frozenset[str]]) -> None:
    if target not in transitions:
        raise InvalidTransition(f"Unknown status '{target}'")
    if target not in transitions.get(current, frozenset()):
        raise InvalidTransition(f"Cannot move from '{current}' to '{target}'")


def ensure_editable(current: str) -> None:
    if is_terminal(current):
        raise InvalidTransition(f"Entry is {current} and can no longer be changed")
