"""Human-readable document numbers (bookings, orders, vendor codes).

Numbers are "last issued + 1" under a prefix, so two writers can draw the same
value. The column's unique index rejects the second commit, and
``commit_numbered`` rolls back and rebuilds the row with a fresh number.
"""
from __future__ import annotations

import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")

NUMBER_ATTEMPTS = 3


def next_number(prefix: str, last: str | None, width: int = 4) -> str:
    seq = int(last[len(prefix):]) + 1 if last else 1
    return f"{prefix}{seq:0{width}d}"


def commit_numbered(db: Session, build: Callable[[], T], what: str = "record") -> T:
    """Run ``build`` and commit, retrying when the drawn number is already taken.

    ``build`` must do all reads and checks it needs on every call; after a
    rollback nothing from the failed attempt is left in the session.
    """
    attempt = 1
    while True:
        try:
            obj = build()
            db.commit()
            return obj
        except IntegrityError:
            db.rollback()
            if attempt >= NUMBER_ATTEMPTS:
                raise
            logger.warning("Number collision creating %s (attempt %d), retrying", what, attempt)
            attempt += 1
        except Exception:
            db.rollback()
            raise
