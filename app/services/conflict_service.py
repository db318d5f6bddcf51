from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time
from typing import Any

from app.core.errors import ResourceNotFound, ScheduleConflict
from app.repositories.base import CommitmentRepository
from app.services.time_window import ensure_valid_window, windows_overlap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conflict:
    entry_id: str
    resource_id: str
    day: date
    start: time
    end: time
    status: str

    def describe(self) -> str:
        return f"{self.entry_id} ({self.day.isoformat()} {self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')})"

    def as_dict(self) -> dict[str, Any]:
        return {
            "entry_id": self.entry_id,
            "resource_id": self.resource_id,
            "date": self.day.isoformat(),
            "start_time": self.start.strftime("%H:%M"),
            "end_time": self.end.strftime("%H:%M"),
            "status": self.status,
        }


class ConflictChecker:
    """Detects overlapping commitments for one resource on one day.

    Read-only: it never writes or commits. Callers that act on the answer
    should hold the resource lock (see ``CommitmentRepository.lock_resource``)
    so the check and the write happen in one transaction.
    """

    def __init__(self, repository: CommitmentRepository) -> None:
        self.repository = repository

    def find_conflicts(
        self,
        resource_id: str,
        day: date,
        start: time,
        end: time,
        exclude_id: str | None = None,
    ) -> list[Conflict]:
        ensure_valid_window(start, end)
        if not self.repository.resource_exists(resource_id):
            raise ResourceNotFound(f"{self.repository.resource_model.__name__} {resource_id} not found")

        conflicts: list[Conflict] = []
        for entry in self.repository.active_on(resource_id, day, exclude_id=exclude_id):
            entry_start, entry_end = self.repository.window_of(entry)
            if windows_overlap(entry_start, entry_end, start, end):
                conflicts.append(
                    Conflict(
                        entry_id=entry.id,
                        resource_id=resource_id,
                        day=day,
                        start=entry_start,
                        end=entry_end,
                        status=entry.status,
                    )
                )
        return conflicts

    def check_conflict(
        self,
        resource_id: str,
        day: date,
        start: time,
        end: time,
        exclude_id: str | None = None,
    ) -> Conflict | None:
        conflicts = self.find_conflicts(resource_id, day, start, end, exclude_id=exclude_id)
        return conflicts[0] if conflicts else None

    def ensure_free(
        self,
        resource_id: str,
        day: date,
        start: time,
        end: time,
        exclude_id: str | None = None,
    ) -> None:
        conflict = self.check_conflict(resource_id, day, start, end, exclude_id=exclude_id)
        if conflict is not None:
            logger.info("Conflict for %s on %s %s-%s with %s", resource_id, day, start, end, conflict.entry_id)
            raise ScheduleConflict(conflict)
