from __future__ import annotations

from datetime import date, time
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.base import Base

EntryT = TypeVar("EntryT", bound=Base)


class CommitmentRepository(Generic[EntryT]):
    """Data access for time-boxed commitments owned by a resource.

    Subclasses name the entry model, the owning resource model and the columns
    holding the resource id, the day and the window. Nothing here commits; the
    caller owns the transaction.
    """

    model: ClassVar[type[Any]]
    resource_model: ClassVar[type[Any]]
    resource_field: ClassVar[str]
    day_field: ClassVar[str]
    start_field: ClassVar[str]
    end_field: ClassVar[str]

    def __init__(self, db: Session) -> None:
        self.db = db

    def _col(self, name: str):
        return getattr(self.model, name)

    def get(self, entry_id: str) -> EntryT | None:
        return self.db.get(self.model, entry_id)

    def resource_exists(self, resource_id: str) -> bool:
        return self.db.get(self.resource_model, resource_id) is not None

    def lock_resource(self, resource_id: str) -> Any | None:
        """Take a row lock on the owning resource for the rest of the transaction."""
        q = select(self.resource_model).where(self.resource_model.id == resource_id).with_for_update()
        return self.db.execute(q).scalar_one_or_none()

    def active_on(self, resource_id: str, day: date, exclude_id: str | None = None) -> list[EntryT]:
        q = (
            select(self.model)
            .where(self._col(self.resource_field) == resource_id)
            .where(self._col(self.day_field) == day)
            .where(self.model.status != "cancelled")
            .order_by(self._col(self.start_field).asc())
        )
        if exclude_id:
            q = q.where(self.model.id != exclude_id)
        return list(self.db.execute(q).scalars().all())

    def add(self, entry: EntryT) -> EntryT:
        self.db.add(entry)
        return entry

    def delete(self, entry: EntryT) -> None:
        self.db.delete(entry)

    def resource_of(self, entry: EntryT) -> str:
        return getattr(entry, self.resource_field)

    def day_of(self, entry: EntryT) -> date:
        return getattr(entry, self.day_field)

    def window_of(self, entry: EntryT) -> tuple[time, time]:
        return getattr(entry, self.start_field), getattr(entry, self.end_field)
