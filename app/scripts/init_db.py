from __future__ import annotations

import logging

from sqlalchemy import text

from app.core.config import get_settings
from app.core.logging_config import setup_logging
from app.db.base import Base
from app.db.session import engine

# Import models to register with SQLAlchemy
import app.models  # noqa: F401

logger = logging.getLogger(__name__)

# Half-open [start, end) ranges per resource; cancelled rows are ignored.
NO_OVERLAP_CONSTRAINTS = {
    "employee_schedules_no_overlap": """
        ALTER TABLE employee_schedules
        ADD CONSTRAINT employee_schedules_no_overlap
        EXCLUDE USING gist (
            employee_id WITH =,
            tsrange(date + shift_start, date + shift_end, '[)') WITH &&
        )
        WHERE (status <> 'cancelled')
    """,
    "venue_bookings_no_overlap": """
        ALTER TABLE venue_bookings
        ADD CONSTRAINT venue_bookings_no_overlap
        EXCLUDE USING gist (
            venue_id WITH =,
            tsrange(booking_date + start_time, booking_date + end_time, '[)') WITH &&
        )
        WHERE (status <> 'cancelled')
    """,
}


def _add_overlap_constraints() -> None:
    with engine.begin() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS btree_gist"))
        for name, ddl in NO_OVERLAP_CONSTRAINTS.items():
            exists = conn.execute(text("SELECT 1 FROM pg_constraint WHERE conname = :name"), {"name": name}).first()
            if exists:
                continue
            conn.execute(text(ddl))
            logger.info("Added constraint %s", name)


def main() -> int:
    setup_logging(get_settings().log_level)

    Base.metadata.create_all(bind=engine)

    # Exclusion constraints back up the application-level conflict check on Postgres
    if engine.dialect.name == "postgresql":
        _add_overlap_constraints()

    logger.info("DB initialized (%s)", engine.dialect.name)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
