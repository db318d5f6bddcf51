from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

if TYPE_CHECKING:
    from app.services.conflict_service import Conflict

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors surfaced to the caller as a 4xx response."""

    status_code = 400
    code = "app_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def extra(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"detail": self.message, "code": self.code}
        body.update(self.extra())
        return body


class InvalidWindow(AppError):
    status_code = 422
    code = "invalid_window"


class InvalidRequest(AppError):
    status_code = 422
    code = "invalid_request"


class ResourceNotFound(AppError):
    status_code = 404
    code = "not_found"


class InvalidTransition(AppError):
    status_code = 422
    code = "invalid_transition"


class VenueUnavailable(AppError):
    status_code = 422
    code = "venue_unavailable"


class ScheduleConflict(AppError):
    status_code = 422
    code = "schedule_conflict"

    def __init__(self, conflict: "Conflict", message: str | None = None) -> None:
        self.conflict = conflict
        super().__init__(message or f"Overlaps existing entry {conflict.describe()}")

    def extra(self) -> dict[str, Any]:
        return {"conflict": self.conflict.as_dict()}


class BulkConflictError(ScheduleConflict):
    code = "bulk_conflict"

    def __init__(self, day: date, conflict: "Conflict") -> None:
        self.day = day
        super().__init__(conflict, f"{day.isoformat()} overlaps existing entry {conflict.describe()}")

    def extra(self) -> dict[str, Any]:
        body = super().extra()
        body["date"] = self.day.isoformat()
        return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
