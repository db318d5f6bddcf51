from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.deps import get_db
from app.services.audit_service import write_audit_log
from app.services.report_service import daily_roster

router = APIRouter()

templates = Jinja2Templates(directory=get_settings().templates_dir)


@router.get("/daily", response_class=HTMLResponse)
def print_daily(
    request: Request,
    day: date = Query(..., description="YYYY-MM-DD"),
    db: Session = Depends(get_db),
):
    roster = daily_roster(db, day)

    write_audit_log(
        db,
        action_type="PRINT_DAILY",
        target_type="print",
        target_id=str(day),
        summary="Printed daily roster",
        diff_json={"day": str(day)},
        request=request,
    )

    return templates.TemplateResponse(
        request,
        "daily_print.html",
        {
            "date_str": day.isoformat(),
            "shifts": roster["shifts"],
            "venues": roster["venues"],
        },
    )
