from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.services import report_service

router = APIRouter()


@router.get("/payments")
def payment_report(start_date: date = Query(...), end_date: date = Query(...), db: Session = Depends(get_db)):
    return report_service.payment_report(db, start_date=start_date, end_date=end_date)


@router.get("/inventory")
def inventory_report(
    start_date: date = Query(...),
    end_date: date = Query(...),
    category_id: str | None = None,
    db: Session = Depends(get_db),
):
    return report_service.inventory_report(db, start_date=start_date, end_date=end_date, category_id=category_id)


@router.get("/cash-flow")
def cash_flow(start_date: date = Query(...), end_date: date = Query(...), db: Session = Depends(get_db)):
    return report_service.cash_flow(db, start_date=start_date, end_date=end_date)


@router.get("/schedules/summary")
def schedule_summary(start_date: date = Query(...), end_date: date = Query(...), db: Session = Depends(get_db)):
    return report_service.schedule_summary(db, start_date=start_date, end_date=end_date)
