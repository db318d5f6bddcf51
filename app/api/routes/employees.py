from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.deps import get_db
from app.models.employee import Employee
from app.schemas.employee import EmployeeCreate, EmployeeOut, EmployeeUpdate
from app.services.audit_service import write_audit_log

router = APIRouter()


@router.get("", response_model=list[EmployeeOut])
def list_employees(status: str | None = None, position: str | None = None, db: Session = Depends(get_db)):
    q = select(Employee).order_by(Employee.name)
    if status:
        q = q.where(Employee.status == status)
    if position:
        q = q.where(Employee.position == position)
    return db.execute(q.limit(get_settings().list_limit)).scalars().all()


@router.post("", response_model=EmployeeOut, status_code=201)
def create_employee(payload: EmployeeCreate, request: Request, db: Session = Depends(get_db)):
    exists = db.execute(
        select(Employee.id).where((Employee.employee_code == payload.employee_code) | (Employee.email == str(payload.email)))
    ).first()
    if exists:
        raise HTTPException(status_code=422, detail="Employee code or email already in use")

    e = Employee(**payload.model_dump())
    e.email = str(payload.email)
    db.add(e)
    db.commit()
    db.refresh(e)

    write_audit_log(db, action_type="EMPLOYEE_CREATE", target_type="employee", target_id=e.id, summary="Created employee", request=request)
    return e


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(employee_id: str, db: Session = Depends(get_db)):
    e = db.get(Employee, employee_id)
    if not e:
        raise HTTPException(status_code=404, detail="Not found")
    return e


@router.patch("/{employee_id}", response_model=EmployeeOut)
def update_employee(employee_id: str, payload: EmployeeUpdate, request: Request, db: Session = Depends(get_db)):
    e = db.get(Employee, employee_id)
    if not e:
        raise HTTPException(status_code=404, detail="Not found")
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in data:
        taken = db.execute(select(Employee.id).where(Employee.email == str(data["email"]), Employee.id != employee_id)).first()
        if taken:
            raise HTTPException(status_code=422, detail="Employee email already in use")
    for k, v in data.items():
        setattr(e, k, str(v) if k == "email" else v)
    db.commit()
    db.refresh(e)

    write_audit_log(db, action_type="EMPLOYEE_UPDATE", target_type="employee", target_id=e.id, summary="Updated employee", diff_json={"keys": sorted(data.keys())}, request=request)
    return e


@router.delete("/{employee_id}")
def delete_employee(employee_id: str, request: Request, db: Session = Depends(get_db)):
    e = db.get(Employee, employee_id)
    if not e:
        raise HTTPException(status_code=404, detail="Not found")
    db.delete(e)
    db.commit()

    write_audit_log(db, action_type="EMPLOYEE_DELETE", target_type="employee", target_id=employee_id, summary="Deleted employee", request=request)
    return {"ok": True}
