from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.deps import get_db
from app.schemas.payment import PaymentOut, PaymentReject
from app.services import payment_service
from app.services.audit_service import write_audit_log

router = APIRouter()


@router.get("", response_model=list[PaymentOut])
def list_payments(
    order_id: str | None = None,
    status: str | None = None,
    payment_type: str | None = None,
    db: Session = Depends(get_db),
):
    return payment_service.list_payments(
        db,
        order_id=order_id,
        status=status,
        payment_type=payment_type,
        limit=get_settings().list_limit,
    )


@router.get("/{payment_id}", response_model=PaymentOut)
def get_payment(payment_id: str, db: Session = Depends(get_db)):
    return payment_service.get_payment(db, payment_id)


@router.post("/{payment_id}/verify", response_model=PaymentOut)
def verify_payment(payment_id: str, request: Request, db: Session = Depends(get_db)):
    payment = payment_service.verify_payment(db, payment_id)
    order = payment.order

    write_audit_log(
        db,
        action_type="PAYMENT_VERIFY",
        target_type="order",
        target_id=order.order_number,
        summary=f"Payment verified ({order.payment_status})",
        diff_json={"payment_id": payment.id, "amount": payment.amount, "paid_amount": order.paid_amount},
        request=request,
    )
    return payment


@router.post("/{payment_id}/reject", response_model=PaymentOut)
def reject_payment(payment_id: str, payload: PaymentReject, request: Request, db: Session = Depends(get_db)):
    payment = payment_service.reject_payment(db, payment_id, payload.reason)

    write_audit_log(
        db,
        action_type="PAYMENT_REJECT",
        target_type="order",
        target_id=payment.order.order_number,
        summary="Payment rejected",
        diff_json={"payment_id": payment.id, "reason": payment.rejected_reason},
        request=request,
    )
    return payment


@router.delete("/{payment_id}")
def delete_payment(payment_id: str, request: Request, db: Session = Depends(get_db)):
    payment_service.delete_payment(db, payment_id)

    write_audit_log(db, action_type="PAYMENT_DELETE", target_type="payment", target_id=payment_id, summary="Deleted payment", request=request)
    return {"ok": True}
