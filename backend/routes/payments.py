# backend/routes/payments.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from database import get_db
from schemas.payment import (
    PaymentCreate, PaymentIntentRequest, PaymentIntentResponse, PaymentOut, PaymentRecorded
)
from services.payments import PaymentService
from utils.access import require_authenticated
from utils.audit import client_ip, log_committed_change

router = APIRouter(tags=["Payments"])


def get_payment_service(request: Request, db: Session = Depends(get_db)) -> PaymentService:
    return PaymentService(
        db,
        processor=request.app.state.payment_processor,
        currency=request.app.state.settings.PAYMENT_CURRENCY,
    )


# Create a card charge intent; the client completes the charge with the secret
@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    payload: PaymentIntentRequest,
    service: PaymentService = Depends(get_payment_service),
):
    client_secret = await service.create_charge_intent(payload.amount_in_cents)
    return PaymentIntentResponse(client_secret=client_secret)


# Payment history of the calling user, newest first
@router.get("/payments", response_model=List[PaymentOut])
def list_payments(
    email: Optional[str] = Query(None),
    decoded: dict = Depends(require_authenticated),
    service: PaymentService = Depends(get_payment_service),
):
    return service.list_payments(decoded.get("email"), email)


# Record a completed charge and mark the parcel paid
@router.post("/payments", response_model=PaymentRecorded)
def record_payment(
    payload: PaymentCreate,
    request: Request,
    decoded: dict = Depends(require_authenticated),
    service: PaymentService = Depends(get_payment_service),
):
    payment = service.record_payment(payload)
    log_committed_change(service.db, actor=decoded.get("email"), action="PAYMENT_RECORD", resource="payments",
                         status="SUCCESS", ip=client_ip(request),
                         meta={"payment_id": payment.id, "parcel_id": payment.parcel_id,
                               "transaction_id": payment.transaction_id, "amount": payment.amount})
    return PaymentRecorded(payment_id=payment.id, message="Payment recorded and parcel marked as paid.")
