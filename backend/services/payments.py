# backend/services/payments.py
import logging
from typing import List

from sqlalchemy import or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.parcel import Parcel
from models.payment import Payment
from schemas.payment import PaymentCreate
from utils.errors import Conflict, Forbidden, InvalidArgument, StoreError

logger = logging.getLogger(__name__)

PAID = "Paid"


class PaymentService:
    def __init__(self, db: Session, processor=None, currency: str = "usd"):
        self.db = db
        self.processor = processor
        self.currency = currency

    async def create_charge_intent(self, amount_in_cents) -> str:
        if isinstance(amount_in_cents, bool) or not isinstance(amount_in_cents, int) or amount_in_cents <= 0:
            raise InvalidArgument("amountInCents must be a positive integer.")
        # Processor failures propagate as PaymentProcessorError
        return await self.processor.create_payment_intent(amount_in_cents, self.currency)

    def record_payment(self, payload: PaymentCreate) -> Payment:
        """Mark the parcel paid, then store the payment record.

        Both writes share one transaction. The parcel update only matches a
        parcel that is not already paid, so a repeated or concurrent call for
        the same parcel gets a Conflict and creates no payment record.
        """
        fields = {
            "parcelId": payload.parcel_id,
            "transactionId": payload.transaction_id,
            "email": payload.email,
            "amount": payload.amount,
        }
        missing = [name for name, value in fields.items() if not value]
        if missing:
            raise InvalidArgument(f"Missing required payment fields: {', '.join(missing)}.")

        # 1. Flip the parcel to Paid
        try:
            result = self.db.execute(
                update(Parcel)
                .where(
                    Parcel.id == payload.parcel_id,
                    or_(Parcel.payment_status.is_(None), Parcel.payment_status != PAID),
                )
                .values(status=PAID, payment_status=PAID, transaction_id=payload.transaction_id)
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to mark parcel %s paid: %s", payload.parcel_id, e)
            raise StoreError(f"Payment processing failed: {e}")

        if result.rowcount == 0:
            self.db.rollback()
            raise Conflict("Parcel not found or already paid.")

        # 2-3. Snapshot the tracking id into a new payment record
        try:
            tracking_id = (
                self.db.query(Parcel.tracking_id).filter(Parcel.id == payload.parcel_id).scalar()
            )
            payment = Payment(
                parcel_id=payload.parcel_id,
                tracking_id=tracking_id or "",
                transaction_id=payload.transaction_id,
                email=payload.email,
                amount=payload.amount,
            )
            self.db.add(payment)
            self.db.commit()
            self.db.refresh(payment)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.critical(
                "CRITICAL: parcel %s was marked paid but the payment record failed "
                "(transaction %s, %s). Rolled back; charge may need manual review: %s",
                payload.parcel_id, payload.transaction_id, payload.email, e,
            )
            raise StoreError(f"Payment processing failed: {e}")

        logger.info("Payment %s recorded for parcel %s", payment.id, payment.parcel_id)
        return payment

    def list_payments(self, requester_email: str, query_email: str) -> List[Payment]:
        # Users may only see their own payment history
        if not requester_email or requester_email != query_email:
            raise Forbidden("Forbidden access")
        return (
            self.db.query(Payment)
            .filter(Payment.email == query_email)
            .order_by(Payment.paid_at.desc())
            .all()
        )
