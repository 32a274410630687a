# backend/schemas/payment.py
from pydantic import Field
from typing import Optional
from datetime import datetime

from schemas.common import WireModel

class PaymentIntentRequest(WireModel):
    amount_in_cents: Optional[int] = Field(None, alias="amountInCents")

class PaymentIntentResponse(WireModel):
    client_secret: str = Field(alias="clientSecret")

# Required fields are checked by the service to answer with a 400
class PaymentCreate(WireModel):
    parcel_id: Optional[str] = Field(None, alias="parcelId")
    transaction_id: Optional[str] = Field(None, alias="transactionId")
    email: Optional[str] = None
    amount: Optional[float] = None

class PaymentRecorded(WireModel):
    success: bool = True
    payment_id: str = Field(alias="paymentId")
    message: str

class PaymentOut(WireModel):
    id: str
    parcel_id: str = Field(alias="parcelId")
    tracking_id: str = Field("", alias="trackingId")
    transaction_id: str = Field(alias="transactionId")
    email: str
    amount: float
    paid_at: datetime
