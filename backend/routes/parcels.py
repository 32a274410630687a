# backend/routes/parcels.py
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_db, utcnow
from models.parcel import Parcel
from schemas.common import DeleteResult
from schemas.parcel import ParcelCreate, ParcelCreated
from utils.errors import NotFound

router = APIRouter(prefix="/parcels", tags=["Parcels"])
logger = logging.getLogger(__name__)


# Map Parcel model to its wire representation, extra fields inlined
def _parcel_to_out(parcel: Parcel) -> Dict[str, Any]:
    out = dict(parcel.details or {})
    out.update(
        id=parcel.id,
        created_by=parcel.created_by,
        status=parcel.status,
        payment_status=parcel.payment_status,
        trackingId=parcel.tracking_id,
        transactionId=parcel.transaction_id,
        creation_date=parcel.creation_date,
    )
    return out


# All parcels, optionally filtered by owner email and status, newest first
@router.get("")
def list_parcels(
    email: Optional[str] = Query(None, description="Owner email"),
    status: Optional[str] = Query(None, description="Parcel status"),
    db: Session = Depends(get_db),
):
    query = db.query(Parcel)
    if email:
        query = query.filter(Parcel.created_by == email)
    if status:
        query = query.filter(Parcel.status == status)

    parcels = query.order_by(Parcel.creation_date.desc()).all()
    return [_parcel_to_out(p) for p in parcels]


@router.get("/{parcel_id}")
def get_parcel(parcel_id: str, db: Session = Depends(get_db)):
    parcel = db.get(Parcel, parcel_id)
    if not parcel:
        raise NotFound("Parcel not found")
    return _parcel_to_out(parcel)


@router.post("", status_code=201, response_model=ParcelCreated)
def create_parcel(payload: ParcelCreate, db: Session = Depends(get_db)):
    parcel = Parcel(
        created_by=payload.created_by,
        status=payload.status or "pending",
        payment_status=payload.payment_status or "unpaid",
        tracking_id=payload.tracking_id,
        creation_date=payload.creation_date or utcnow(),
        details=dict(payload.model_extra or {}),
    )
    db.add(parcel)
    db.commit()
    db.refresh(parcel)
    logger.info("Parcel %s created by %s", parcel.id, parcel.created_by)
    return ParcelCreated(message="Parcel added successfully", inserted_id=parcel.id)


# Tracking events and payment records are kept as history
@router.delete("/{parcel_id}", response_model=DeleteResult)
def delete_parcel(parcel_id: str, db: Session = Depends(get_db)):
    parcel = db.get(Parcel, parcel_id)
    if not parcel:
        return DeleteResult(deleted_count=0)
    db.delete(parcel)
    db.commit()
    return DeleteResult(deleted_count=1)
