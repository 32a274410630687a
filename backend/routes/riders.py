# backend/routes/riders.py
from typing import List, Dict, Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas.common import DeleteResult, InsertResult, UpdateResult
from schemas.rider import RiderApply, RiderApproval, RoleSyncResult
from services.riders import RiderOnboardingService, rider_to_out
from utils.access import require_admin
from utils.audit import client_ip, log_committed_change

router = APIRouter(prefix="/riders", tags=["Riders"])


def get_rider_service(request: Request, db: Session = Depends(get_db)) -> RiderOnboardingService:
    settings = request.app.state.settings
    return RiderOnboardingService(db, cancel_pending_only=settings.RIDER_CANCEL_PENDING_ONLY)


# Submit a courier application
@router.post("", response_model=InsertResult)
def apply(payload: RiderApply, service: RiderOnboardingService = Depends(get_rider_service)):
    return service.apply(payload)


@router.get("/pending")
def pending_riders(
    admin: User = Depends(require_admin),
    service: RiderOnboardingService = Depends(get_rider_service),
) -> List[Dict[str, Any]]:
    return [rider_to_out(r) for r in service.list_pending()]


@router.get("/active")
def active_riders(
    admin: User = Depends(require_admin),
    service: RiderOnboardingService = Depends(get_rider_service),
) -> List[Dict[str, Any]]:
    return [rider_to_out(r) for r in service.list_active()]


# Approve an application and promote the applicant to rider (Admin only)
@router.patch("/approve/{rider_id}", response_model=RiderApproval)
def approve_rider(
    rider_id: str,
    request: Request,
    admin: User = Depends(require_admin),
    service: RiderOnboardingService = Depends(get_rider_service),
):
    result = service.approve(rider_id)
    log_committed_change(service.db, actor=admin.email, action="RIDER_APPROVE", resource="riders",
                         status="SUCCESS" if result.success else "FAIL", ip=client_ip(request),
                         meta={"rider_id": rider_id, "role_updated": result.role_updated})
    return result


# Deactivate an approved rider; the user keeps the rider role (Admin only)
@router.patch("/deactivate/{rider_id}", response_model=UpdateResult)
def deactivate_rider(
    rider_id: str,
    request: Request,
    admin: User = Depends(require_admin),
    service: RiderOnboardingService = Depends(get_rider_service),
):
    result = service.deactivate(rider_id)
    log_committed_change(service.db, actor=admin.email, action="RIDER_DEACTIVATE", resource="riders",
                         status="SUCCESS", ip=client_ip(request),
                         meta={"rider_id": rider_id, "matched": result.matched_count})
    return result


# Remove an application outright (Admin only)
@router.delete("/cancel/{rider_id}", response_model=DeleteResult)
def cancel_application(
    rider_id: str,
    request: Request,
    admin: User = Depends(require_admin),
    service: RiderOnboardingService = Depends(get_rider_service),
):
    result = service.cancel(rider_id)
    log_committed_change(service.db, actor=admin.email, action="RIDER_CANCEL", resource="riders",
                         status="SUCCESS", ip=client_ip(request),
                         meta={"rider_id": rider_id, "deleted": result.deleted_count})
    return result


# Repair roles for applicants approved before their first login (Admin only)
@router.patch("/sync-roles", response_model=RoleSyncResult)
def sync_rider_roles(
    request: Request,
    admin: User = Depends(require_admin),
    service: RiderOnboardingService = Depends(get_rider_service),
):
    updated = service.sync_roles()
    log_committed_change(service.db, actor=admin.email, action="RIDER_ROLE_SYNC", resource="riders",
                         status="SUCCESS", ip=client_ip(request), meta={"updated": updated})
    return {"updated": updated}
