# backend/services/riders.py
import logging
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.rider import Rider, RiderStatus
from models.users import User
from schemas.common import DeleteResult, InsertResult
from schemas.rider import RiderApply, RiderApproval
from utils.errors import Conflict, InvalidArgument, StoreError
from utils.results import set_fields

logger = logging.getLogger(__name__)

VALID_STATUSES = {s.value for s in RiderStatus}


def rider_to_out(rider: Rider) -> Dict[str, Any]:
    out = dict(rider.details or {})
    out.update(
        id=rider.id,
        email=rider.email,
        name=rider.name,
        phone=rider.phone,
        status=rider.status,
        created_at=rider.created_at,
    )
    return out


class RiderOnboardingService:
    """Courier applications: pending -> approved -> inactive, or cancelled.

    Approval is the one step that touches two collections: the application
    and the applicant's user account.
    """

    def __init__(self, db: Session, cancel_pending_only: bool = False):
        self.db = db
        self.cancel_pending_only = cancel_pending_only

    def apply(self, data: RiderApply) -> InsertResult:
        status = (data.status or RiderStatus.PENDING.value).lower()
        if status not in VALID_STATUSES:
            raise InvalidArgument(f"Invalid rider status: {data.status}")

        rider = Rider(
            email=data.email,
            name=data.name,
            phone=data.phone,
            status=status,
            details=dict(data.model_extra or {}),
        )
        self.db.add(rider)
        self.db.commit()
        self.db.refresh(rider)
        logger.info("Rider application %s submitted by %s", rider.id, rider.email)
        return InsertResult(inserted_id=rider.id)

    def list_by_status(self, status: RiderStatus) -> List[Rider]:
        return (
            self.db.query(Rider)
            .filter(Rider.status == status.value)
            .order_by(Rider.created_at.desc())
            .all()
        )

    def list_pending(self) -> List[Rider]:
        return self.list_by_status(RiderStatus.PENDING)

    def list_active(self) -> List[Rider]:
        return self.list_by_status(RiderStatus.APPROVED)

    def approve(self, rider_id: str) -> RiderApproval:
        # Status change and role promotion commit together or not at all.
        # A missing user account is not an error: the role can be repaired
        # later with sync_roles().
        try:
            rider = self.db.get(Rider, rider_id)
            rider_result = set_fields(rider, status=RiderStatus.APPROVED.value)
            if rider is None:
                return RiderApproval(
                    success=False,
                    message="Rider application not found",
                    rider_result=rider_result,
                )

            role_updated = False
            if rider.email:
                user = self.db.query(User).filter(User.email == rider.email).first()
                if user and user.role == "admin":
                    logger.info("Approved rider %s is an admin; role left unchanged", rider.id)
                elif user:
                    user.role = "rider"
                    role_updated = True
                else:
                    logger.warning("Approved rider %s has no user account for %s", rider.id, rider.email)

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to approve rider %s: %s", rider_id, e)
            raise StoreError(f"Failed to approve rider or update role: {e}")

        return RiderApproval(
            success=True,
            message="Rider approved & role updated" if role_updated else "Rider approved",
            rider_result=rider_result,
            role_updated=role_updated,
        )

    def deactivate(self, rider_id: str):
        # The user's rider role is intentionally left in place
        rider = self.db.get(Rider, rider_id)
        result = set_fields(rider, status=RiderStatus.INACTIVE.value)
        self.db.commit()
        return result

    def cancel(self, rider_id: str) -> DeleteResult:
        rider = self.db.get(Rider, rider_id)
        if rider is None:
            return DeleteResult(deleted_count=0)
        if self.cancel_pending_only and rider.status != RiderStatus.PENDING.value:
            raise Conflict(f"Cannot cancel a rider application with status {rider.status}")

        self.db.delete(rider)
        self.db.commit()
        return DeleteResult(deleted_count=1)

    def sync_roles(self) -> int:
        """Promote users whose application was approved before they first logged in."""
        emails = [
            email for (email,) in self.db.query(Rider.email)
            .filter(Rider.status == RiderStatus.APPROVED.value, Rider.email.isnot(None))
            .distinct()
        ]
        if not emails:
            return 0

        users = self.db.query(User).filter(User.email.in_(emails), User.role == "user").all()
        for user in users:
            user.role = "rider"
        self.db.commit()
        if users:
            logger.info("Promoted %d approved applicants to rider", len(users))
        return len(users)
