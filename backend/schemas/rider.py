# backend/schemas/rider.py
from pydantic import Field
from typing import Optional

from schemas.common import WireModel, UpdateResult

class RiderApply(WireModel):
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = None

    class Config:
        extra = "allow"

class RiderApproval(WireModel):
    success: bool
    message: str
    rider_result: UpdateResult = Field(alias="riderResult")
    # False when no user matched the application's email
    role_updated: bool = Field(False, alias="roleUpdated")

class RoleSyncResult(WireModel):
    updated: int
