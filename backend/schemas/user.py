from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, field_validator
from typing import Any, Dict, Optional
from datetime import datetime

# Profile sent by the client after every identity-provider login
class UserLogin(BaseModel):
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        # Validated but kept as sent: tokens and path params look the account up verbatim
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e))
        return value

    class Config:
        extra = "allow"

# Output schema for user profile details
class UserResponse(BaseModel):
    id: str
    email: str
    role: str = "user"
    name: Optional[str] = None
    photo_url: Optional[str] = None
    profile: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True

# Returned when the login hit an existing account
class LoginUpdated(BaseModel):
    message: str
    inserted: bool = False

class RoleResponse(BaseModel):
    role: str
