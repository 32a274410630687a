# backend/utils/access.py
import logging
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from utils.errors import Forbidden, NotFound, Unauthenticated
from utils.identity import InvalidToken

logger = logging.getLogger(__name__)


# Verify the bearer token and expose its claims to downstream handlers
async def require_authenticated(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> dict:
    if not authorization:
        raise Unauthenticated("Unauthorized access: No authorization header")

    parts = authorization.split(" ")
    token = parts[1] if len(parts) > 1 else None
    if not token:
        raise Unauthenticated("Unauthorized access: No token found")

    verifier = request.app.state.identity_verifier
    try:
        decoded = await verifier.verify(token)
    except InvalidToken as e:
        logger.info("Rejected bearer token: %s", e)
        raise Forbidden("Forbidden access: Invalid token")

    request.state.decoded = decoded
    return decoded


# Dependency factory for role-based access control
def role_required(*allowed_roles):
    def _checker(
        decoded: dict = Depends(require_authenticated),
        db: Session = Depends(get_db),
    ) -> User:
        email = decoded.get("email")
        if not email:
            raise Unauthenticated("Unauthorized: No email found in token")

        user = db.query(User).filter(User.email == email).first()
        if not user:
            raise NotFound("User not found")
        if (user.role or "user") not in allowed_roles:
            raise Forbidden(f"Forbidden: {', '.join(allowed_roles)} only")
        return user
    return _checker


require_admin = role_required("admin")
