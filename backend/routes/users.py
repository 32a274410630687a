# backend/routes/users.py
import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db, utcnow
from models.users import User
from schemas.common import InsertResult, UpdateResult
from schemas.user import LoginUpdated, RoleResponse, UserLogin, UserResponse
from utils.access import require_admin
from utils.audit import client_ip, log_committed_change
from utils.errors import InvalidArgument, NotFound
from utils.results import set_fields

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)

VALID_ROLES = ("admin", "rider", "user")


def _like_pattern(keyword: str) -> str:
    # Escape LIKE wildcards so the keyword matches literally
    escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _find_user(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def _set_role(db: Session, email: str, role: str) -> UpdateResult:
    user = _find_user(db, email)
    result = set_fields(user, role=role)
    db.commit()
    return result


def _touch_login(db: Session, user: User, now) -> LoginUpdated:
    user.last_login = now
    db.commit()
    return LoginUpdated(message="User already exists. Updated last_login.", inserted=False)


# Record a login: create the account on first sight, otherwise touch last_login
@router.post("")
def upsert_login(payload: UserLogin, db: Session = Depends(get_db)):
    now = utcnow()
    user = _find_user(db, payload.email)
    if user:
        return _touch_login(db, user, now)

    profile = dict(payload.model_extra or {})
    # Roles are granted by admins or rider approval, never by the client
    profile.pop("role", None)

    user = User(
        email=payload.email,
        role="user",
        name=payload.name,
        photo_url=payload.photo_url,
        profile=profile,
        created_at=now,
        last_login=now,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent first login created the account between lookup and insert
        db.rollback()
        existing = _find_user(db, payload.email)
        if existing is None:
            raise
        return _touch_login(db, existing, now)
    db.refresh(user)
    logger.info("New user %s registered", user.email)
    return InsertResult(inserted_id=user.id)


@router.get("/role-by-email/{email}", response_model=RoleResponse)
def get_role_by_email(email: str, db: Session = Depends(get_db)):
    user = _find_user(db, email)
    if not user:
        raise NotFound("User not found")
    return {"role": user.role or "user"}


# Partial, case-insensitive email match (Admin only)
@router.get("/search/{keyword}", response_model=List[UserResponse])
def search_users(
    keyword: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    users = (
        db.query(User)
        .filter(User.email.ilike(_like_pattern(keyword), escape="\\"))
        .order_by(User.email.asc())
        .all()
    )
    if not users:
        raise NotFound("No matching users found")
    return users


# Users holding a given role, newest first (Admin only)
@router.get("/role/{role}", response_model=List[UserResponse])
def list_users_by_role(
    role: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    role = role.lower()
    if role not in VALID_ROLES:
        raise InvalidArgument("Invalid role type.")

    return (
        db.query(User)
        .filter(User.role == role)
        .order_by(User.created_at.desc())
        .all()
    )


# Grant admin (Admin only)
@router.patch("/admin/{email}", response_model=UpdateResult)
def make_admin(
    email: str,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    result = _set_role(db, email, "admin")
    log_committed_change(db, actor=admin.email, action="ROLE_GRANT", resource="users", status="SUCCESS",
                         ip=client_ip(request), meta={"email": email, "role": "admin", "matched": result.matched_count})
    return result


# Revoke admin (Admin only)
@router.patch("/remove-admin/{email}", response_model=UpdateResult)
def remove_admin(
    email: str,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    result = _set_role(db, email, "user")
    log_committed_change(db, actor=admin.email, action="ROLE_REVOKE", resource="users", status="SUCCESS",
                         ip=client_ip(request), meta={"email": email, "role": "user", "matched": result.matched_count})
    return result
