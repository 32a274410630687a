import logging
from typing import Optional

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from models.log import Log

logger = logging.getLogger(__name__)

def client_ip(request: Optional[Request]) -> Optional[str]:
    if request is None or request.client is None:
        return None
    return request.client.host

def write_log(db: Session, *, actor, action, resource, status="SUCCESS", ip=None, meta=None):
    entry = Log(actor=actor, action=action, resource=resource, status=status, ip=ip, meta=meta or {})
    db.add(entry)
    db.commit()

def log_committed_change(db: Session, **entry) -> bool:
    """Audit a change that is already committed.

    A failed audit write is logged and rolled back; the caller's result stands.
    """
    try:
        write_log(db, **entry)
        return True
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to write audit log %s on %s: %s", entry.get("action"), entry.get("resource"), e)
        return False
