"""Bootstrap an administrator account.

Every role change goes through an existing admin, so the first one has to be
created out of band:

    python populate_db.py admin@example.com
"""
import os
import sys
import logging

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from config import settings
from database import Store, utcnow
from models.users import User

logger = logging.getLogger(__name__)


def ensure_admin(store: Store, email: str) -> User:
    """Create the user as admin, or promote an existing account."""
    session = store.session()
    try:
        user = session.query(User).filter(User.email == email).first()
        if user:
            user.role = "admin"
        else:
            now = utcnow()
            user = User(email=email, role="admin", profile={}, created_at=now, last_login=now)
            session.add(user)
        session.commit()
        session.refresh(user)
        return user
    finally:
        session.close()


def main(argv):
    if len(argv) != 2:
        print("Usage: python populate_db.py <admin-email>")
        return 1

    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    store = Store(settings.DATABASE_URL)
    store.connect()
    try:
        user = ensure_admin(store, argv[1])
        print(f"{user.email} is now an admin (id {user.id}).")
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
