# backend/utils/identity.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError
from jose import jwt, JWTError
from starlette.concurrency import run_in_threadpool

from config import Settings

logger = logging.getLogger(__name__)


class InvalidToken(Exception):
    """Raised by a verifier when a bearer credential is rejected."""


# Verifies HS256 tokens signed with the local SECRET_KEY (development and tests)
class JwtIdentityVerifier:
    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.algorithm = algorithm

    async def verify(self, token: str) -> dict:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidToken(str(e)) from e
        # Tokens minted by create_access_token carry the email as "sub"
        if not payload.get("email") and payload.get("sub"):
            payload["email"] = payload["sub"]
        return payload


# Verifies Firebase ID tokens through the Admin SDK
class FirebaseIdentityVerifier:
    def __init__(self, credentials_path: Optional[str] = None):
        if credentials_path:
            cred = credentials.Certificate(credentials_path)
        else:
            cred = credentials.ApplicationDefault()
        try:
            self.app = firebase_admin.initialize_app(cred)
        except ValueError:
            # Already initialized in this process
            self.app = firebase_admin.get_app()
        logger.info("Firebase Admin initialized, app name: %s", self.app.name)

    async def verify(self, token: str) -> dict:
        try:
            # The SDK call is blocking (it may fetch signing certificates)
            return await run_in_threadpool(auth.verify_id_token, token, app=self.app)
        except (ValueError, FirebaseError) as e:
            raise InvalidToken(str(e)) from e


def build_identity_verifier(settings: Settings):
    if settings.IDENTITY_PROVIDER == "firebase":
        return FirebaseIdentityVerifier(settings.FIREBASE_CREDENTIALS)
    return JwtIdentityVerifier(settings.SECRET_KEY, settings.ALGORITHM)


# Generate a new JWT access token
def create_access_token(data: dict, settings: Settings, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
