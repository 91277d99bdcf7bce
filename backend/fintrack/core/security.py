# Security / auth utilities
# - password hashing and verification
# - access token issuing and verification
# - current user lookup (FastAPI dependency, the auth gate for protected routes)

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from beanie import PydanticObjectId
from bson.errors import InvalidId
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from .config import Settings, get_settings
from .exceptions import (
    AuthError,
    ExpiredTokenError,
    InvalidTokenError,
    MalformedTokenError,
    UnknownTokenSubjectError,
    internal_errors,
)
from ..models.user import User
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)
bearer_scheme = HTTPBearer(auto_error=False)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # stored value is not a recognizable bcrypt hash
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_token(subject: dict, settings: Settings, expires_delta: timedelta, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(tz=timezone.utc)
    payload = {
        "exp": now + expires_delta,
        "iat": now,
        **subject,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def create_access_token(user_id: str, settings: Settings, now: Optional[datetime] = None) -> str:
    return create_token(
        {"id": str(user_id)},
        settings,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        now=now,
    )

def decode_access_token(token: str, settings: Settings) -> str:
    """Verify a token and return the user id it carries.

    Raises:
        ExpiredTokenError: ``exp`` is at or before the current time
        InvalidTokenError: bad signature, wrong algorithm or missing claims
        MalformedTokenError: the token is not a parseable JWT
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "id"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise ExpiredTokenError() from e
    except jwt.InvalidSignatureError as e:
        raise InvalidTokenError() from e
    except jwt.DecodeError as e:
        raise MalformedTokenError() from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError() from e

    user_id = payload["id"]
    if not isinstance(user_id, str) or not user_id:
        raise InvalidTokenError()
    return user_id

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> User:
    # missing header or non-Bearer scheme: reject before touching the token
    if credentials is None:
        raise AuthError()

    try:
        user_id = decode_access_token(credentials.credentials, settings)
    except AuthError as e:
        logger.debug(f"Rejected token: {type(e).__name__}")
        raise

    try:
        object_id = PydanticObjectId(user_id)
    except (InvalidId, TypeError) as e:
        raise MalformedTokenError() from e

    with internal_errors():
        user = await UserRepository().get(object_id)
    if user is None:
        logger.info(f"Token subject {user_id} no longer exists")
        raise UnknownTokenSubjectError()

    return user
