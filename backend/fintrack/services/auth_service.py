# Auth service layer
# - registration (required fields, duplicate email check, explicit password hashing)
# - login (password verification, access token issuing)
# - current user profile

import logging
from typing import Optional, Tuple

from beanie import PydanticObjectId
from fastapi import Depends
from pymongo.errors import DuplicateKeyError

from ..core.config import Settings, get_settings
from ..core.exceptions import EmailTakenError, InvalidCredentialsError, MissingFieldsError, NotFoundError
from ..core.security import create_access_token, get_password_hash, verify_password
from ..models.user import User
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, repo: UserRepository, settings: Settings):
        self.repo = repo
        self.settings = settings

    async def register(
        self,
        full_name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        profile_image_url: Optional[str] = None,
    ) -> Tuple[User, str]:
        if not full_name or not email or not password:
            raise MissingFieldsError()

        if await self.repo.get_by_email(email):
            raise EmailTakenError()

        # the repository only ever sees the hash
        password_hash = get_password_hash(password)
        try:
            user = await self.repo.create(full_name, email, password_hash, profile_image_url)
        except DuplicateKeyError as e:
            # a concurrent registration won the unique index
            raise EmailTakenError() from e

        logger.info(f"Registered user {user.id}")
        return user, create_access_token(str(user.id), self.settings)

    async def login(self, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        if not email or not password:
            raise MissingFieldsError()

        user = await self.repo.get_by_email(email)
        # unknown email and wrong password are reported identically
        if not user or not verify_password(password, user.password_hash):
            logger.info(f"Failed login for {email}")
            raise InvalidCredentialsError()

        return user, create_access_token(str(user.id), self.settings)

    async def get_self(self, user_id: PydanticObjectId) -> User:
        user = await self.repo.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user


def get_auth_service(
    repo: UserRepository = Depends(UserRepository),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(repo, settings)
