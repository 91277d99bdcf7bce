# User repository layer
# - data access only (lookup / create); business rules live in the service

from typing import Optional

from beanie import PydanticObjectId

from ..models.user import User

class UserRepository:
    async def get_by_email(self, email: str) -> Optional[User]:
        return await User.find_one(User.email == email)

    async def create(self, full_name: str, email: str, password_hash: str, profile_image_url: Optional[str] = None) -> User:
        user = User(
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            profile_image_url=profile_image_url,
        )
        return await user.insert()

    async def get(self, user_id: PydanticObjectId) -> Optional[User]:
        return await User.get(user_id)
