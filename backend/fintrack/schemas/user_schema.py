# Request/response schemas for auth (Pydantic models)
# JSON keys are camelCase (fullName, profileImageUrl, ...); required fields are
# optional here so that the service can answer 400 "All fields are required."

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from ..models.user import User


def to_utc_iso(value: datetime) -> str:
    # stored datetimes are naive UTC; send them with an explicit Z
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


UtcDatetime = Annotated[datetime, PlainSerializer(to_utc_iso, return_type=str)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    profile_image_url: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(CamelModel):
    id: str = Field(alias="_id")
    full_name: str
    email: str
    profile_image_url: Optional[str] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime

    @classmethod
    def from_document(cls, user: User) -> "UserPublic":
        return cls(
            id=str(user.id),
            full_name=user.full_name,
            email=user.email,
            profile_image_url=user.profile_image_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponse(CamelModel):
    id: str = Field(alias="_id")
    user: UserPublic
    token: str
