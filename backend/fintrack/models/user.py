# User domain model (Beanie Document)
# - full name, email, password hash, optional profile image URL, timestamps
# - email carries a unique index; it is stored exactly as submitted

from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import Field


class User(Document):
    full_name: str
    email: Indexed(str, unique=True)
    password_hash: str = Field(repr=False)
    profile_image_url: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"
