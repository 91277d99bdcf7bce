# Request/response schemas for income and expense entries

from datetime import datetime
from typing import Optional

from pydantic import Field

from .user_schema import CamelModel, UtcDatetime
from ..models.entry import FinancialEntry


class EntryCreate(CamelModel):
    icon: Optional[str] = None
    # NaN and infinity cannot be stored or serialized as a number
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    date: Optional[datetime] = None


class IncomeCreate(EntryCreate):
    source: Optional[str] = None


class ExpenseCreate(EntryCreate):
    category: Optional[str] = None


class EntryPublic(CamelModel):
    id: str = Field(alias="_id")
    user_id: str
    icon: Optional[str] = None
    amount: float
    date: UtcDatetime
    created_at: UtcDatetime
    updated_at: UtcDatetime

    @classmethod
    def from_document(cls, entry: FinancialEntry):
        data = entry.model_dump(exclude={"id", "revision_id", "user_id"})
        return cls(id=str(entry.id), user_id=str(entry.user_id), **data)


class IncomePublic(EntryPublic):
    source: str


class ExpensePublic(EntryPublic):
    category: str


class MessageResponse(CamelModel):
    message: str
