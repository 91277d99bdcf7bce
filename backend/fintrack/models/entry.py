# Financial entry models (Beanie Documents)
# - Income and Expense share one shape and live in separate collections
# - the label field differs: Income.source, Expense.category

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Type

import pymongo
from beanie import Document, PydanticObjectId
from pydantic import Field

# serves the per-user, newest-first listing
BY_OWNER_NEWEST_FIRST = [("user_id", pymongo.ASCENDING), ("date", pymongo.DESCENDING)]


class FinancialEntry(Document):
    user_id: PydanticObjectId
    icon: Optional[str] = None
    amount: float
    date: datetime = Field(default_factory=datetime.utcnow)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class Income(FinancialEntry):
    source: str  # e.g. Salary, Freelance

    class Settings:
        name = "incomes"
        indexes = [BY_OWNER_NEWEST_FIRST]


class Expense(FinancialEntry):
    category: str  # e.g. Rent, Groceries

    class Settings:
        name = "expenses"
        indexes = [BY_OWNER_NEWEST_FIRST]


@dataclass(frozen=True)
class EntryKind:
    """Describes one kind of financial entry and how it is presented."""
    name: str  # URL segment, e.g. "income"
    title: str
    document: Type[FinancialEntry]
    label_field: str

    @property
    def label_header(self) -> str:
        return self.label_field.capitalize()

    @property
    def sheet_name(self) -> str:
        return self.title

    @property
    def filename(self) -> str:
        return f"{self.name}_details.xlsx"


INCOME = EntryKind(name="income", title="Income", document=Income, label_field="source")
EXPENSE = EntryKind(name="expense", title="Expense", document=Expense, label_field="category")
