# Financial entry service layer
# - add / list / delete / export for one EntryKind (Income or Expense)
# - every read and write is scoped by the caller's id, except delete unless
#   ENFORCE_ENTRY_OWNERSHIP is set

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from beanie import PydanticObjectId
from fastapi import Depends

from ..core.config import Settings, get_settings
from ..core.exceptions import MissingFieldsError
from ..models.entry import EntryKind, FinancialEntry
from ..repositories.entry_repository import EntryRepository
from .export_service import build_workbook

logger = logging.getLogger(__name__)


def _as_utc_naive(value: datetime) -> datetime:
    # MongoDB stores UTC without tzinfo
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class EntryService:
    def __init__(self, kind: EntryKind, repo: EntryRepository, settings: Settings):
        self.kind = kind
        self.repo = repo
        self.settings = settings

    async def add(
        self,
        user_id: PydanticObjectId,
        label: Optional[str],
        amount: Optional[float],
        date: Optional[datetime],
        icon: Optional[str] = None,
    ) -> FinancialEntry:
        if not label or not amount or not date:
            raise MissingFieldsError()

        entry = await self.repo.create(
            user_id=user_id,
            icon=icon,
            amount=amount,
            date=_as_utc_naive(date),
            **{self.kind.label_field: label},
        )
        logger.info(f"[{self.kind.name}] User {user_id} added entry {entry.id}")
        return entry

    async def list_all(self, user_id: PydanticObjectId) -> List[FinancialEntry]:
        return await self.repo.list_by_user(user_id)

    async def delete(self, entry_id: str, user_id: PydanticObjectId) -> None:
        # an id that is not an ObjectId raises here and surfaces as a 500
        object_id = PydanticObjectId(entry_id)
        owner_id = user_id if self.settings.ENFORCE_ENTRY_OWNERSHIP else None
        deleted = await self.repo.delete(object_id, owner_id)
        logger.info(f"[{self.kind.name}] User {user_id} deleted {entry_id} (removed={deleted})")

    async def export_spreadsheet(self, user_id: PydanticObjectId) -> bytes:
        entries = await self.list_all(user_id)
        return build_workbook(self.kind, entries)


def entry_service_dependency(kind: EntryKind) -> Callable[..., EntryService]:
    """Build a FastAPI dependency that yields the service for ``kind``."""
    def get_entry_service(settings: Settings = Depends(get_settings)) -> EntryService:
        return EntryService(kind, EntryRepository(kind.document), settings)
    return get_entry_service
