# Financial entry repository layer
# - one instance per document class (Income / Expense)
# - listing is always scoped by owner; deletion only when owner_id is passed

from typing import List, Optional, Type

import pymongo
from beanie import PydanticObjectId

from ..models.entry import FinancialEntry

# newest date first; equal dates keep insertion order (ObjectIds increase)
NEWEST_FIRST = [("date", pymongo.DESCENDING), ("_id", pymongo.ASCENDING)]


class EntryRepository:
    def __init__(self, document: Type[FinancialEntry]):
        self.document = document

    async def create(self, **fields) -> FinancialEntry:
        entry = self.document(**fields)
        return await entry.insert()

    async def list_by_user(self, user_id: PydanticObjectId) -> List[FinancialEntry]:
        return await self.document.find(self.document.user_id == user_id).sort(NEWEST_FIRST).to_list()

    async def delete(self, entry_id: PydanticObjectId, owner_id: Optional[PydanticObjectId] = None) -> int:
        query = {"_id": entry_id}
        if owner_id is not None:
            query["user_id"] = owner_id
        result = await self.document.find(query).delete()
        return result.deleted_count if result else 0
