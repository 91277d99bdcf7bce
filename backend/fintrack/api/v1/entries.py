# Income / expense routers (one per EntryKind, same routes)
# - POST   /api/v1/{kind}               add an entry
# - GET    /api/v1/{kind}               list own entries, newest date first
# - GET    /api/v1/{kind}/downloadexcel own entries as .xlsx
# - DELETE /api/v1/{kind}/{entry_id}    delete by id
# All routes require a Bearer token.

from typing import List, Type

from fastapi import APIRouter, Depends, Response

from ...core.exceptions import internal_errors
from ...core.security import get_current_user
from ...models.entry import EXPENSE, INCOME, EntryKind
from ...models.user import User
from ...schemas.entry_schema import (
    EntryCreate,
    EntryPublic,
    ExpenseCreate,
    ExpensePublic,
    IncomeCreate,
    IncomePublic,
    MessageResponse,
)
from ...services.entry_service import EntryService, entry_service_dependency
from ...services.export_service import XLSX_MEDIA_TYPE


def build_entry_router(kind: EntryKind, create_schema: Type[EntryCreate], public_schema: Type[EntryPublic]) -> APIRouter:
    router = APIRouter(prefix=f"/{kind.name}", tags=[kind.name])
    get_service = entry_service_dependency(kind)

    @router.post("", response_model=public_schema, summary=f"Add {kind.name}")
    async def add_entry(
        payload: create_schema,
        user: User = Depends(get_current_user),
        service: EntryService = Depends(get_service),
    ):
        with internal_errors():
            entry = await service.add(
                user.id,
                getattr(payload, kind.label_field),
                payload.amount,
                payload.date,
                icon=payload.icon,
            )
        return public_schema.from_document(entry)

    @router.get("", response_model=List[public_schema], summary=f"List {kind.name}, newest first")
    async def list_entries(
        user: User = Depends(get_current_user),
        service: EntryService = Depends(get_service),
    ):
        with internal_errors():
            entries = await service.list_all(user.id)
        return [public_schema.from_document(e) for e in entries]

    @router.get("/downloadexcel", summary=f"Download {kind.name} as .xlsx")
    async def download_excel(
        user: User = Depends(get_current_user),
        service: EntryService = Depends(get_service),
    ):
        with internal_errors():
            content = await service.export_spreadsheet(user.id)
        return Response(
            content=content,
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{kind.filename}"'},
        )

    @router.delete("/{entry_id}", response_model=MessageResponse, summary=f"Delete {kind.name}")
    async def delete_entry(
        entry_id: str,
        user: User = Depends(get_current_user),
        service: EntryService = Depends(get_service),
    ):
        with internal_errors():
            await service.delete(entry_id, user.id)
        return {"message": f"{kind.title} deleted successfully"}

    return router


income_router = build_entry_router(INCOME, IncomeCreate, IncomePublic)
expense_router = build_entry_router(EXPENSE, ExpenseCreate, ExpensePublic)
