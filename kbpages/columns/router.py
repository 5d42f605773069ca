"""API router for view column metadata."""

from typing import List

from fastapi import APIRouter, Depends

from kbpages.columns.schemas import ColumnDescriptor
from kbpages.columns.service import ColumnService
from kbpages.core.dependencies import GatewayDep

router = APIRouter(prefix="/columns", tags=["columns"])


def get_column_service(gateway: GatewayDep) -> ColumnService:
    return ColumnService(gateway)


@router.get("/{view_id}", response_model=List[ColumnDescriptor])
async def get_view_columns(
    view_id: str, service: ColumnService = Depends(get_column_service)
) -> List[ColumnDescriptor]:
    """Columns shown in a view, with their type and display widths."""
    return await service.get_columns(view_id)
