"""API router for the pages module: page queries, distinct filter values and list access."""

from dataclasses import asdict
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException

from kbpages.columns.schemas import ColumnDescriptor
from kbpages.core.dependencies import GatewayDep
from kbpages.pages.distinct import DistinctValueExtractor
from kbpages.pages.schemas import DistinctValue, DistinctValuesRequest, PageFetchStatus, PageResult
from kbpages.pages.service import DistinctValueService, PageService
from kbpages.query.builder import QueryCompiler
from kbpages.query.schemas import QueryRequest

router = APIRouter(prefix="/pages", tags=["pages"])
lists_router = APIRouter(prefix="/lists", tags=["lists"])


# Dependency functions
def get_page_service(gateway: GatewayDep) -> PageService:
    return PageService(gateway)


def get_distinct_value_service(gateway: GatewayDep) -> DistinctValueService:
    return DistinctValueService(DistinctValueExtractor(gateway))


# ===== PAGE QUERIES =====


@router.post("/query", response_model=PageResult)
async def query_pages(
    request: QueryRequest, service: PageService = Depends(get_page_service)
) -> PageResult:
    """Fetch one page of pages matching the category, search text and filters."""
    result = await service.fetch_page(request)
    if result.status == PageFetchStatus.FAILURE:
        raise HTTPException(status_code=502, detail=f"Page fetch failed: {result.error}")
    return result.page


@router.post("/query/preview")
async def preview_query(request: QueryRequest) -> Dict[str, Any]:
    """Show the CAML a request compiles to, without contacting SharePoint."""
    return asdict(QueryCompiler().build_preview(request))


# ===== DISTINCT VALUES =====


@router.post("/distinct", response_model=List[DistinctValue])
async def get_distinct_values(
    request: DistinctValuesRequest,
    service: DistinctValueService = Depends(get_distinct_value_service),
) -> List[DistinctValue]:
    """Filter options for a column, from the supplied records or from the server."""
    if request.records is None and not request.list_id:
        raise HTTPException(status_code=400, detail="Either records or list_id is required")

    column = ColumnDescriptor(
        internal_name=request.column,
        display_name=request.column,
        semantic_type=request.semantic_type,
    )
    return await service.get_distinct_values(
        column, records=request.records, list_id=request.list_id, item_count=request.item_count
    )


@router.get("/distinct/{list_id}/{column}", response_model=List[DistinctValue])
async def get_distinct_values_remote(
    list_id: str,
    column: str,
    service: DistinctValueService = Depends(get_distinct_value_service),
) -> List[DistinctValue]:
    """Filter options computed by SharePoint for the whole list."""
    return await service.extractor.extract_distinct_remote(list_id, column)


# ===== LISTS =====


@lists_router.get("/{list_title}")
async def get_list_details(list_title: str, gateway: GatewayDep) -> Dict[str, Any]:
    return await gateway.get_list_details(list_title)


@lists_router.post("/{list_title}/items")
async def create_list_item(
    list_title: str, gateway: GatewayDep, item_data: Dict[str, Any] = Body(...)
) -> Dict[str, Any]:
    return await gateway.create_list_item(list_title, item_data)
