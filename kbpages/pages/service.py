# kbpages/pages/service.py - page fetching and distinct value source selection

import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from kbpages.columns.schemas import ColumnDescriptor
from kbpages.core import config
from kbpages.core.exceptions import GatewayError, MalformedResponseError
from kbpages.pages.dao import SharePointGateway
from kbpages.pages.distinct import DistinctValueExtractor
from kbpages.pages.schemas import DistinctValue, PageFetchResult, PageFetchStatus, PageResult
from kbpages.query.builder import QueryCompiler
from kbpages.query.schemas import QueryRequest

logger = logging.getLogger(__name__)


class PageService:
    """
    Fetches one page of pages per call.

    Each call compiles the request, makes a single round trip and infers
    whether another page exists from the returned item count: a full page
    means "maybe more", a short page means "done". That only holds if the
    store never returns a short page before the last one.

    Calls are independent. Nothing stops a caller from awaiting two pages
    at once, so callers that need ordered results must await them in turn
    (iter_pages does).
    """

    def __init__(self, gateway: SharePointGateway, compiler: Optional[QueryCompiler] = None):
        self.gateway = gateway
        self.compiler = compiler or QueryCompiler()

    async def fetch_page(self, request: QueryRequest) -> PageFetchResult:
        """Fetch the page described by `request`. Transport failures come back as FAILURE."""
        document = self.compiler.compile(request)

        try:
            items = await self.gateway.get_items(document)
        except MalformedResponseError:
            raise
        except GatewayError as e:
            logger.exception(
                f"Failed to fetch page {request.page_index} (category={request.category!r}): {e}"
            )
            return PageFetchResult.failed(str(e))

        has_more = len(items) >= request.page_size
        next_page_index = request.page_index + 1 if has_more else None

        logger.debug(f"Page {request.page_index}: {len(items)} items, next={next_page_index}")
        return PageFetchResult.from_items(items, next_page_index)

    async def iter_pages(
        self, request: QueryRequest, max_pages: Optional[int] = None
    ) -> AsyncIterator[PageResult]:
        """
        Yield pages in order starting at request.page_index.

        Stops after the last page, after an empty page, after max_pages
        pages, or on the first failed fetch (raised as GatewayError).

        With page_size <= 0 every page looks full and every offset is the
        same, so a max_pages bound is required.
        """
        if request.page_size <= 0 and max_pages is None:
            raise ValueError(f"page_size must be positive to iterate without max_pages, got {request.page_size}")

        fetched = 0
        current: Optional[QueryRequest] = request

        while current is not None and (max_pages is None or fetched < max_pages):
            result = await self.fetch_page(current)
            if result.status == PageFetchStatus.FAILURE:
                raise GatewayError(result.error or "Page fetch failed")

            page = result.page
            fetched += 1
            yield page

            if page.next_page_index is None or result.status == PageFetchStatus.EMPTY:
                current = None
            else:
                current = current.model_copy(update={"page_index": page.next_page_index})


class DistinctValueService:
    """
    Chooses where distinct filter values come from.

    Small result sets are scanned locally; when the caller has no records, or
    the list is larger than DISTINCT_REMOTE_THRESHOLD and its id is known,
    the server-side filter data endpoint is used instead.
    """

    def __init__(self, extractor: DistinctValueExtractor, remote_threshold: Optional[int] = None):
        self.extractor = extractor
        self.remote_threshold = (
            config.DISTINCT_REMOTE_THRESHOLD if remote_threshold is None else remote_threshold
        )

    def should_use_remote(
        self,
        records: Optional[List[Dict[str, Any]]],
        list_id: Optional[str],
        item_count: Optional[int],
    ) -> bool:
        if not list_id:
            return False
        if records is None:
            return True
        return item_count is not None and item_count > self.remote_threshold

    async def get_distinct_values(
        self,
        column: ColumnDescriptor,
        records: Optional[List[Dict[str, Any]]] = None,
        list_id: Optional[str] = None,
        item_count: Optional[int] = None,
    ) -> List[DistinctValue]:
        if self.should_use_remote(records, list_id, item_count):
            return await self.extractor.extract_distinct_remote(list_id, column.internal_name)
        return self.extractor.extract_distinct(column.internal_name, column.semantic_type, records or [])
