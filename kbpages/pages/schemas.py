"""Pydantic schemas for page results and distinct filter values."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DistinctValue(BaseModel):
    """A selectable filter option: display text plus the value to filter on."""

    text: str
    value: Any

    model_config = ConfigDict(frozen=True)

    @classmethod
    def scalar(cls, value: Any) -> "DistinctValue":
        return cls(text=str(value), value=value)


class PageResult(BaseModel):
    """One page of raw list items. next_page_index is None on the last page."""

    items: List[Dict[str, Any]] = Field(default_factory=list)
    next_page_index: Optional[int] = None


class PageFetchStatus(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    FAILURE = "failure"


class PageFetchResult(BaseModel):
    """Outcome of a page fetch; a failed fetch is never reported as an empty page."""

    status: PageFetchStatus
    page: Optional[PageResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != PageFetchStatus.FAILURE

    @classmethod
    def from_items(cls, items: List[Dict[str, Any]], next_page_index: Optional[int]) -> "PageFetchResult":
        status = PageFetchStatus.SUCCESS if items else PageFetchStatus.EMPTY
        return cls(status=status, page=PageResult(items=items, next_page_index=next_page_index))

    @classmethod
    def failed(cls, error: str) -> "PageFetchResult":
        return cls(status=PageFetchStatus.FAILURE, error=error)


class DistinctValuesRequest(BaseModel):
    """
    Distinct values for one column.

    With records and no list id (or a small list) they are computed from the
    records; without records, or for lists above the remote threshold, the
    server computes them for list_id.
    """

    column: str
    semantic_type: str = "Text"
    records: Optional[List[Dict[str, Any]]] = None
    list_id: Optional[str] = None
    item_count: Optional[int] = None
