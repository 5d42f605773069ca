"""
Query schemas for the pages query layer.

FilterCriterion and QueryRequest arrive from callers (and over the API);
QueryDocument is only ever produced by QueryCompiler.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from kbpages.core import config
from kbpages.query.caml import View, serialize


class FilterCriterion(BaseModel):
    """One column must match any of `values`. Empty `values` means no filter."""

    column: str
    semantic_type: str = "Text"
    values: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def is_active(self) -> bool:
        return len(self.values) > 0


class QueryRequest(BaseModel):
    """Everything needed to fetch one page of pages."""

    order_by: str = "Created"
    is_ascending: bool = True
    category: str = ""
    search_text: str = ""
    filters: List[FilterCriterion] = Field(default_factory=list)
    # Not range-checked; the store validates its own paging inputs
    page_size: int = Field(default_factory=lambda: config.DEFAULT_PAGE_SIZE)
    page_index: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def offset(self) -> int:
        return self.page_index * self.page_size


@dataclass(frozen=True)
class QueryDocument:
    """A compiled view plus the paging offset to send alongside it."""

    view: View
    paging_offset: int

    @property
    def row_limit(self) -> int:
        return self.view.row_limit

    def to_view_xml(self) -> str:
        return serialize(self.view)

    def to_request_body(self) -> Dict[str, Any]:
        """Body for the list GetItems endpoint."""
        return {
            "query": {
                "__metadata": {"type": "SP.CamlQuery"},
                "ViewXml": self.to_view_xml(),
                "ListItemCollectionPosition": {"PagingInfo": str(self.paging_offset)},
            }
        }

    def to_query_params(self) -> Dict[str, str]:
        return {
            "$expand": "FieldValuesAsText",
            "$top": str(self.row_limit),
            "$skiptoken": str(self.paging_offset),
        }
