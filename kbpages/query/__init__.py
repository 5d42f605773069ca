"""
Query construction for the pages list.

Public entry points:
    - QueryCompiler: QueryRequest -> QueryDocument
    - FilterClauseBuilder: FilterCriterion -> CAML clause
    - FilterCriterion, QueryRequest, QueryDocument: request/compiled types
"""

from .builder import QueryCompiler, QueryPreview
from .clauses import FilterClauseBuilder
from .schemas import FilterCriterion, QueryDocument, QueryRequest

__all__ = [
    "QueryCompiler",
    "QueryPreview",
    "FilterClauseBuilder",
    "FilterCriterion",
    "QueryDocument",
    "QueryRequest",
]
