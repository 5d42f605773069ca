"""
QueryCompiler: turns a QueryRequest into a CAML QueryDocument.

This is the single place where page queries are assembled. Both the page
fetcher and the preview endpoint go through it, so what a preview shows is
exactly what the store receives.
"""

from dataclasses import dataclass
from typing import List, Optional

from kbpages.core import config
from kbpages.query.caml import And, Contains, Eq, FieldRef, Node, Or, OrderBy, Value, View
from kbpages.query.clauses import FilterClauseBuilder
from kbpages.query.schemas import QueryDocument, QueryRequest

# FSObjType 0 is a list item, 1 is a folder
CONTENT_ITEM_OBJECT_TYPE = "0"


@dataclass
class QueryPreview:
    """What a request compiles to, without sending it."""

    view_xml: str
    row_limit: int
    paging_offset: int
    active_filters: int


class QueryCompiler:
    """
    Builds the CAML view for a page request.

    The predicate is always the category/content-item base, AND'ed with the
    free-text search disjunction (when there is search text) and one conjunct
    per active filter criterion.
    """

    def __init__(
        self,
        clause_builder: Optional[FilterClauseBuilder] = None,
        category_field: Optional[str] = None,
        article_id_field: Optional[str] = None,
    ):
        self.clause_builder = clause_builder or FilterClauseBuilder()
        self.category_field = category_field or config.CATEGORY_FIELD
        self.article_id_field = article_id_field or config.ARTICLE_ID_FIELD

    def compile(self, request: QueryRequest) -> QueryDocument:
        """Compile a request into an executable query document."""
        view = View(
            where=self.build_predicate(request),
            order_by=OrderBy(FieldRef(request.order_by), request.is_ascending),
            row_limit=request.page_size,
        )
        return QueryDocument(view=view, paging_offset=request.offset)

    def build_predicate(self, request: QueryRequest) -> Node:
        base = self._build_base_predicate(request.category)
        conjuncts: List[Node] = []

        if request.search_text:
            conjuncts.append(self._build_search_predicate(request.search_text))

        conjuncts.extend(self.clause_builder.build_clauses(request.filters))

        if not conjuncts:
            return base
        return And(base, *conjuncts)

    def build_preview(self, request: QueryRequest) -> QueryPreview:
        document = self.compile(request)
        return QueryPreview(
            view_xml=document.to_view_xml(),
            row_limit=document.row_limit,
            paging_offset=document.paging_offset,
            active_filters=sum(1 for criterion in request.filters if criterion.is_active()),
        )

    def _build_base_predicate(self, category: str) -> Node:
        return And(
            Eq(FieldRef(self.category_field), Value("Text", category)),
            Eq(FieldRef("FSObjType"), Value("Integer", CONTENT_ITEM_OBJECT_TYPE)),
        )

    def _build_search_predicate(self, search_text: str) -> Node:
        """Title contains the text, the article id equals it, or the modified date contains it."""
        return Or(
            Contains(FieldRef("Title"), Value("Text", search_text)),
            Eq(FieldRef(self.article_id_field), Value("Text", search_text)),
            Contains(FieldRef("Modified"), Value("DateTime", search_text)),
        )
