"""Column metadata for list views."""

import asyncio
import logging
from typing import Any, Dict, List

from kbpages.columns.registry import get_column_max_width, get_column_min_width
from kbpages.columns.schemas import ColumnDescriptor
from kbpages.pages.dao import SharePointGateway

logger = logging.getLogger(__name__)


class ColumnService:
    """Reads a view's columns once and describes them for filtering and display."""

    def __init__(self, gateway: SharePointGateway):
        self.gateway = gateway

    async def get_columns(self, view_id: str) -> List[ColumnDescriptor]:
        """Columns of a view, in view order, with type and width bounds."""
        field_names = await self.gateway.get_view_field_names(view_id)

        # Field lookups are independent reads; gather keeps the view order
        fields = await asyncio.gather(*(self.gateway.get_field(name) for name in field_names))

        columns = [self._to_descriptor(field) for field in fields]
        logger.info(f"Loaded {len(columns)} columns for view {view_id}")
        return columns

    @staticmethod
    def _to_descriptor(field: Dict[str, Any]) -> ColumnDescriptor:
        internal_name = field["InternalName"]
        return ColumnDescriptor(
            internal_name=internal_name,
            display_name=field.get("Title") or internal_name,
            semantic_type=field.get("TypeAsString") or "Text",
            min_width=get_column_min_width(internal_name),
            max_width=get_column_max_width(internal_name),
        )
