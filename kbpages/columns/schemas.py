"""Pydantic schemas for column metadata."""

from pydantic import BaseModel, ConfigDict, Field


class ColumnDescriptor(BaseModel):
    """A list column as shown in a view: identity, label, type and width bounds."""

    internal_name: str
    display_name: str
    semantic_type: str = Field(description="SharePoint TypeAsString, e.g. 'DateTime' or 'User'")
    min_width: int = 100
    max_width: int = 200

    model_config = ConfigDict(frozen=True)
