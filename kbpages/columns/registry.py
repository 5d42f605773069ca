"""Column type registry mapping SharePoint field types to query and extraction behaviour."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from kbpages.core import config
from kbpages.core.exceptions import UnknownColumnTypeError

logger = logging.getLogger(__name__)


class SemanticType(str, Enum):
    """Field type tags as reported by SharePoint's TypeAsString."""

    TEXT = "Text"
    NOTE = "Note"
    CHOICE = "Choice"
    MULTI_CHOICE = "MultiChoice"
    NUMBER = "Number"
    CURRENCY = "Currency"
    INTEGER = "Integer"
    COUNTER = "Counter"
    BOOLEAN = "Boolean"
    DATE_TIME = "DateTime"
    USER = "User"
    USER_MULTI = "UserMulti"
    URL = "URL"
    LOOKUP = "Lookup"
    LOOKUP_MULTI = "LookupMulti"
    COMPUTED = "Computed"
    CALCULATED = "Calculated"
    TAXONOMY = "TaxonomyFieldType"
    TAXONOMY_MULTI = "TaxonomyFieldTypeMulti"


class ClauseStrategy(str, Enum):
    """How a filter value is turned into a comparison clause."""

    DATE_INTERVAL = "date_interval"  # [day, day + 1)
    USER_LOOKUP = "user_lookup"      # lookup id equality
    URL_EQUALITY = "url_equality"
    TEXT_EQUALITY = "text_equality"


class ExtractionStrategy(str, Enum):
    """How a record's raw field value is normalized into distinct values."""

    SCALAR = "scalar"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    PERSON = "person"
    PERSON_MULTI = "person_multi"
    URL = "url"
    COMPUTED = "computed"
    MULTI_CHOICE = "multi_choice"
    LOOKUP = "lookup"
    LOOKUP_MULTI = "lookup_multi"
    TAXONOMY = "taxonomy"
    TAXONOMY_MULTI = "taxonomy_multi"


@dataclass(frozen=True)
class ColumnTypeDefinition:
    """Behaviour attached to one semantic column type."""

    semantic_type: SemanticType
    clause: ClauseStrategy
    extraction: ExtractionStrategy


COLUMN_TYPE_REGISTRY: Dict[SemanticType, ColumnTypeDefinition] = {}


def register_column_type(
    semantic_type: SemanticType,
    clause: ClauseStrategy = ClauseStrategy.TEXT_EQUALITY,
    extraction: ExtractionStrategy = ExtractionStrategy.SCALAR,
) -> None:
    """Register the behaviour for a semantic column type."""
    COLUMN_TYPE_REGISTRY[semantic_type] = ColumnTypeDefinition(semantic_type, clause, extraction)


# Plain text-like columns
register_column_type(SemanticType.TEXT)
register_column_type(SemanticType.NOTE)
register_column_type(SemanticType.CHOICE)
register_column_type(SemanticType.CALCULATED)
register_column_type(SemanticType.MULTI_CHOICE, extraction=ExtractionStrategy.MULTI_CHOICE)

# Numbers are filtered as text, matching the list view filter behaviour
register_column_type(SemanticType.NUMBER, extraction=ExtractionStrategy.NUMBER)
register_column_type(SemanticType.CURRENCY, extraction=ExtractionStrategy.NUMBER)
register_column_type(SemanticType.INTEGER, extraction=ExtractionStrategy.NUMBER)
register_column_type(SemanticType.COUNTER, extraction=ExtractionStrategy.NUMBER)
register_column_type(SemanticType.BOOLEAN, extraction=ExtractionStrategy.BOOLEAN)

register_column_type(SemanticType.DATE_TIME, ClauseStrategy.DATE_INTERVAL, ExtractionStrategy.DATE)
register_column_type(SemanticType.USER, ClauseStrategy.USER_LOOKUP, ExtractionStrategy.PERSON)
register_column_type(SemanticType.USER_MULTI, ClauseStrategy.USER_LOOKUP, ExtractionStrategy.PERSON_MULTI)
register_column_type(SemanticType.URL, ClauseStrategy.URL_EQUALITY, ExtractionStrategy.URL)

register_column_type(SemanticType.LOOKUP, extraction=ExtractionStrategy.LOOKUP)
register_column_type(SemanticType.LOOKUP_MULTI, extraction=ExtractionStrategy.LOOKUP_MULTI)
register_column_type(SemanticType.COMPUTED, extraction=ExtractionStrategy.COMPUTED)
register_column_type(SemanticType.TAXONOMY, extraction=ExtractionStrategy.TAXONOMY)
register_column_type(SemanticType.TAXONOMY_MULTI, extraction=ExtractionStrategy.TAXONOMY_MULTI)

_unregistered = [t.value for t in SemanticType if t not in COLUMN_TYPE_REGISTRY]
if _unregistered:
    raise RuntimeError(f"Column types without registered behaviour: {_unregistered}")


def resolve_column_type(type_tag: str, strict: Optional[bool] = None) -> ColumnTypeDefinition:
    """
    Look up the behaviour for a column type tag.

    Unknown tags raise UnknownColumnTypeError in strict mode. Otherwise they
    are treated as Text, which is how the list UI has always handled them.
    """
    if strict is None:
        strict = config.STRICT_COLUMN_TYPES

    try:
        return COLUMN_TYPE_REGISTRY[SemanticType(type_tag)]
    except ValueError:
        if strict:
            raise UnknownColumnTypeError(type_tag)
        logger.warning("Unknown column type %r, falling back to Text", type_tag)
        return COLUMN_TYPE_REGISTRY[SemanticType.TEXT]


# ===== COLUMN WIDTHS =====

DEFAULT_COLUMN_WIDTH: Tuple[int, int] = (100, 200)

COLUMN_WIDTHS: Dict[str, Tuple[int, int]] = {
    "Title": (200, 400),
    "FileLeafRef": (150, 300),
    "Description": (200, 400),
    "Created": (90, 120),
    "Modified": (90, 120),
    "Author": (120, 180),
    "Editor": (120, 180),
    "Article_x0020_ID": (80, 120),
}


def get_column_min_width(internal_name: str) -> int:
    return COLUMN_WIDTHS.get(internal_name, DEFAULT_COLUMN_WIDTH)[0]


def get_column_max_width(internal_name: str) -> int:
    return COLUMN_WIDTHS.get(internal_name, DEFAULT_COLUMN_WIDTH)[1]
