"""
Unit tests for the column type registry and column width lookup.
"""

import pytest

from kbpages.columns.registry import (
    COLUMN_TYPE_REGISTRY,
    ClauseStrategy,
    ExtractionStrategy,
    SemanticType,
    get_column_max_width,
    get_column_min_width,
    resolve_column_type,
)
from kbpages.core.exceptions import UnknownColumnTypeError


class TestResolveColumnType:
    """Type tag resolution"""

    def test_every_semantic_type_is_registered(self):
        assert set(COLUMN_TYPE_REGISTRY) == set(SemanticType)

    @pytest.mark.parametrize(
        "type_tag, clause, extraction",
        [
            ("DateTime", ClauseStrategy.DATE_INTERVAL, ExtractionStrategy.DATE),
            ("User", ClauseStrategy.USER_LOOKUP, ExtractionStrategy.PERSON),
            ("URL", ClauseStrategy.URL_EQUALITY, ExtractionStrategy.URL),
            ("Computed", ClauseStrategy.TEXT_EQUALITY, ExtractionStrategy.COMPUTED),
            ("TaxonomyFieldTypeMulti", ClauseStrategy.TEXT_EQUALITY, ExtractionStrategy.TAXONOMY_MULTI),
            ("Choice", ClauseStrategy.TEXT_EQUALITY, ExtractionStrategy.SCALAR),
            ("Number", ClauseStrategy.TEXT_EQUALITY, ExtractionStrategy.NUMBER),
        ],
    )
    def test_known_types(self, type_tag, clause, extraction):
        definition = resolve_column_type(type_tag)
        assert definition.clause == clause
        assert definition.extraction == extraction

    def test_unknown_type_falls_back_to_text(self):
        definition = resolve_column_type("Geolocation", strict=False)
        assert definition.semantic_type == SemanticType.TEXT

    def test_unknown_type_raises_in_strict_mode(self):
        with pytest.raises(UnknownColumnTypeError) as exc_info:
            resolve_column_type("Geolocation", strict=True)
        assert exc_info.value.type_tag == "Geolocation"

    def test_type_tags_are_case_sensitive(self):
        with pytest.raises(UnknownColumnTypeError):
            resolve_column_type("datetime", strict=True)


class TestColumnWidths:
    """Display width bounds"""

    def test_configured_column(self):
        assert get_column_min_width("Title") == 200
        assert get_column_max_width("Title") == 400

    def test_default_width(self):
        assert get_column_min_width("SomeCustomField") == 100
        assert get_column_max_width("SomeCustomField") == 200
