"""
Unit tests for type-directed filter clause construction.
"""

import pytest

from kbpages.core.exceptions import QueryCompilationError, UnknownColumnTypeError
from kbpages.query.caml import And, Eq, FieldRef, Geq, Lt, Or, Value
from kbpages.query.clauses import FilterClauseBuilder, start_of_day
from kbpages.query.schemas import FilterCriterion


def day_bounds(column: str, start: str, end: str) -> And:
    return And(
        Geq(FieldRef(column), Value("DateTime", f"{start}T00:00:00Z", include_time=True)),
        Lt(FieldRef(column), Value("DateTime", f"{end}T00:00:00Z", include_time=True)),
    )


@pytest.fixture
def clause_builder() -> FilterClauseBuilder:
    return FilterClauseBuilder(strict_types=False)


class TestDateClauses:
    """Whole-day intervals for DateTime columns"""

    def test_time_of_day_is_dropped(self, clause_builder):
        criterion = FilterCriterion(column="Modified", semantic_type="DateTime", values=["2024-03-05T15:30:00-05:00"])
        assert clause_builder.build_clause(criterion) == day_bounds("Modified", "2024-03-05", "2024-03-06")

    def test_plain_date(self, clause_builder):
        criterion = FilterCriterion(column="Created", semantic_type="DateTime", values=["2024-03-05"])
        assert clause_builder.build_clause(criterion) == day_bounds("Created", "2024-03-05", "2024-03-06")

    def test_interval_crosses_month_end(self, clause_builder):
        criterion = FilterCriterion(column="Created", semantic_type="DateTime", values=["2024-02-29T23:59:59Z"])
        assert clause_builder.build_clause(criterion) == day_bounds("Created", "2024-02-29", "2024-03-01")

    def test_unparseable_date(self, clause_builder):
        criterion = FilterCriterion(column="Created", semantic_type="DateTime", values=["last tuesday"])
        with pytest.raises(QueryCompilationError) as exc_info:
            clause_builder.build_clause(criterion)
        assert exc_info.value.column == "Created"

    def test_start_of_day_with_fractional_seconds(self):
        assert start_of_day("Modified", "2024-03-05T10:11:12.123Z").isoformat() == "2024-03-05"

    @pytest.mark.parametrize("value", ["2024-03-05T10:11:12.1234567+01:00", "2024-03-05T10:11:12.1234567Z"])
    def test_start_of_day_with_long_fraction(self, value):
        assert start_of_day("Modified", value).isoformat() == "2024-03-05"

    @pytest.mark.parametrize("value", ["2024-03-05 garbage", "2024-03-05xyz", "2024-03-05T10:11:12 extra"])
    def test_trailing_junk_is_rejected(self, value):
        with pytest.raises(QueryCompilationError):
            start_of_day("Modified", value)


class TestUserClauses:
    """Lookup-id equality for person columns"""

    def test_user_id(self, clause_builder):
        criterion = FilterCriterion(column="Author", semantic_type="User", values=["7"])
        assert clause_builder.build_clause(criterion) == Eq(
            FieldRef("Author", lookup_id=True), Value("User", "7")
        )

    def test_non_numeric_user_is_rejected(self, clause_builder):
        criterion = FilterCriterion(column="Author", semantic_type="User", values=["Jane Doe"])
        with pytest.raises(QueryCompilationError):
            clause_builder.build_clause(criterion)


class TestOtherClauses:
    """URL, text and multi-value criteria"""

    def test_url_equality(self, clause_builder):
        criterion = FilterCriterion(column="SourceLink", semantic_type="URL", values=["https://contoso.com"])
        assert clause_builder.build_clause(criterion) == Eq(
            FieldRef("SourceLink"), Value("URL", "https://contoso.com")
        )

    def test_text_equality_is_the_default(self, clause_builder):
        criterion = FilterCriterion(column="Status", semantic_type="Choice", values=["Published"])
        assert clause_builder.build_clause(criterion) == Eq(FieldRef("Status"), Value("Text", "Published"))

    def test_several_values_are_ored(self, clause_builder):
        criterion = FilterCriterion(column="Status", values=["Draft", "Published"])
        assert clause_builder.build_clause(criterion) == Or(
            Eq(FieldRef("Status"), Value("Text", "Draft")),
            Eq(FieldRef("Status"), Value("Text", "Published")),
        )

    def test_inactive_criterion_builds_nothing(self, clause_builder):
        assert clause_builder.build_clause(FilterCriterion(column="Status", values=[])) is None

    def test_build_clauses_skips_inactive(self, clause_builder):
        clauses = clause_builder.build_clauses(
            [
                FilterCriterion(column="Status", values=[]),
                FilterCriterion(column="Status", values=["Draft"]),
            ]
        )
        assert clauses == [Eq(FieldRef("Status"), Value("Text", "Draft"))]


class TestUnknownTypes:
    """Unregistered type tags"""

    def test_unknown_type_filters_as_text(self, clause_builder):
        criterion = FilterCriterion(column="Location", semantic_type="Geolocation", values=["Oslo"])
        assert clause_builder.build_clause(criterion) == Eq(FieldRef("Location"), Value("Text", "Oslo"))

    def test_unknown_type_raises_in_strict_mode(self):
        criterion = FilterCriterion(column="Location", semantic_type="Geolocation", values=["Oslo"])
        with pytest.raises(UnknownColumnTypeError):
            FilterClauseBuilder(strict_types=True).build_clause(criterion)
