"""Type-directed construction of CAML comparison clauses for filter criteria."""

import re
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional

from kbpages.columns.registry import ClauseStrategy, resolve_column_type
from kbpages.core.exceptions import QueryCompilationError
from kbpages.query.caml import And, Eq, FieldRef, Geq, Lt, Node, Or, Value
from kbpages.query.schemas import FilterCriterion

# What may follow the date: a time with any fraction length and an optional offset
_ISO_TIME_SUFFIX = re.compile(r"[T ]\d{2}(:\d{2}(:\d{2}([.,]\d+)?)?)?(Z|[+-]\d{2}(:?\d{2})?)?")


def start_of_day(column: str, value: str) -> date:
    """Calendar date of a filter value; time of day and UTC offset are dropped."""
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    rest = text[10:]
    if rest and not _ISO_TIME_SUFFIX.fullmatch(rest):
        raise QueryCompilationError(column, value, "not an ISO calendar date")
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise QueryCompilationError(column, value, "not an ISO calendar date")


def _datetime_literal(day: date) -> Value:
    return Value("DateTime", f"{day.isoformat()}T00:00:00Z", include_time=True)


def date_interval_clause(column: str, value: str) -> Node:
    """column >= day AND column < day + 1."""
    day = start_of_day(column, value)
    field = FieldRef(column)
    return And(
        Geq(field, _datetime_literal(day)),
        Lt(field, _datetime_literal(day + timedelta(days=1))),
    )


def user_lookup_clause(column: str, value: str) -> Node:
    try:
        lookup_id = int(value.strip())
    except ValueError:
        raise QueryCompilationError(column, value, "person filters take a numeric user id")
    return Eq(FieldRef(column, lookup_id=True), Value("User", str(lookup_id)))


def url_equality_clause(column: str, value: str) -> Node:
    return Eq(FieldRef(column), Value("URL", value))


def text_equality_clause(column: str, value: str) -> Node:
    return Eq(FieldRef(column), Value("Text", value))


CLAUSE_BUILDERS: Dict[ClauseStrategy, Callable[[str, str], Node]] = {
    ClauseStrategy.DATE_INTERVAL: date_interval_clause,
    ClauseStrategy.USER_LOOKUP: user_lookup_clause,
    ClauseStrategy.URL_EQUALITY: url_equality_clause,
    ClauseStrategy.TEXT_EQUALITY: text_equality_clause,
}

if set(CLAUSE_BUILDERS) != set(ClauseStrategy):
    raise RuntimeError("Every clause strategy needs a builder")


class FilterClauseBuilder:
    """Builds one conjunct per active filter criterion."""

    def __init__(self, strict_types: Optional[bool] = None):
        self.strict_types = strict_types

    def build_clause(self, criterion: FilterCriterion) -> Optional[Node]:
        """
        Clause for a single criterion, or None when it has no values.

        Several values are OR'ed together; a single value yields its clause as is.
        """
        if not criterion.is_active():
            return None

        definition = resolve_column_type(criterion.semantic_type, strict=self.strict_types)
        build = CLAUSE_BUILDERS[definition.clause]
        clauses = [build(criterion.column, value) for value in criterion.values]

        if len(clauses) == 1:
            return clauses[0]
        return Or(*clauses)

    def build_clauses(self, criteria: Iterable[FilterCriterion]) -> List[Node]:
        clauses = []
        for criterion in criteria:
            clause = self.build_clause(criterion)
            if clause is not None:
                clauses.append(clause)
        return clauses
