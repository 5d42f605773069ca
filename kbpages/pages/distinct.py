"""
Distinct value extraction for filter controls.

Two sources:
    - extract_distinct: scan records the caller already loaded, normalizing
      each column value according to its semantic type.
    - extract_distinct_remote: ask SharePoint's filter data endpoint, which
      returns distinct values for the whole list.

Both return DistinctValue(text, value) in first-seen order.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Tuple

from kbpages.columns.registry import ExtractionStrategy, resolve_column_type
from kbpages.core.exceptions import GatewayError, MalformedResponseError
from kbpages.pages.dao import SharePointGateway
from kbpages.pages.schemas import DistinctValue

logger = logging.getLogger(__name__)

Normalized = Iterator[Tuple[Hashable, DistinctValue]]


def _sub_values(raw: Any) -> List[Any]:
    """Items of a multi-valued field, verbose ({"results": [...]}) or plain list."""
    if isinstance(raw, dict):
        raw = raw.get("results")
    return raw if isinstance(raw, list) else []


# ===== NORMALIZERS =====
# Each yields (dedup key, distinct value) pairs for one raw field value.


def normalize_scalar(raw: Any) -> Normalized:
    if raw:
        yield raw, DistinctValue.scalar(raw)


def normalize_number(raw: Any) -> Normalized:
    # 0 is a real value for numeric columns
    if raw is None or raw == "":
        return
    yield raw, DistinctValue.scalar(raw)


def normalize_boolean(raw: Any) -> Normalized:
    if raw is None or raw == "":
        return
    if isinstance(raw, str):
        flag = raw.strip().lower() in {"1", "true", "yes"}
    else:
        flag = bool(raw)
    yield flag, DistinctValue(text="Yes" if flag else "No", value=flag)


def normalize_date(raw: Any) -> Normalized:
    """Keep the calendar date only, so all timestamps on one day collapse together."""
    if not raw:
        return
    day = datetime.fromisoformat(str(raw).strip().replace("Z", "+00:00")).date().isoformat()
    yield day, DistinctValue.scalar(day)


def normalize_person(raw: Any) -> Normalized:
    if isinstance(raw, dict) and raw.get("Title"):
        yield raw["Title"], DistinctValue(text=raw["Title"], value=raw.get("Id"))


def normalize_person_multi(raw: Any) -> Normalized:
    for person in _sub_values(raw):
        yield from normalize_person(person)


def normalize_url(raw: Any) -> Normalized:
    # Filter on the link target, not its description
    if isinstance(raw, dict) and raw.get("Url"):
        yield raw["Url"], DistinctValue.scalar(raw["Url"])


def normalize_computed(raw: Any) -> Normalized:
    # Computed values are "<name>.<suffix>"; only the name is meaningful to filter on
    if raw:
        head = str(raw).split(".")[0]
        yield head, DistinctValue.scalar(head)


def normalize_multi_choice(raw: Any) -> Normalized:
    for choice in _sub_values(raw):
        yield from normalize_scalar(choice)


def normalize_lookup(raw: Any) -> Normalized:
    if isinstance(raw, dict):
        text = raw.get("LookupValue") or raw.get("Title")
        if text:
            yield text, DistinctValue(text=text, value=raw.get("LookupId", raw.get("Id")))
    else:
        yield from normalize_scalar(raw)


def normalize_lookup_multi(raw: Any) -> Normalized:
    for lookup in _sub_values(raw):
        yield from normalize_lookup(lookup)


def normalize_taxonomy(raw: Any) -> Normalized:
    if isinstance(raw, dict) and raw.get("Label"):
        yield raw["Label"], DistinctValue.scalar(raw["Label"])


def normalize_taxonomy_multi(raw: Any) -> Normalized:
    # One item can carry several terms; each counts on its own
    for term in _sub_values(raw):
        yield from normalize_taxonomy(term)


NORMALIZERS: Dict[ExtractionStrategy, Callable[[Any], Normalized]] = {
    ExtractionStrategy.SCALAR: normalize_scalar,
    ExtractionStrategy.NUMBER: normalize_number,
    ExtractionStrategy.BOOLEAN: normalize_boolean,
    ExtractionStrategy.DATE: normalize_date,
    ExtractionStrategy.PERSON: normalize_person,
    ExtractionStrategy.PERSON_MULTI: normalize_person_multi,
    ExtractionStrategy.URL: normalize_url,
    ExtractionStrategy.COMPUTED: normalize_computed,
    ExtractionStrategy.MULTI_CHOICE: normalize_multi_choice,
    ExtractionStrategy.LOOKUP: normalize_lookup,
    ExtractionStrategy.LOOKUP_MULTI: normalize_lookup_multi,
    ExtractionStrategy.TAXONOMY: normalize_taxonomy,
    ExtractionStrategy.TAXONOMY_MULTI: normalize_taxonomy_multi,
}

if set(NORMALIZERS) != set(ExtractionStrategy):
    raise RuntimeError("Every extraction strategy needs a normalizer")


class DistinctValueExtractor:
    """Builds the option list for a column's filter control."""

    def __init__(self, gateway: Optional[SharePointGateway] = None, strict_types: Optional[bool] = None):
        self.gateway = gateway
        self.strict_types = strict_types

    def extract_distinct(
        self, column_name: str, semantic_type: str, records: Iterable[Mapping[str, Any]]
    ) -> List[DistinctValue]:
        """
        Distinct values of `column_name` across `records`, in first-seen order.

        Records whose field is missing or oddly shaped are skipped; they never
        stop the scan.
        """
        try:
            definition = resolve_column_type(semantic_type, strict=self.strict_types)
            normalize = NORMALIZERS[definition.extraction]

            distinct_values: List[DistinctValue] = []
            seen = set()

            for position, record in enumerate(records):
                try:
                    for key, distinct_value in normalize(record.get(column_name)):
                        if key not in seen:
                            seen.add(key)
                            distinct_values.append(distinct_value)
                except (AttributeError, KeyError, TypeError, ValueError) as e:
                    logger.debug(f"Skipping record {position} for column '{column_name}': {e}")

            return distinct_values
        except Exception as e:
            logger.error(f"Error extracting distinct values for column '{column_name}': {e}")
            raise

    async def extract_distinct_remote(self, list_id: str, column_name: str) -> List[DistinctValue]:
        """Distinct values computed by the server for the whole list; no client-side dedup."""
        if self.gateway is None:
            raise RuntimeError("A gateway is required for remote distinct values")

        try:
            filter_data = await self.gateway.get_filter_data(list_id, column_name)
        except GatewayError as e:
            logger.error(f"Error fetching distinct values for column '{column_name}' in list {list_id}: {e}")
            raise

        try:
            return [DistinctValue(text=str(entry["Value"]), value=entry["Key"]) for entry in filter_data]
        except (KeyError, TypeError) as e:
            logger.error(f"Unexpected filter data for column '{column_name}' in list {list_id}: {e}")
            raise MalformedResponseError(f"Filter data entry without Key/Value: {e}") from e
