"""
Ordering of catalog records for list views.

Two sorters share the same field tables:

* ``sort_records`` applies a prioritized list of ``SortKey`` objects. Missing
  values always sort last, whatever the direction.
* ``ColumnSort`` is the single-column sorter driven by clicks on a list
  header. Missing values are coerced to a per-kind default ('' / 0 / epoch)
  and sorted like any other value.

Both are stable, so rows with equal keys keep their incoming order.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .names import (
    resolve_display_name,
    resolve_display_year,
    resolve_manufacturer_label,
    resolve_model_label,
    resolve_related_manufacturer,
)

ASC = 'asc'
DESC = 'desc'
DIRECTIONS = (ASC, DESC)

EPOCH = datetime(1970, 1, 1)


class SortConfigurationError(ValueError):
    """Raised when a sort key names a field or direction that does not exist."""


class SortKind(Enum):
    LEXICAL = "lexical"
    NUMERIC = "numeric"
    DATE = "date"
    COUNT = "count"


def _to_number(value: Any) -> Optional[Decimal]:
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    # NaN does not compare; PostgreSQL numeric columns can hold it
    return None if number.is_nan() else number


def _to_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return None


@dataclass(frozen=True)
class SortField:
    """A sortable field: how to read it from a record and how to compare it."""
    name: str
    accessor: Callable[[Any], Any]
    kind: SortKind = SortKind.LEXICAL

    def value(self, record: Any) -> Any:
        """Comparable value, or None when the record has nothing to compare."""
        raw = self.accessor(record)
        if self.kind is SortKind.COUNT:
            return int(raw or 0)
        if raw is None:
            return None
        if self.kind is SortKind.NUMERIC:
            return _to_number(raw)
        if self.kind is SortKind.DATE:
            return _to_datetime(raw)
        return str(raw)

    def value_or_default(self, record: Any) -> Any:
        value = self.value(record)
        if value is not None:
            return value
        if self.kind is SortKind.NUMERIC:
            return Decimal(0)
        if self.kind is SortKind.DATE:
            return EPOCH
        return ''


@dataclass(frozen=True)
class SortKey:
    field: str
    direction: str = ASC

    def __post_init__(self):
        if self.direction not in DIRECTIONS:
            raise SortConfigurationError(
                f"Invalid sort direction '{self.direction}' for field '{self.field}'"
            )

    @property
    def descending(self) -> bool:
        return self.direction == DESC


SortFields = Dict[str, SortField]


def _fields(*entries: SortField) -> SortFields:
    return {entry.name: entry for entry in entries}


def _attr(name: str) -> Callable[[Any], Any]:
    return lambda record: getattr(record, name, None)


def _count(name: str) -> Callable[[Any], Any]:
    return lambda record: (getattr(record, 'counts', None) or {}).get(name, 0)


GUITAR_SORT_FIELDS = _fields(
    SortField('significance_level', _attr('significance_level')),
    SortField('current_estimated_value', _attr('current_estimated_value'), SortKind.NUMERIC),
    SortField('serial_number', _attr('serial_number')),
    SortField('nickname', _attr('nickname')),
    SortField('condition_rating', _attr('condition_rating')),
    SortField('display_name', resolve_display_name),
    SortField('display_year', resolve_display_year),
    SortField('manufacturer', resolve_manufacturer_label),
    SortField('model', resolve_model_label),
    SortField('market_valuations', _count('market_valuations'), SortKind.COUNT),
    SortField('notable_associations', _count('notable_associations'), SortKind.COUNT),
)

MODEL_SORT_FIELDS = _fields(
    SortField('name', _attr('name')),
    SortField('manufacturer', resolve_related_manufacturer),
    SortField('year', _attr('year'), SortKind.NUMERIC),
    SortField('product_line', _attr('product_line_name')),
    SortField('production_type', _attr('production_type')),
    SortField('msrp_original', _attr('msrp_original'), SortKind.NUMERIC),
    SortField('individual_guitars', _count('individual_guitars'), SortKind.COUNT),
)

MANUFACTURER_SORT_FIELDS = _fields(
    SortField('name', _attr('name')),
    SortField('country', _attr('country')),
    SortField('founded_year', _attr('founded_year'), SortKind.NUMERIC),
    SortField('status', _attr('status')),
    SortField('models', _count('models'), SortKind.COUNT),
    SortField('product_lines', _count('product_lines'), SortKind.COUNT),
)

PRODUCT_LINE_SORT_FIELDS = _fields(
    SortField('name', _attr('name')),
    SortField('manufacturer', resolve_related_manufacturer),
    SortField('introduced_year', _attr('introduced_year'), SortKind.NUMERIC),
    SortField('discontinued_year', _attr('discontinued_year'), SortKind.NUMERIC),
    SortField('models', _count('models'), SortKind.COUNT),
    SortField('updated_at', _attr('updated_at'), SortKind.DATE),
)

DEFAULT_GUITAR_ORDER = (
    SortKey('significance_level', ASC),
    SortKey('current_estimated_value', DESC),
    SortKey('serial_number', ASC),
)
DEFAULT_MODEL_ORDER = (SortKey('year', DESC), SortKey('name', ASC))
DEFAULT_MANUFACTURER_ORDER = (SortKey('name', ASC),)
DEFAULT_PRODUCT_LINE_ORDER = (SortKey('name', ASC),)


def bind_sort_keys(keys: Iterable[SortKey],
                   fields: SortFields) -> List[Tuple[SortField, bool]]:
    """
    Resolve sort keys against a field table.

    Raises:
        SortConfigurationError: If any key names a field the table does not have
    """
    bound = []
    for key in keys:
        if key.field not in fields:
            raise SortConfigurationError(
                f"Unknown sort field '{key.field}'; expected one of {sorted(fields)}"
            )
        bound.append((fields[key.field], key.descending))
    return bound


def parse_sort_keys(expression: str, fields: SortFields) -> List[SortKey]:
    """Parse "significance_level,-current_estimated_value" into validated sort keys."""
    keys = []
    for part in expression.split(','):
        part = part.strip()
        if not part:
            continue
        if part.startswith('-'):
            keys.append(SortKey(part[1:].strip(), DESC))
        else:
            keys.append(SortKey(part.lstrip('+').strip(), ASC))
    bind_sort_keys(keys, fields)
    return keys


def sort_records(records: Iterable[Any], keys: Sequence[SortKey],
                 fields: SortFields) -> List[Any]:
    """
    Order records by prioritized keys, missing values last on every key.

    Keys are applied from least to most significant with Python's stable
    sort, so ties on every key keep their input order.
    """
    bound = bind_sort_keys(keys, fields)
    ordered = list(records)
    for sort_field, descending in reversed(bound):
        present = []
        missing = []
        for record in ordered:
            value = sort_field.value(record)
            if value is None:
                missing.append(record)
            else:
                present.append((value, record))
        present.sort(key=lambda pair: pair[0], reverse=descending)
        ordered = [record for _, record in present] + missing
    return ordered


def sort_guitars(records: Iterable[Any],
                 keys: Sequence[SortKey] = DEFAULT_GUITAR_ORDER) -> List[Any]:
    return sort_records(records, keys, GUITAR_SORT_FIELDS)


@dataclass(frozen=True)
class ColumnSort:
    """
    Single active column sort for a list header.

    Toggling the active column flips its direction; toggling any other
    column makes it active in ascending order.
    """
    fields: SortFields = field(repr=False)
    key: Optional[str] = None
    direction: str = ASC

    def __post_init__(self):
        if self.key is not None:
            bind_sort_keys([SortKey(self.key, self.direction)], self.fields)

    def toggle(self, key: str) -> 'ColumnSort':
        direction = ASC
        if key == self.key and self.direction == ASC:
            direction = DESC
        return ColumnSort(self.fields, key, direction)

    def apply(self, records: Iterable[Any]) -> List[Any]:
        if self.key is None:
            return list(records)
        sort_field = self.fields[self.key]
        return sorted(records, key=sort_field.value_or_default,
                      reverse=self.direction == DESC)
