"""
List view column descriptors.

Each column is plain data: a key, a header label and a pure renderer that
turns a record into a display value (a string, or a Badge carrying a style
token). Adding a column means adding an entry, not subclassing a table.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence, Union

from .badges import BadgeKind, BadgeStyle, color_for, product_line_status
from .formatting import format_count, format_currency, format_production_years
from .names import (
    UNKNOWN,
    resolve_manufacturer_label,
    resolve_model_label,
    resolve_related_manufacturer,
)
from ..config import DEFAULT_CURRENCY, DEFAULT_LOCALE

NOT_AVAILABLE = 'N/A'


@dataclass(frozen=True)
class Badge:
    label: str
    style: BadgeStyle

    def to_dict(self) -> Dict[str, str]:
        return {'label': self.label, 'style': self.style.value}


DisplayValue = Union[str, Badge]
Renderer = Callable[[Any], DisplayValue]


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    renderer: Renderer
    sortable: bool = True


def _text(value: Any, default: str = NOT_AVAILABLE) -> str:
    if value is None or value == '':
        return default
    return str(value)


def _significance(guitar) -> Badge:
    level = guitar.significance_level or 'notable'
    return Badge(level, color_for(BadgeKind.SIGNIFICANCE, level))


def _condition(guitar) -> DisplayValue:
    if not guitar.condition_rating:
        return NOT_AVAILABLE
    return Badge(guitar.condition_rating, color_for(BadgeKind.CONDITION, guitar.condition_rating))


def _production_type(model) -> Badge:
    return Badge(model.production_type or 'unknown',
                 color_for(BadgeKind.PRODUCTION_TYPE, model.production_type))


def _manufacturer_status(manufacturer) -> Badge:
    return Badge(manufacturer.status or 'unknown',
                 color_for(BadgeKind.MANUFACTURER_STATUS, manufacturer.status))


def _product_line_status(product_line) -> Badge:
    label, style = product_line_status(product_line.discontinued_year)
    return Badge(label, style)


def _count(name: str, locale: str) -> Renderer:
    return lambda record: format_count(record.counts.get(name, 0), locale)


def build_guitar_columns(locale: str = DEFAULT_LOCALE, currency: str = DEFAULT_CURRENCY) -> List[Column]:
    def value(guitar) -> str:
        return format_currency(guitar.current_estimated_value, currency, locale=locale) or NOT_AVAILABLE

    return [
        Column('manufacturer', 'Manufacturer', resolve_manufacturer_label),
        Column('model', 'Model', resolve_model_label),
        Column('serial_number', 'Serial Number', lambda g: _text(g.serial_number)),
        Column('significance_level', 'Significance', _significance),
        Column('condition_rating', 'Condition', _condition),
        Column('current_estimated_value', 'Est. Value', value),
    ]


def build_model_columns(locale: str = DEFAULT_LOCALE, currency: str = DEFAULT_CURRENCY) -> List[Column]:
    def msrp(model) -> str:
        # MSRP is priced in the model's own currency
        return format_currency(model.msrp_original, model.currency or currency,
                               locale=locale) or NOT_AVAILABLE

    return [
        Column('name', 'Model Name', lambda m: m.name),
        Column('manufacturer', 'Manufacturer', resolve_related_manufacturer),
        Column('year', 'Year', lambda m: str(m.year)),
        Column('product_line', 'Product Line', lambda m: _text(m.product_line_name)),
        Column('production_type', 'Production Type', _production_type),
        Column('msrp_original', 'Original MSRP', msrp),
    ]


def build_manufacturer_columns(locale: str = DEFAULT_LOCALE, currency: str = DEFAULT_CURRENCY) -> List[Column]:
    return [
        Column('name', 'Name', lambda m: m.name),
        Column('country', 'Country', lambda m: _text(m.country, UNKNOWN)),
        Column('models', 'Models', _count('models', locale)),
        Column('product_lines', 'Product Lines', _count('product_lines', locale)),
        Column('status', 'Status', _manufacturer_status),
    ]


def build_product_line_columns(locale: str = DEFAULT_LOCALE, currency: str = DEFAULT_CURRENCY) -> List[Column]:
    return [
        Column('name', 'Product Line', lambda p: p.name),
        Column('manufacturer', 'Manufacturer', resolve_related_manufacturer),
        Column('introduced_year', 'Production Years',
               lambda p: format_production_years(p.introduced_year, p.discontinued_year)),
        Column('models', 'Models', _count('models', locale)),
        Column('status', 'Status', _product_line_status, sortable=False),
    ]


def render_value(value: DisplayValue) -> Union[str, Dict[str, str]]:
    return value.to_dict() if isinstance(value, Badge) else value


def render_row(record: Any, columns: Sequence[Column]) -> Dict[str, Any]:
    """Render one record into a JSON-ready row keyed by column key."""
    row: Dict[str, Any] = {'id': record.id}
    for column in columns:
        row[column.key] = render_value(column.renderer(record))
    return row


def describe_columns(columns: Sequence[Column]) -> List[Dict[str, Any]]:
    """Header metadata for a list view."""
    return [
        {'key': column.key, 'label': column.label, 'sortable': column.sortable}
        for column in columns
    ]
