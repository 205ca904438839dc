"""
Detail views for single catalog entities.

A detail view starts from the entity's list row (same labels, badges and
formatting) and adds the fields only shown on the entity's own page:
long-form dates, notes, the primary image and recent valuations.
"""

from typing import Any, Dict, Optional

from .columns import (
    NOT_AVAILABLE,
    build_guitar_columns,
    build_manufacturer_columns,
    build_model_columns,
    build_product_line_columns,
    render_row,
)
from .formatting import format_count, format_currency, format_date, format_production_years
from .images import image_url, select_primary_image
from .names import resolve_display_name, resolve_display_year
from ..config import DEFAULT_CURRENCY, DEFAULT_LOCALE
from ..records import (
    GuitarRecord,
    ManufacturerRecord,
    MarketValuationRecord,
    ModelRecord,
    ProductLineRecord,
)


def _counts(record: Any, locale: str) -> Dict[str, str]:
    return {name: format_count(count, locale) for name, count in record.counts.items()}


def _related(entity: Optional[Any]) -> Optional[Dict[str, str]]:
    if entity is None:
        return None
    return {'id': entity.id, 'name': entity.name}


def valuation_amount(valuation: MarketValuationRecord, currency: str = DEFAULT_CURRENCY,
                     locale: str = DEFAULT_LOCALE) -> str:
    """
    Headline amount of a valuation.

    A realized sale price wins over an average estimate, which wins over a
    low/high estimate range.
    """
    for amount in (valuation.sale_price, valuation.average_estimate):
        formatted = format_currency(amount, currency, locale=locale)
        if formatted:
            return formatted

    low = format_currency(valuation.low_estimate, currency, locale=locale)
    high = format_currency(valuation.high_estimate, currency, locale=locale)
    if low and high:
        return f"{low} - {high}"
    return NOT_AVAILABLE


def render_valuation(valuation: MarketValuationRecord, currency: str = DEFAULT_CURRENCY,
                     locale: str = DEFAULT_LOCALE) -> Dict[str, Any]:
    return {
        'id': valuation.id,
        'amount': valuation_amount(valuation, currency, locale),
        'valuation_date': format_date(valuation.valuation_date, locale),
        'sale_venue': valuation.sale_venue,
        'condition_at_valuation': valuation.condition_at_valuation,
    }


def guitar_detail(guitar: GuitarRecord, locale: str = DEFAULT_LOCALE,
                  currency: str = DEFAULT_CURRENCY) -> Dict[str, Any]:
    """
    Everything the guitar page shows.

    Args:
        guitar: Guitar with its images and recent valuations loaded
        locale: Babel locale identifier
        currency: Currency of estimated values and valuations

    Returns:
        JSON-ready dict; missing dates and notes are None
    """
    detail = render_row(guitar, build_guitar_columns(locale, currency))
    model = guitar.linked_model
    primary = select_primary_image(guitar.images)

    detail.update({
        'display_name': resolve_display_name(guitar),
        'display_year': resolve_display_year(guitar),
        'nickname': guitar.nickname,
        'linked_model': _related(model),
        'linked_manufacturer': _related(model.manufacturer) if model is not None else None,
        'product_line': model.product_line_name if model is not None else None,
        'production_number': guitar.production_number,
        'production_date': format_date(guitar.production_date, locale),
        'last_valuation_date': format_date(guitar.last_valuation_date, locale),
        'description': guitar.description,
        'significance_notes': guitar.significance_notes,
        'modifications': guitar.modifications,
        'provenance_notes': guitar.provenance_notes,
        'image': {
            'url': image_url(primary),
            'caption': primary.caption if primary is not None else None,
        },
        'counts': _counts(guitar, locale),
        'valuations': [render_valuation(v, currency, locale) for v in guitar.valuations],
    })
    return detail


def model_detail(model: ModelRecord, locale: str = DEFAULT_LOCALE,
                 currency: str = DEFAULT_CURRENCY) -> Dict[str, Any]:
    detail = render_row(model, build_model_columns(locale, currency))
    detail.update({
        'linked_manufacturer': _related(model.manufacturer),
        'currency': model.currency or currency,
        'production_start_date': format_date(model.production_start_date, locale),
        'production_end_date': format_date(model.production_end_date, locale),
        'description': model.description,
        'counts': _counts(model, locale),
    })
    return detail


def manufacturer_detail(manufacturer: ManufacturerRecord, locale: str = DEFAULT_LOCALE,
                        currency: str = DEFAULT_CURRENCY) -> Dict[str, Any]:
    detail = render_row(manufacturer, build_manufacturer_columns(locale, currency))
    detail.update({
        'display_name': manufacturer.display_name or manufacturer.name,
        'founded_year': manufacturer.founded_year,
        'website': manufacturer.website,
        'notes': manufacturer.notes,
    })
    return detail


def product_line_detail(product_line: ProductLineRecord, locale: str = DEFAULT_LOCALE,
                        currency: str = DEFAULT_CURRENCY) -> Dict[str, Any]:
    detail = render_row(product_line, build_product_line_columns(locale, currency))
    detail.update({
        'linked_manufacturer': _related(product_line.manufacturer),
        'production_years': format_production_years(product_line.introduced_year,
                                                    product_line.discontinued_year),
        'description': product_line.description,
        'updated_at': format_date(product_line.updated_at, locale),
    })
    return detail
