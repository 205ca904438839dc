"""
Locale-aware formatting of nullable money, date and count fields.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union
import logging

from babel.core import UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.numbers import format_currency as babel_format_currency
from babel.numbers import format_decimal, is_currency

from ..config import DEFAULT_CURRENCY, DEFAULT_LOCALE

logger = logging.getLogger(__name__)

# ISO 4217 codes that exist but do not denote a spendable currency
NON_MONETARY_CODES = frozenset({
    'XXX', 'XTS', 'XAU', 'XAG', 'XPT', 'XPD', 'XDR',
    'XBA', 'XBB', 'XBC', 'XBD', 'XSU', 'XUA',
})

Amount = Union[int, float, Decimal, str, None]


def _to_decimal(amount: Amount) -> Optional[Decimal]:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return None
    return None if value.is_nan() else value


def _group_digits(value: Decimal, locale: str) -> str:
    try:
        return format_decimal(value, locale=locale)
    except (UnknownLocaleError, ValueError):
        return f"{value:,}"


def is_supported_currency(code: str) -> bool:
    """True for ISO currency codes that can be rendered with a symbol."""
    return code not in NON_MONETARY_CODES and is_currency(code)


def format_currency(amount: Amount, currency_code: Optional[str] = DEFAULT_CURRENCY,
                    locale: str = DEFAULT_LOCALE) -> Optional[str]:
    """
    Format a monetary amount for display.

    Falsy amounts (None, 0) return None, so a zero valuation renders the
    same as a missing one.

    Args:
        amount: Numeric value, or a numeric string as returned by the driver
        currency_code: ISO 4217 code; unsupported codes render as "<CODE> 1,500"
        locale: Babel locale identifier

    Returns:
        Formatted string, or None when there is nothing to show
    """
    if not amount:
        return None

    value = _to_decimal(amount)
    if value is None:
        logger.warning(f"Cannot format non-numeric amount: {amount!r}")
        return None

    code = (currency_code or DEFAULT_CURRENCY).strip().upper()
    if not is_supported_currency(code):
        return f"{code} {_group_digits(value, locale)}"

    try:
        return babel_format_currency(value, code, locale=locale)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(f"Currency formatting failed for {code} in {locale}: {e}")
        return f"{code} {_group_digits(value, locale)}"


def _coerce_date(value: Union[date, datetime, str]) -> Optional[date]:
    if isinstance(value, (date, datetime)):
        return value
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError:
        return None


def format_date(value: Union[date, datetime, str, None],
                locale: str = DEFAULT_LOCALE) -> Optional[str]:
    """Long-form date such as "January 5, 1959"; None for a missing date."""
    if not value:
        return None

    parsed = _coerce_date(value)
    if parsed is None:
        logger.warning(f"Unparseable date value: {value!r}")
        return str(value)

    try:
        return babel_format_date(parsed, format='long', locale=locale)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning(f"Date formatting failed in {locale}: {e}")
        return parsed.isoformat()


def format_count(count: Optional[int], locale: str = DEFAULT_LOCALE) -> str:
    """Thousands-separated aggregate count; None counts as 0."""
    return _group_digits(Decimal(count or 0), locale)


def format_production_years(introduced: Optional[int], discontinued: Optional[int]) -> str:
    """Production period of a product line, e.g. "1952-present"."""
    if introduced and not discontinued:
        return f"{introduced}-present"
    if introduced and discontinued:
        return f"{introduced}-{discontinued}"
    if discontinued:
        return f"Until {discontinued}"
    return 'Unknown period'
