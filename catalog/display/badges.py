"""
Badge style tokens for enum-like catalog fields.

Classification fields are free text in storage, so lookups are
case-insensitive and anything unrecognized maps to ``BadgeStyle.NEUTRAL``.
The presentation layer decides what each token looks like.
"""

from enum import Enum
from typing import Dict, Optional, Tuple


class BadgeStyle(Enum):
    NEUTRAL = "neutral"
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    CAUTION = "caution"
    ERROR = "error"
    ACCENT = "accent"


class BadgeKind(Enum):
    SIGNIFICANCE = "significance"
    CONDITION = "condition"
    PRODUCTION_TYPE = "production_type"
    MANUFACTURER_STATUS = "manufacturer_status"


BADGE_STYLES: Dict[BadgeKind, Dict[str, BadgeStyle]] = {
    BadgeKind.SIGNIFICANCE: {
        'legendary': BadgeStyle.ACCENT,
        'historic': BadgeStyle.INFO,
        'notable': BadgeStyle.SUCCESS,
        'rare': BadgeStyle.WARNING,
    },
    BadgeKind.CONDITION: {
        'mint': BadgeStyle.SUCCESS,
        'excellent': BadgeStyle.INFO,
        'very good': BadgeStyle.WARNING,
        'good': BadgeStyle.CAUTION,
        'fair': BadgeStyle.ERROR,
    },
    BadgeKind.PRODUCTION_TYPE: {
        'mass': BadgeStyle.SUCCESS,
        'limited': BadgeStyle.INFO,
        'custom': BadgeStyle.ACCENT,
        'prototype': BadgeStyle.CAUTION,
    },
    BadgeKind.MANUFACTURER_STATUS: {
        'active': BadgeStyle.SUCCESS,
        'defunct': BadgeStyle.ERROR,
        'acquired': BadgeStyle.WARNING,
    },
}


def normalize_classification(value: Optional[str]) -> str:
    """Lowercase, trim and treat '_' / '-' as spaces ("very_good" -> "very good")."""
    if not value:
        return ""
    return " ".join(value.replace('_', ' ').replace('-', ' ').lower().split())


def color_for(kind, value: Optional[str]) -> BadgeStyle:
    """
    Map a classification value to its badge style.

    Args:
        kind: BadgeKind or its string value, e.g. "condition"
        value: Raw field value, possibly None

    Returns:
        The style for a known value, BadgeStyle.NEUTRAL otherwise

    Raises:
        ValueError: If kind is not a known badge kind
    """
    table = BADGE_STYLES[BadgeKind(kind)]
    return table.get(normalize_classification(value), BadgeStyle.NEUTRAL)


def product_line_status(discontinued_year: Optional[int]) -> Tuple[str, BadgeStyle]:
    """Status label and style for a product line."""
    if not discontinued_year:
        return 'active', BadgeStyle.SUCCESS
    return 'discontinued', BadgeStyle.ERROR
