"""
Display name and year resolution for individual guitars.

A guitar is either linked to a catalog model or carries fallback text
fields; the linked model always wins when present.
"""

from typing import Optional

from ..records import GuitarRecord, ManufacturerRecord

UNKNOWN = 'Unknown'


def _manufacturer_label(manufacturer: Optional[ManufacturerRecord]) -> str:
    if manufacturer is None:
        return UNKNOWN
    return manufacturer.display_name or manufacturer.name or UNKNOWN


def resolve_display_name(guitar: GuitarRecord) -> str:
    """Canonical "<manufacturer> <model>" name for a guitar."""
    model = guitar.linked_model
    if model is not None:
        return f"{_manufacturer_label(model.manufacturer)} {model.name}"
    return f"{guitar.manufacturer_name_fallback or UNKNOWN} {guitar.model_name_fallback or 'Model'}"


def resolve_display_year(guitar: GuitarRecord) -> str:
    """Model year for linked guitars, otherwise the free-text year estimate."""
    if guitar.linked_model is not None:
        return str(guitar.linked_model.year)
    return guitar.year_estimate or UNKNOWN


def resolve_manufacturer_label(guitar: GuitarRecord) -> str:
    """Manufacturer column value for the guitars list."""
    model = guitar.linked_model
    if model is not None and model.manufacturer is not None and model.manufacturer.name:
        return model.manufacturer.name
    return guitar.manufacturer_name_fallback or UNKNOWN


def resolve_model_label(guitar: GuitarRecord) -> str:
    """Model column value for the guitars list, e.g. "Les Paul Standard (1959)"."""
    model = guitar.linked_model
    if model is not None:
        return f"{model.name} ({model.year})"
    return guitar.model_name_fallback or 'Unknown Model'


def resolve_related_manufacturer(record) -> str:
    """Manufacturer name of a model or product line, 'Unknown' when unlinked."""
    manufacturer = getattr(record, 'manufacturer', None)
    return (manufacturer.name if manufacturer is not None else None) or UNKNOWN
