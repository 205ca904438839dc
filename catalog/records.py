# String Authority Database - Electric Guitar Provenance and Authentication System
# Copyright (C) 2025 Mariano Rozanski
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Read-only catalog records.

Records are built by the data-access layer from joined rows and are never
mutated by the display code. Joined columns are prefixed (``model_``,
``manufacturer_``, ``product_line_``) and aggregate counts use a ``count_``
prefix, e.g. ``count_models``.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

COUNT_PREFIX = 'count_'


def _counts_from_row(row: Dict[str, Any]) -> Dict[str, int]:
    return {
        key[len(COUNT_PREFIX):]: int(value or 0)
        for key, value in row.items()
        if key.startswith(COUNT_PREFIX)
    }


@dataclass(frozen=True)
class ManufacturerRecord:
    id: str
    name: str
    display_name: Optional[str] = None
    status: Optional[str] = None
    country: Optional[str] = None
    founded_year: Optional[int] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    counts: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'ManufacturerRecord':
        return cls(
            id=str(row['id']),
            name=row['name'],
            display_name=row.get('display_name'),
            status=row.get('status'),
            country=row.get('country'),
            founded_year=row.get('founded_year'),
            website=row.get('website'),
            notes=row.get('notes'),
            counts=_counts_from_row(row)
        )

    @classmethod
    def from_joined_row(cls, row: Dict[str, Any]) -> Optional['ManufacturerRecord']:
        """Build the manufacturer from ``manufacturer_*`` columns, if the join matched."""
        if row.get('manufacturer_id') is None:
            return None
        return cls(
            id=str(row['manufacturer_id']),
            name=row.get('manufacturer_name') or '',
            display_name=row.get('manufacturer_display_name'),
            status=row.get('manufacturer_status')
        )


@dataclass(frozen=True)
class ProductLineRecord:
    id: str
    name: str
    manufacturer: Optional[ManufacturerRecord] = None
    introduced_year: Optional[int] = None
    discontinued_year: Optional[int] = None
    description: Optional[str] = None
    updated_at: Optional[datetime] = None
    counts: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'ProductLineRecord':
        return cls(
            id=str(row['id']),
            name=row['name'],
            manufacturer=ManufacturerRecord.from_joined_row(row),
            introduced_year=row.get('introduced_year'),
            discontinued_year=row.get('discontinued_year'),
            description=row.get('description'),
            updated_at=row.get('updated_at'),
            counts=_counts_from_row(row)
        )


@dataclass(frozen=True)
class ModelRecord:
    id: str
    name: str
    year: int
    manufacturer: Optional[ManufacturerRecord] = None
    product_line_name: Optional[str] = None
    production_type: Optional[str] = None
    msrp_original: Optional[Decimal] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    production_start_date: Optional[date] = None
    production_end_date: Optional[date] = None
    counts: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'ModelRecord':
        return cls(
            id=str(row['id']),
            name=row['name'],
            year=int(row['year']),
            manufacturer=ManufacturerRecord.from_joined_row(row),
            product_line_name=row.get('product_line_name'),
            production_type=row.get('production_type'),
            msrp_original=row.get('msrp_original'),
            currency=row.get('currency'),
            description=row.get('description'),
            production_start_date=row.get('production_start_date'),
            production_end_date=row.get('production_end_date'),
            counts=_counts_from_row(row)
        )

    @classmethod
    def from_joined_row(cls, row: Dict[str, Any]) -> Optional['ModelRecord']:
        """Build the linked model from ``model_*`` columns, if the join matched."""
        if row.get('model_id') is None:
            return None
        return cls(
            id=str(row['model_id']),
            name=row.get('model_name') or '',
            year=int(row['model_year']),
            manufacturer=ManufacturerRecord.from_joined_row(row),
            product_line_name=row.get('product_line_name')
        )


@dataclass(frozen=True)
class ImageRecord:
    entity_id: str
    image_type: str
    original_url: str
    thumbnail_url: Optional[str] = None
    small_url: Optional[str] = None
    medium_url: Optional[str] = None
    display_order: Optional[int] = None
    caption: Optional[str] = None
    is_primary: bool = False

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'ImageRecord':
        return cls(
            entity_id=str(row['entity_id']),
            image_type=row['image_type'],
            original_url=row['original_url'],
            thumbnail_url=row.get('thumbnail_url'),
            small_url=row.get('small_url'),
            medium_url=row.get('medium_url'),
            display_order=row.get('display_order'),
            caption=row.get('caption'),
            is_primary=bool(row.get('is_primary'))
        )


@dataclass(frozen=True)
class MarketValuationRecord:
    id: str
    valuation_date: Optional[date] = None
    sale_price: Optional[Decimal] = None
    average_estimate: Optional[Decimal] = None
    low_estimate: Optional[Decimal] = None
    high_estimate: Optional[Decimal] = None
    sale_venue: Optional[str] = None
    condition_at_valuation: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'MarketValuationRecord':
        return cls(
            id=str(row['id']),
            valuation_date=row.get('valuation_date'),
            sale_price=row.get('sale_price'),
            average_estimate=row.get('average_estimate'),
            low_estimate=row.get('low_estimate'),
            high_estimate=row.get('high_estimate'),
            sale_venue=row.get('sale_venue'),
            condition_at_valuation=row.get('condition_at_valuation')
        )


@dataclass(frozen=True)
class GuitarRecord:
    id: str
    serial_number: Optional[str] = None
    nickname: Optional[str] = None
    significance_level: Optional[str] = None
    condition_rating: Optional[str] = None
    current_estimated_value: Optional[Decimal] = None
    manufacturer_name_fallback: Optional[str] = None
    model_name_fallback: Optional[str] = None
    year_estimate: Optional[str] = None
    linked_model: Optional[ModelRecord] = None
    counts: Dict[str, int] = field(default_factory=dict)
    images: List[ImageRecord] = field(default_factory=list)
    # Detail-only fields; list queries leave them empty
    production_number: Optional[str] = None
    production_date: Optional[date] = None
    last_valuation_date: Optional[date] = None
    description: Optional[str] = None
    significance_notes: Optional[str] = None
    modifications: Optional[str] = None
    provenance_notes: Optional[str] = None
    valuations: List[MarketValuationRecord] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: Dict[str, Any],
                 images: Optional[List[ImageRecord]] = None,
                 valuations: Optional[List[MarketValuationRecord]] = None) -> 'GuitarRecord':
        return cls(
            id=str(row['id']),
            serial_number=row.get('serial_number'),
            nickname=row.get('nickname'),
            significance_level=row.get('significance_level'),
            condition_rating=row.get('condition_rating'),
            current_estimated_value=row.get('current_estimated_value'),
            manufacturer_name_fallback=row.get('manufacturer_name_fallback'),
            model_name_fallback=row.get('model_name_fallback'),
            year_estimate=row.get('year_estimate'),
            linked_model=ModelRecord.from_joined_row(row),
            counts=_counts_from_row(row),
            images=list(images or []),
            production_number=row.get('production_number'),
            production_date=row.get('production_date'),
            last_valuation_date=row.get('last_valuation_date'),
            description=row.get('description'),
            significance_notes=row.get('significance_notes'),
            modifications=row.get('modifications'),
            provenance_notes=row.get('provenance_notes'),
            valuations=list(valuations or [])
        )
