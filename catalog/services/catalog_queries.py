"""
Read-only catalog queries for the String Authority Catalog.
"""

from typing import Dict, Iterable, List, Optional
import logging

from ..database import DatabaseManager, get_db_manager
from ..display.images import GUITAR_CARD_IMAGE_TYPES, group_images_by_entity
from ..records import (
    GuitarRecord,
    ImageRecord,
    ManufacturerRecord,
    MarketValuationRecord,
    ModelRecord,
    ProductLineRecord,
)

logger = logging.getLogger(__name__)

GUITARS_QUERY = """
SELECT
    ig.id,
    ig.serial_number,
    ig.nickname,
    ig.significance_level,
    ig.condition_rating,
    ig.current_estimated_value,
    ig.manufacturer_name_fallback,
    ig.model_name_fallback,
    ig.year_estimate,
    ig.production_number,
    ig.production_date,
    ig.last_valuation_date,
    ig.description,
    ig.significance_notes,
    ig.modifications,
    ig.provenance_notes,
    m.id as model_id,
    m.name as model_name,
    m.year as model_year,
    mfr.id as manufacturer_id,
    mfr.name as manufacturer_name,
    mfr.display_name as manufacturer_display_name,
    pl.name as product_line_name,
    (SELECT COUNT(*) FROM market_valuations mv
      WHERE mv.individual_guitar_id = ig.id) as count_market_valuations,
    (SELECT COUNT(*) FROM notable_associations na
      WHERE na.individual_guitar_id = ig.id) as count_notable_associations,
    (SELECT COUNT(*) FROM specifications s
      WHERE s.individual_guitar_id = ig.id) as count_specifications
FROM individual_guitars ig
LEFT JOIN models m ON ig.model_id = m.id
LEFT JOIN manufacturers mfr ON m.manufacturer_id = mfr.id
LEFT JOIN product_lines pl ON m.product_line_id = pl.id
"""

MODELS_QUERY = """
SELECT
    m.id,
    m.name,
    m.year,
    m.production_type,
    m.msrp_original,
    m.currency,
    m.description,
    m.production_start_date,
    m.production_end_date,
    mfr.id as manufacturer_id,
    mfr.name as manufacturer_name,
    mfr.display_name as manufacturer_display_name,
    mfr.status as manufacturer_status,
    pl.name as product_line_name,
    (SELECT COUNT(*) FROM individual_guitars ig
      WHERE ig.model_id = m.id) as count_individual_guitars,
    (SELECT COUNT(*) FROM specifications s
      WHERE s.model_id = m.id) as count_specifications,
    (SELECT COUNT(*) FROM finishes f
      WHERE f.model_id = m.id) as count_finishes
FROM models m
LEFT JOIN manufacturers mfr ON m.manufacturer_id = mfr.id
LEFT JOIN product_lines pl ON m.product_line_id = pl.id
"""

MANUFACTURERS_QUERY = """
SELECT
    mfr.id,
    mfr.name,
    mfr.display_name,
    mfr.status,
    mfr.country,
    mfr.founded_year,
    mfr.website,
    mfr.notes,
    (SELECT COUNT(*) FROM models m
      WHERE m.manufacturer_id = mfr.id) as count_models,
    (SELECT COUNT(*) FROM product_lines pl
      WHERE pl.manufacturer_id = mfr.id) as count_product_lines
FROM manufacturers mfr
"""

PRODUCT_LINES_QUERY = """
SELECT
    pl.id,
    pl.name,
    pl.introduced_year,
    pl.discontinued_year,
    pl.description,
    pl.updated_at,
    mfr.id as manufacturer_id,
    mfr.name as manufacturer_name,
    mfr.display_name as manufacturer_display_name,
    mfr.status as manufacturer_status,
    (SELECT COUNT(*) FROM models m
      WHERE m.product_line_id = pl.id) as count_models
FROM product_lines pl
LEFT JOIN manufacturers mfr ON pl.manufacturer_id = mfr.id
"""

IMAGES_QUERY = """
SELECT
    entity_id,
    image_type,
    thumbnail_url,
    small_url,
    medium_url,
    original_url,
    caption,
    display_order,
    is_primary
FROM images
WHERE entity_type = %s
  AND entity_id::text = ANY(%s)
  AND image_type = ANY(%s)
ORDER BY entity_id, display_order
"""

VALUATIONS_QUERY = """
SELECT
    id,
    valuation_date,
    sale_price,
    average_estimate,
    low_estimate,
    high_estimate,
    sale_venue,
    condition_at_valuation
FROM market_valuations
WHERE individual_guitar_id::text = %s
ORDER BY valuation_date DESC NULLS LAST
LIMIT %s
"""

GUITAR_DETAIL_QUERY = GUITARS_QUERY + "WHERE ig.id::text = %s\n"
MODEL_DETAIL_QUERY = MODELS_QUERY + "WHERE m.id::text = %s\n"
MANUFACTURER_DETAIL_QUERY = MANUFACTURERS_QUERY + "WHERE mfr.id::text = %s\n"
PRODUCT_LINE_DETAIL_QUERY = PRODUCT_LINES_QUERY + "WHERE pl.id::text = %s\n"

# Most recent valuations shown on a guitar page
RECENT_VALUATIONS_LIMIT = 5


class CatalogQueries:
    """Fetches catalog entities as read-only records."""

    def __init__(self, db: Optional[DatabaseManager] = None):
        self._db = db

    @property
    def db(self) -> DatabaseManager:
        if self._db is None:
            self._db = get_db_manager()
        return self._db

    def fetch_images(self, entity_type: str, entity_ids: Iterable[str],
                     image_types: Iterable[str] = GUITAR_CARD_IMAGE_TYPES) -> Dict[str, List[ImageRecord]]:
        """
        Fetch images for a set of entities, grouped by entity id.

        Args:
            entity_type: 'individual_guitar', 'model', 'manufacturer', ...
            entity_ids: Entity ids to fetch images for
            image_types: Image types to include

        Returns:
            Dict of entity id to images ordered by display order
        """
        ids = [str(entity_id) for entity_id in entity_ids]
        if not ids:
            return {}
        rows = self.db.execute_query(IMAGES_QUERY, (entity_type, ids, list(image_types)))
        return group_images_by_entity(ImageRecord.from_row(row) for row in rows)

    def fetch_guitars(self, with_images: bool = True) -> List[GuitarRecord]:
        try:
            rows = self.db.execute_query(GUITARS_QUERY)
            images = {}
            if with_images:
                images = self.fetch_images('individual_guitar', [row['id'] for row in rows])
            return [GuitarRecord.from_row(row, images.get(str(row['id']))) for row in rows]
        except Exception as e:
            logger.error(f"Error fetching guitars: {e}")
            raise

    def fetch_models(self) -> List[ModelRecord]:
        try:
            return [ModelRecord.from_row(row) for row in self.db.execute_query(MODELS_QUERY)]
        except Exception as e:
            logger.error(f"Error fetching models: {e}")
            raise

    def fetch_manufacturers(self) -> List[ManufacturerRecord]:
        try:
            return [ManufacturerRecord.from_row(row)
                    for row in self.db.execute_query(MANUFACTURERS_QUERY)]
        except Exception as e:
            logger.error(f"Error fetching manufacturers: {e}")
            raise

    def fetch_product_lines(self) -> List[ProductLineRecord]:
        try:
            return [ProductLineRecord.from_row(row)
                    for row in self.db.execute_query(PRODUCT_LINES_QUERY)]
        except Exception as e:
            logger.error(f"Error fetching product lines: {e}")
            raise

    def fetch_valuations(self, guitar_id: str,
                         limit: int = RECENT_VALUATIONS_LIMIT) -> List[MarketValuationRecord]:
        """Most recent market valuations of a guitar, newest first."""
        rows = self.db.execute_query(VALUATIONS_QUERY, (str(guitar_id), limit))
        return [MarketValuationRecord.from_row(row) for row in rows]

    def fetch_guitar(self, guitar_id: str) -> Optional[GuitarRecord]:
        """
        Fetch one guitar with its images and recent valuations.

        Returns:
            The guitar, or None if no guitar has this id
        """
        try:
            row = self.db.execute_one(GUITAR_DETAIL_QUERY, (str(guitar_id),))
            if row is None:
                return None
            images = self.fetch_images('individual_guitar', [row['id']])
            return GuitarRecord.from_row(row, images.get(str(row['id'])),
                                         self.fetch_valuations(row['id']))
        except Exception as e:
            logger.error(f"Error fetching guitar {guitar_id}: {e}")
            raise

    def fetch_model(self, model_id: str) -> Optional[ModelRecord]:
        try:
            row = self.db.execute_one(MODEL_DETAIL_QUERY, (str(model_id),))
            return ModelRecord.from_row(row) if row else None
        except Exception as e:
            logger.error(f"Error fetching model {model_id}: {e}")
            raise

    def fetch_manufacturer(self, manufacturer_id: str) -> Optional[ManufacturerRecord]:
        try:
            row = self.db.execute_one(MANUFACTURER_DETAIL_QUERY, (str(manufacturer_id),))
            return ManufacturerRecord.from_row(row) if row else None
        except Exception as e:
            logger.error(f"Error fetching manufacturer {manufacturer_id}: {e}")
            raise

    def fetch_product_line(self, product_line_id: str) -> Optional[ProductLineRecord]:
        try:
            row = self.db.execute_one(PRODUCT_LINE_DETAIL_QUERY, (str(product_line_id),))
            return ProductLineRecord.from_row(row) if row else None
        except Exception as e:
            logger.error(f"Error fetching product line {product_line_id}: {e}")
            raise
