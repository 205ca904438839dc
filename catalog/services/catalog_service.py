"""
Catalog services: list pages (fetch, order, paginate, render rows) and
single-entity detail views.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence
import logging

from ..config import get_display_config
from ..display.columns import (
    Column,
    build_guitar_columns,
    build_manufacturer_columns,
    build_model_columns,
    build_product_line_columns,
    describe_columns,
    render_row,
)
from ..display.details import (
    guitar_detail,
    manufacturer_detail,
    model_detail,
    product_line_detail,
)
from ..display.images import image_url, select_primary_image
from ..display.names import resolve_display_name, resolve_display_year
from ..display.sorting import (
    ColumnSort,
    DEFAULT_GUITAR_ORDER,
    DEFAULT_MANUFACTURER_ORDER,
    DEFAULT_MODEL_ORDER,
    DEFAULT_PRODUCT_LINE_ORDER,
    GUITAR_SORT_FIELDS,
    MANUFACTURER_SORT_FIELDS,
    MODEL_SORT_FIELDS,
    PRODUCT_LINE_SORT_FIELDS,
    SortFields,
    SortKey,
    bind_sort_keys,
    parse_sort_keys,
    sort_records,
)
from ..preferences import (
    GUITARS_VIEW_KEY,
    MANUFACTURERS_VIEW_KEY,
    MODELS_VIEW_KEY,
    PRODUCT_LINES_VIEW_KEY,
)
from .catalog_queries import CatalogQueries
from .utils import paginate_results, slice_page, validate_pagination_params

logger = logging.getLogger(__name__)


def _guitar_extras(guitar) -> Dict[str, Any]:
    return {
        'display_name': resolve_display_name(guitar),
        'display_year': resolve_display_year(guitar),
        'image_url': image_url(select_primary_image(guitar.images)),
    }


@dataclass(frozen=True)
class ListDefinition:
    """Everything a list page needs: data source, sort fields, columns."""
    name: str
    fetch: Callable[[CatalogQueries], List[Any]]
    fields: SortFields
    default_order: Sequence[SortKey]
    build_columns: Callable[..., List[Column]]
    view_key: str
    extras: Optional[Callable[[Any], Dict[str, Any]]] = None

    def __post_init__(self):
        bind_sort_keys(self.default_order, self.fields)
        unknown = [column.key for column in self.build_columns()
                   if column.sortable and column.key not in self.fields]
        if unknown:
            raise ValueError(f"Sortable columns without a sort field in '{self.name}': {unknown}")


GUITARS = ListDefinition(
    name='guitars',
    fetch=lambda queries: queries.fetch_guitars(),
    fields=GUITAR_SORT_FIELDS,
    default_order=DEFAULT_GUITAR_ORDER,
    build_columns=build_guitar_columns,
    view_key=GUITARS_VIEW_KEY,
    extras=_guitar_extras,
)

MODELS = ListDefinition(
    name='models',
    fetch=lambda queries: queries.fetch_models(),
    fields=MODEL_SORT_FIELDS,
    default_order=DEFAULT_MODEL_ORDER,
    build_columns=build_model_columns,
    view_key=MODELS_VIEW_KEY,
)

MANUFACTURERS = ListDefinition(
    name='manufacturers',
    fetch=lambda queries: queries.fetch_manufacturers(),
    fields=MANUFACTURER_SORT_FIELDS,
    default_order=DEFAULT_MANUFACTURER_ORDER,
    build_columns=build_manufacturer_columns,
    view_key=MANUFACTURERS_VIEW_KEY,
)

PRODUCT_LINES = ListDefinition(
    name='product_lines',
    fetch=lambda queries: queries.fetch_product_lines(),
    fields=PRODUCT_LINE_SORT_FIELDS,
    default_order=DEFAULT_PRODUCT_LINE_ORDER,
    build_columns=build_product_line_columns,
    view_key=PRODUCT_LINES_VIEW_KEY,
)


class CatalogService:
    """Service for the catalog list pages."""

    def __init__(self, queries: Optional[CatalogQueries] = None, locale: Optional[str] = None,
                 currency: Optional[str] = None):
        display_config = get_display_config()
        self.queries = queries or CatalogQueries()
        self.locale = locale or display_config['locale']
        self.currency = currency or display_config['currency']

    def list_entities(self, definition: ListDefinition, sort: Optional[str] = None,
                      direction: Optional[str] = None, order: Optional[str] = None,
                      page: int = 1, page_size: int = 20,
                      max_page_size: int = 50) -> Dict[str, Any]:
        """
        Build one page of a catalog list.

        Args:
            definition: Which list to build
            sort: Single column to sort by, as clicked in a list header
            direction: 'asc' or 'desc' for the sort column (default 'asc')
            order: Multi-key order such as "significance_level,-current_estimated_value";
                ignored when sort is given
            page: Page number (1-based)
            page_size: Number of results per page
            max_page_size: Maximum allowed page size

        Returns:
            Dict with rows, column metadata, the active sort and pagination metadata

        Raises:
            SortConfigurationError: If sort, direction or order name unknown fields
        """
        page, page_size = validate_pagination_params(page, page_size, max_page_size)

        # Validate ordering before touching the database
        column_sort = ColumnSort(definition.fields, sort, direction or 'asc') if sort else None
        keys = parse_sort_keys(order, definition.fields) if order and not sort else None

        try:
            records = definition.fetch(self.queries)
        except Exception as e:
            logger.error(f"Error listing {definition.name}: {e}")
            raise

        if column_sort is not None:
            ordered = column_sort.apply(records)
        else:
            ordered = sort_records(records, keys or definition.default_order, definition.fields)

        columns = definition.build_columns(self.locale, self.currency)
        rows = []
        for record in slice_page(ordered, page, page_size):
            row = render_row(record, columns)
            if definition.extras:
                row.update(definition.extras(record))
            rows.append(row)

        result = paginate_results(rows, page, page_size, len(ordered))
        result['columns'] = self._describe_columns(columns, column_sort or ColumnSort(definition.fields))
        result['sort'] = (
            {'key': column_sort.key, 'direction': column_sort.direction} if column_sort else None
        )
        result['view_key'] = definition.view_key
        return result

    def _describe_columns(self, columns: List[Column], current: ColumnSort) -> List[Dict[str, Any]]:
        described = describe_columns(columns)
        for column, entry in zip(columns, described):
            if column.sortable:
                entry['next_direction'] = current.toggle(column.key).direction
        return described

    def list_guitars(self, **kwargs) -> Dict[str, Any]:
        return self.list_entities(GUITARS, **kwargs)

    def list_models(self, **kwargs) -> Dict[str, Any]:
        return self.list_entities(MODELS, **kwargs)

    def list_manufacturers(self, **kwargs) -> Dict[str, Any]:
        return self.list_entities(MANUFACTURERS, **kwargs)

    def list_product_lines(self, **kwargs) -> Dict[str, Any]:
        return self.list_entities(PRODUCT_LINES, **kwargs)

    def _detail(self, label: str, fetch: Callable[[], Any],
                render: Callable[..., Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        try:
            record = fetch()
        except Exception as e:
            logger.error(f"Error loading {label}: {e}")
            raise
        if record is None:
            logger.info(f"{label} not found")
            return None
        return render(record, self.locale, self.currency)

    def get_guitar(self, guitar_id: str) -> Optional[Dict[str, Any]]:
        """
        Detail view of one guitar.

        Returns:
            Detail dict, or None if no guitar has this id
        """
        return self._detail(f"Guitar {guitar_id}",
                            lambda: self.queries.fetch_guitar(guitar_id), guitar_detail)

    def get_model(self, model_id: str) -> Optional[Dict[str, Any]]:
        return self._detail(f"Model {model_id}",
                            lambda: self.queries.fetch_model(model_id), model_detail)

    def get_manufacturer(self, manufacturer_id: str) -> Optional[Dict[str, Any]]:
        return self._detail(f"Manufacturer {manufacturer_id}",
                            lambda: self.queries.fetch_manufacturer(manufacturer_id),
                            manufacturer_detail)

    def get_product_line(self, product_line_id: str) -> Optional[Dict[str, Any]]:
        return self._detail(f"Product line {product_line_id}",
                            lambda: self.queries.fetch_product_line(product_line_id),
                            product_line_detail)
