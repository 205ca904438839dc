"""
Shared helpers for catalog list services.
"""

import math
from typing import Any, Dict, List, Tuple


def validate_pagination_params(page: int, page_size: int, max_page_size: int) -> Tuple[int, int]:
    """
    Clamp pagination parameters to sane values.

    Returns:
        Tuple of (page, page_size)
    """
    page = max(1, int(page or 1))
    page_size = max(1, min(int(page_size or max_page_size), max_page_size))
    return page, page_size


def paginate_results(results: List[Any], page: int, page_size: int,
                     total_records: int) -> Dict[str, Any]:
    """Wrap one page of results with pagination metadata."""
    return {
        'data': results,
        'pagination': {
            'total_records': total_records,
            'current_page': page,
            'page_size': page_size,
            'total_pages': math.ceil(total_records / page_size) if page_size else 0
        }
    }


def slice_page(records: List[Any], page: int, page_size: int) -> List[Any]:
    offset = (page - 1) * page_size
    return records[offset:offset + page_size]
