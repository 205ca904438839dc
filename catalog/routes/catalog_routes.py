"""
Catalog list and view preference routes for the String Authority Catalog.
"""

from flask import Blueprint, request, jsonify, current_app
from typing import Any, Callable, Dict, Optional
import logging

from ..config import get_display_config
from ..display.sorting import SortConfigurationError
from ..preferences import JsonFilePreferenceStore, VIEW_TYPES
from ..services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

# Create blueprint
catalog_bp = Blueprint('catalog', __name__)

# Initialize services
catalog_service = CatalogService()
preference_store = JsonFilePreferenceStore(get_display_config()['preferences_path'])


def _bad_request(message: str):
    return jsonify({
        'error': 'Bad Request',
        'message': message
    }), 400


def _list_response(list_fn: Callable[..., Dict[str, Any]], label: str):
    """
    Parse the shared list query parameters and run a list service call.

    Query Parameters:
        sort (str, optional): Column to sort by
        direction (str, optional): 'asc' or 'desc' (default: 'asc')
        order (str, optional): Multi-key order, e.g. "significance_level,-current_estimated_value"
        page (int, optional): Page number (default: 1)
        page_size (int, optional): Results per page (default: 20, max: configurable)
    """
    max_page_size = current_app.config['MAX_PAGE_SIZE']
    try:
        page = int(request.args.get('page', '1') or 1)
        page_size = int(request.args.get('page_size', '') or current_app.config['DEFAULT_PAGE_SIZE'])
    except ValueError:
        return _bad_request('Invalid numeric parameter format')

    if page < 1:
        return _bad_request('Page number must be >= 1')

    if page_size < 1 or page_size > max_page_size:
        return _bad_request(f'Page size must be between 1 and {max_page_size}')

    sort = (request.args.get('sort') or '').strip() or None
    direction = (request.args.get('direction') or '').strip().lower() or None
    order = (request.args.get('order') or '').strip() or None

    try:
        result = list_fn(
            sort=sort,
            direction=direction,
            order=order,
            page=page,
            page_size=page_size,
            max_page_size=max_page_size
        )
    except SortConfigurationError as e:
        return _bad_request(str(e))
    except Exception as e:
        logger.error(f"Error listing {label}: {e}")
        return jsonify({
            'error': 'Internal Server Error',
            'message': f'An error occurred while listing {label}'
        }), 500

    response = {
        label: result['data'],
        'columns': result['columns'],
        'sort': result['sort'],
        'view': preference_store.get(result['view_key']),
        'total_records': result['pagination']['total_records'],
        'current_page': result['pagination']['current_page'],
        'page_size': result['pagination']['page_size'],
        'total_pages': result['pagination']['total_pages']
    }
    return jsonify(response)


@catalog_bp.route('/guitars', methods=['GET'])
def list_guitars():
    """List individual guitars; default order is significance, value (desc), serial."""
    return _list_response(catalog_service.list_guitars, 'individual_guitars')


@catalog_bp.route('/models', methods=['GET'])
def list_models():
    """List guitar models; default order is year (desc), name."""
    return _list_response(catalog_service.list_models, 'models')


@catalog_bp.route('/manufacturers', methods=['GET'])
def list_manufacturers():
    return _list_response(catalog_service.list_manufacturers, 'manufacturers')


@catalog_bp.route('/product-lines', methods=['GET'])
def list_product_lines():
    return _list_response(catalog_service.list_product_lines, 'product_lines')


def _detail_response(get_fn: Callable[[str], Optional[Dict[str, Any]]], entity_id: str, label: str):
    try:
        detail = get_fn(entity_id)
    except Exception as e:
        logger.error(f"Error loading {label} {entity_id}: {e}")
        return jsonify({
            'error': 'Internal Server Error',
            'message': f'An error occurred while loading {label}'
        }), 500

    if detail is None:
        return jsonify({
            'error': 'Not found',
            'message': f'No {label} with id {entity_id}'
        }), 404
    return jsonify(detail)


@catalog_bp.route('/guitars/<guitar_id>', methods=['GET'])
def get_guitar(guitar_id: str):
    """One guitar with display name/year, primary image, value, dates and recent valuations."""
    return _detail_response(catalog_service.get_guitar, guitar_id, 'guitar')


@catalog_bp.route('/models/<model_id>', methods=['GET'])
def get_model(model_id: str):
    """One model with MSRP in its own currency and production dates."""
    return _detail_response(catalog_service.get_model, model_id, 'model')


@catalog_bp.route('/manufacturers/<manufacturer_id>', methods=['GET'])
def get_manufacturer(manufacturer_id: str):
    return _detail_response(catalog_service.get_manufacturer, manufacturer_id, 'manufacturer')


@catalog_bp.route('/product-lines/<product_line_id>', methods=['GET'])
def get_product_line(product_line_id: str):
    return _detail_response(catalog_service.get_product_line, product_line_id, 'product line')


@catalog_bp.route('/preferences/<key>', methods=['GET'])
def get_view_preference(key: str):
    """Return the remembered list layout for a page."""
    return jsonify({'key': key, 'view': preference_store.get(key)})


@catalog_bp.route('/preferences/<key>', methods=['PUT'])
def set_view_preference(key: str):
    """
    Remember the list layout for a page.

    JSON Body:
        view (str, required): 'cards' or 'list'
    """
    payload = request.get_json(silent=True) or {}
    view = payload.get('view')
    if view not in VIEW_TYPES:
        return _bad_request(f"view must be one of {list(VIEW_TYPES)}")

    try:
        preference_store.set(key, view)
    except ValueError as e:
        return _bad_request(str(e))
    return jsonify({'key': key, 'view': view})


@catalog_bp.errorhandler(400)
def handle_bad_request(error):
    """Handle bad request errors."""
    return jsonify({
        'error': 'Bad Request',
        'message': str(error.description) if hasattr(error, 'description') else 'Invalid request'
    }), 400


@catalog_bp.errorhandler(500)
def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal server error: {error}")
    return jsonify({
        'error': 'Internal Server Error',
        'message': 'An unexpected error occurred'
    }), 500
