#!/usr/bin/env python3

# String Authority Database - Electric Guitar Provenance and Authentication System
# Copyright (C) 2025 Mariano Rozanski
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
String Authority Catalog API
Flask REST API serving the catalog list views (guitars, models,
manufacturers, product lines) with derived display fields.
"""

from flask import Flask, jsonify
from flask_cors import CORS

from catalog.routes.catalog_routes import catalog_bp
from catalog.config import get_database_config, get_pagination_config

def create_app():
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Enable CORS for all routes
    CORS(app)

    # Configuration
    pagination = get_pagination_config()
    app.config['MAX_PAGE_SIZE'] = pagination['max_page_size']
    app.config['DEFAULT_PAGE_SIZE'] = pagination['default_page_size']

    # Register blueprints
    app.register_blueprint(catalog_bp, url_prefix='/api')

    # Health check endpoint
    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        db_config = get_database_config()
        return jsonify({
            'status': 'healthy',
            'database': 'configured' if db_config else 'error'
        })

    # Error handlers
    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({
            'error': 'Bad request',
            'message': str(error.description) if hasattr(error, 'description') else 'Invalid request'
        }), 400

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'error': 'Not found',
            'message': 'The requested resource was not found'
        }), 404

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({
            'error': 'Internal server error',
            'message': 'An unexpected error occurred'
        }), 500

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(debug=True, host='0.0.0.0', port=5000)
