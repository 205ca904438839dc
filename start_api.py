#!/usr/bin/env python3

"""
Startup script for the String Authority catalog API.
"""

import logging
import sys
import os


def main():
    """Start the API server."""
    logging.basicConfig(
        level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    try:
        from catalog.app import create_app

        print("🎸 Starting String Authority Catalog API...")

        app = create_app()

        port = int(os.environ.get('PORT', 8000))
        print(f"📡 Server starting on http://localhost:{port}")
        print("🔍 Available endpoints:")
        print(f"   GET http://localhost:{port}/api/health")
        print(f"   GET http://localhost:{port}/api/guitars?sort=<column>&direction=<asc|desc>")
        print(f"   GET http://localhost:{port}/api/guitars?order=significance_level,-current_estimated_value")
        print(f"   GET http://localhost:{port}/api/models")
        print(f"   GET http://localhost:{port}/api/manufacturers")
        print(f"   GET http://localhost:{port}/api/product-lines")
        print(f"   GET http://localhost:{port}/api/<guitars|models|manufacturers|product-lines>/<id>")
        print(f"   GET/PUT http://localhost:{port}/api/preferences/<key>")
        print("🛑 Press Ctrl+C to stop the server\n")

        app.run(
            debug=True,
            host='0.0.0.0',
            port=port,
            use_reloader=True
        )

    except KeyboardInterrupt:
        print("\n🛑 Server stopped by user")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
