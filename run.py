#!/usr/bin/env python3
"""Application entry point."""
import os
from app import create_app

# Get config from environment or use development
config_name = os.environ.get('FLASK_CONFIG') or 'development'
app = create_app(config_name)


if __name__ == '__main__':
    app.run(host=app.config['API_HOST'], port=app.config['API_PORT'],
            debug=app.config.get('DEBUG', False))
