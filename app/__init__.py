import logging

from flasgger import Swagger
from flask import Flask, jsonify
from flask_cors import CORS

from config import config


def create_app(config_name='default'):
    app = Flask(__name__)
    app.config.from_object(config[config_name])

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    origins = app.config['CORS_ORIGINS']
    CORS(app, resources={r'/api/*': {
        'origins': origins if origins == '*' else [o.strip() for o in origins.split(',')]
    }}, send_wildcard=(origins == '*'))

    # Register blueprints
    from app.api import api_bp
    app.register_blueprint(api_bp, url_prefix='/api')

    # Interactive OpenAPI docs
    from app.api.openapi import TEMPLATE, DOCS_ROUTE, swagger_config
    Swagger(app, template=TEMPLATE, config=swagger_config(Swagger.DEFAULT_CONFIG))

    @app.route('/')
    def index():
        return jsonify({
            'name': 'Concrete test calculation API',
            'endpoints': {
                'core': ['/api/core/calculate', '/api/core/calculate/batch'],
                'pulloff': ['/api/pulloff/calculate', '/api/pulloff/calculate/batch'],
                'schmidt': ['/api/schmidt/anvil', '/api/schmidt/calculate/batch'],
                'reference': [
                    '/api/reference/ld-correction',
                    '/api/reference/moisture-correction',
                    '/api/reference/fg-correction',
                    '/api/reference/ld-factor/<ratio>',
                    '/api/reference/moisture-factor/<condition>',
                    '/api/reference/fg-factor/<diameter>/<strength>',
                    '/api/reference/coverage-factor/<dof>',
                ],
                'health': '/api/health',
                'docs': DOCS_ROUTE,
            },
        })

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.exception('Unhandled error')
        return jsonify({'error': 'Internal server error'}), 500

    return app
