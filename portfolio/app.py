"""
Portfolio CMS - Application Factory and startup
"""
import logging
import sys

import flask.cli
import structlog
from flask import Blueprint, Flask, request, send_from_directory

from portfolio.constants import ALEMBIC_DIR, DeployMode, StorageBackend
from portfolio.db import db, init_db, migrate
from portfolio.exceptions import register_exception_handlers
from portfolio.metrics import init_metrics
from portfolio.repositories import fold_tag_name, normalize_tag_name
from portfolio.rest_api import init_rest_api
from portfolio.routes.system import system_bp
from portfolio.services import EXTENSION_KEY, ServiceRegistry
from portfolio.settings import get_deploy_mode, load_settings
from portfolio.uploads import create_upload_gateway
from portfolio.utils import ColoredFormatter, FilterRemoveDateFromWerkzeugLogs

flask.cli.show_server_banner = lambda *args: None

logger = structlog.get_logger('main')


def configure_logging(settings):
    level = getattr(logging, str(settings["logging"]["level"]).upper(), logging.INFO)
    use_json = settings["logging"]["format"] == "json"

    formatter = ColoredFormatter(
        '[%(asctime)s.%(msecs)03d] %(levelname)s (%(module)s) %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(message)s') if use_json else formatter)
    logging.basicConfig(level=level, handlers=[handler], force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Apply filter to hide date from http access logs
    logging.getLogger('werkzeug').addFilter(FilterRemoveDateFromWerkzeugLogs())
    logging.getLogger('alembic.runtime.migration').setLevel(logging.WARNING)


def init_cors(app, allowed_origins):
    allow_all = "*" in allowed_origins

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin and (allow_all or origin in allowed_origins):
            response.headers["Access-Control-Allow-Origin"] = "*" if allow_all else origin
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
            response.headers["Access-Control-Allow-Headers"] = "Origin, Content-Type, Accept, Authorization"
            if not allow_all:
                response.headers["Vary"] = "Origin"
        return response


def init_upload_serving(app, upload_path):
    uploads_bp = Blueprint('uploads', __name__)

    @uploads_bp.route('/uploads/<path:filename>')
    def serve_upload(filename):
        return send_from_directory(upload_path, filename)

    app.register_blueprint(uploads_bp)


def create_app(config=None, settings=None, upload_gateway=None):
    """Application factory"""
    settings = settings or load_settings()
    deploy_mode = get_deploy_mode(settings)

    app = Flask(__name__)
    app.config["SQLALCHEMY_DATABASE_URI"] = settings["database"]["url"]
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SKIP_DATABASE'] = settings["database"].get("skip", False)
    app.config['DEPLOY_MODE'] = deploy_mode.value
    app.config.update(config or {})

    # Initialize components
    db.init_app(app)
    migrate.init_app(app, db, directory=ALEMBIC_DIR)

    # Upload backend and services are chosen once per process
    if upload_gateway is None:
        upload_gateway = create_upload_gateway(settings)
    normalizer = fold_tag_name if settings["tags"].get("normalize") else normalize_tag_name
    app.extensions[EXTENSION_KEY] = ServiceRegistry(upload_gateway, normalizer)

    # Register blueprints
    app.register_blueprint(system_bp)

    # Initialize REST API
    api_bp = Blueprint('api', __name__, url_prefix='/api')
    api = init_rest_api(api_bp)
    app.register_blueprint(api_bp)

    # Register exception handlers
    register_exception_handlers(app, api)

    init_cors(app, settings["server"].get("cors_allowed_origins") or [])

    # Initialize metrics
    init_metrics(app)

    if upload_gateway.backend == StorageBackend.LOCAL and deploy_mode == DeployMode.STANDALONE:
        init_upload_serving(app, upload_gateway.base_path)

    if app.config['SKIP_DATABASE']:
        logger.warning("Database initialization skipped (SKIP_DATABASE)")
    else:
        init_db(app)

    logger.info("Application created", deploy_mode=deploy_mode.value, upload=upload_gateway.backend.value)
    return app


def main():
    settings = load_settings()
    configure_logging(settings)
    app = create_app(settings=settings)
    server = settings["server"]
    logger.info(f"Starting server on {server['host']}:{server['port']}")
    app.run(host=server["host"], port=server["port"], threaded=True)


if __name__ == '__main__':
    main()
