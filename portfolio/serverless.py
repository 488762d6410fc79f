"""
Serverless entry point: the Flask app is built on the first request and
reused by every later invocation of the same instance.
"""
import threading

import structlog
from flask import Flask, jsonify

from portfolio.settings import load_settings

logger = structlog.get_logger('serverless')


def _init_failure_app(error):
    failed = Flask(__name__)

    @failed.route('/', defaults={'path': ''}, methods=['GET', 'POST', 'PUT', 'DELETE'])
    @failed.route('/<path:path>', methods=['GET', 'POST', 'PUT', 'DELETE'])
    def init_failed(path):
        return jsonify({
            'error': True,
            'code': 'INIT_ERROR',
            'message': f'Application failed to initialize: {error}'
        }), 500

    return failed


class LazyApplication:
    """WSGI callable that creates the real app once, on first use."""

    def __init__(self, factory):
        self.factory = factory
        self._app = None
        self._lock = threading.Lock()

    def get_app(self):
        if self._app is None:
            with self._lock:
                if self._app is None:
                    try:
                        self._app = self.factory()
                    except Exception as e:
                        logger.error("serverless_init_failed", error=str(e), exc_info=True)
                        self._app = _init_failure_app(e)
        return self._app

    def __call__(self, environ, start_response):
        return self.get_app()(environ, start_response)


def _build():
    from portfolio.app import configure_logging, create_app

    settings = load_settings()
    configure_logging(settings)
    return create_app(settings=settings)


app = LazyApplication(_build)
