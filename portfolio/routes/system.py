from flask import Blueprint, current_app, jsonify

from portfolio.constants import BUILD_VERSION, SERVICE_NAME
from portfolio.db import ping_db
from portfolio.services import get_services
from portfolio.utils import now_utc

system_bp = Blueprint('system', __name__)


@system_bp.route('/api/health')
def health_api():
    """Liveness plus database and upload backend status"""
    config = current_app.config
    if config.get('SKIP_DATABASE'):
        database = 'skipped'
    else:
        database = 'ok' if ping_db() else 'unavailable'
    return jsonify({
        'status': 'ok' if database != 'unavailable' else 'degraded',
        'service': SERVICE_NAME,
        'version': BUILD_VERSION,
        'timestamp': now_utc().isoformat(),
        'deploy_mode': config.get('DEPLOY_MODE'),
        'upload': get_services().uploads.describe(),
        'database': database,
    })
