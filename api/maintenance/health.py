from flask import jsonify
from datetime import datetime
import logging

from . import maintenance_bp, db_manager

logger = logging.getLogger(__name__)


@maintenance_bp.route('/health', methods=['GET'])
def api_system_health():
    """存储连通性检查"""
    try:
        db_manager.ping()
        store_status = {'status': 'healthy', 'message': '存储连接正常'}
    except Exception as e:
        logger.error(f"存储连接检查失败: {e}")
        store_status = {'status': 'error', 'message': f'存储连接异常: {str(e)}'}

    healthy = store_status['status'] == 'healthy'
    return jsonify({
        'success': healthy,
        'status': 'ok' if healthy else 'error',
        'store': store_status,
        'backend': db_manager.store.backend,
        'check_time': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
    }), 200 if healthy else 503
