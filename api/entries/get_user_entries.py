from flask import jsonify

from utils.decorators import log_action, handle_db_errors
from entry_manager import entry_manager

from . import entries_bp


@entries_bp.route('/users/<user_id>/entries', methods=['GET'])
@log_action('获取主理人作品')
@handle_db_errors
def get_user_entries(user_id):
    """主理人看板：作品列表与统计"""
    return jsonify({
        'success': True,
        'entries': entry_manager.get_user_entries(user_id),
        'stats': entry_manager.get_host_stats(user_id),
    })
