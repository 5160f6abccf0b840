from flask import request, jsonify

from utils.decorators import admin_required, validate_json, log_action, handle_db_errors
from entry_manager import entry_manager

from . import admin_bp


@admin_bp.route('/entries/<entry_id>/status', methods=['PUT'])
@admin_required
@validate_json(['status'])
@log_action('修改作品审核状态')
@handle_db_errors
def update_entry_status(entry_id):
    """修改作品审核状态（只改状态，不影响分数）"""
    data = request.get_json()
    entry = entry_manager.set_entry_status(entry_id, data['status'])
    return jsonify({
        'success': True,
        'message': '状态已更新',
        'entry': entry.to_dict(),
    })
