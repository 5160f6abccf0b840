from flask import request, jsonify

from utils.decorators import admin_required, log_action, handle_db_errors
from scoring_engine import scoring_engine

from . import admin_bp


@admin_bp.route('/entries', methods=['GET'])
@admin_required
@log_action('获取审核作品列表')
@handle_db_errors
def get_admin_entries():
    """全部作品（可按状态筛选），最新上传的在前"""
    status = request.args.get('status') or None
    return jsonify({
        'success': True,
        'entries': scoring_engine.list_for_admin(status),
    })
