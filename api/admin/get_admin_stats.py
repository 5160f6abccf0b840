from flask import jsonify

from utils.decorators import admin_required, handle_db_errors
from entry_manager import entry_manager

from . import admin_bp


@admin_bp.route('/stats', methods=['GET'])
@admin_required
@handle_db_errors
def get_admin_stats():
    return jsonify({'success': True, 'stats': entry_manager.get_status_stats()})
