from flask import jsonify

from utils.decorators import handle_db_errors
from entry_manager import entry_manager

from . import entries_bp


@entries_bp.route('/entries/<entry_id>', methods=['GET'])
@handle_db_errors
def get_entry(entry_id):
    entry = entry_manager.get_entry_detail(entry_id)
    return jsonify({'success': True, 'entry': entry})
