from flask import request, jsonify

from utils.decorators import handle_db_errors
from scoring_engine import scoring_engine

from . import entries_bp


@entries_bp.route('/entries', methods=['GET'])
@handle_db_errors
def get_entries():
    """公开作品列表：已通过审核，按综合得分降序"""
    category = request.args.get('category') or None
    entries = scoring_engine.list_approved(category)
    return jsonify({'success': True, 'entries': entries})
