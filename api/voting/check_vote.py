from flask import jsonify

from utils.decorators import handle_db_errors

from . import voting_bp, db_manager


@voting_bp.route('/votes/<entry_id>/<voter_id>', methods=['GET'])
@handle_db_errors
def check_vote(entry_id, voter_id):
    """查询投票人是否已为该作品投票"""
    return jsonify({
        'success': True,
        'hasVoted': db_manager.has_voted(entry_id, voter_id),
    })
