from flask import request, jsonify

from utils.decorators import validate_json, log_action, handle_db_errors
from scoring_engine import scoring_engine

from . import voting_bp


@voting_bp.route('/votes', methods=['POST'])
@validate_json(['entryId', 'voterId'])
@log_action('公众投票')
@handle_db_errors
def submit_vote():
    """公众投票，每位投票人对同一作品只能投一次"""
    data = request.get_json()
    total_votes = scoring_engine.record_vote(data['entryId'], data['voterId'])
    return jsonify({
        'success': True,
        'message': '投票成功',
        'totalVotes': total_votes,
    })
