from flask import request, jsonify, current_app

from errors import ValidationError
from utils.decorators import handle_db_errors
from utils.helpers import parse_limit
from scoring_engine import scoring_engine

from . import leaderboard_bp


@leaderboard_bp.route('/leaderboard', methods=['GET'])
@handle_db_errors
def get_leaderboard():
    """排行榜，可按分类筛选"""
    default_limit = current_app.config['CONTEST_CONFIG']['leaderboard_limit']
    limit = parse_limit(request.args.get('limit'), default_limit)
    if limit is None:
        raise ValidationError('limit 必须是非负整数', field='limit')

    category = request.args.get('category') or None
    board, total = scoring_engine.leaderboard(category=category, limit=limit)
    return jsonify({
        'success': True,
        'leaderboard': board,
        'total': total,
    })
