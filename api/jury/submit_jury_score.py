from flask import request, jsonify

from utils.decorators import validate_json, log_action, handle_db_errors
from scoring_engine import scoring_engine

from . import jury_bp, logger


@jury_bp.route('/jury/score', methods=['POST'])
@validate_json(['entryId', 'juryId', 'score'])
@log_action('评委打分')
@handle_db_errors
def submit_jury_score():
    """评委打分，同一评委再次提交会覆盖之前的分数"""
    data = request.get_json()
    entry = scoring_engine.record_jury_score(
        data['entryId'],
        data['juryId'],
        data['score'],
        feedback=data.get('feedback'),
    )

    result = {'success': True, 'message': '评分已提交'}
    if entry is not None:
        result['juryScore'] = entry.jury_score
        result['overallScore'] = entry.overall_score
    else:
        logger.warning(f"作品 {data['entryId']} 不存在，评分仅作记录")
    return jsonify(result)
