from flask import jsonify, session

from . import auth_bp


@auth_bp.route('/session', methods=['GET'])
def check_session():
    """当前会话信息"""
    return jsonify({
        'success': True,
        'logged_in': bool(session.get('logged_in')),
        'user_id': session.get('user_id'),
        'user_role': session.get('user_role'),
    })
