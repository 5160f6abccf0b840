from flask import jsonify, session

from . import auth_bp, logger


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """退出登录"""
    user_id = session.get('user_id')
    session.clear()
    if user_id:
        logger.info(f"用户 {user_id} 已退出登录")
    return jsonify({'success': True, 'message': '已退出登录'})
