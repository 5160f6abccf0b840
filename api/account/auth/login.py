from flask import request, jsonify, session

from utils.decorators import validate_json, log_action, handle_db_errors
from user_manager import user_manager

from . import auth_bp, logger


@auth_bp.route('/login', methods=['POST'])
@validate_json(['phone'])
@log_action('主理人登录')
@handle_db_errors
def login():
    """手机号 + 验证码登录"""
    data = request.get_json()
    user = user_manager.authenticate_user(data['phone'], data.get('otp'))

    # 设置会话
    session.clear()
    session['logged_in'] = True
    session['user_id'] = user.user_id
    session['user_name'] = user.name
    session['user_role'] = 'host'
    session.permanent = True

    logger.info(f"主理人 {user.user_id} 登录成功")

    return jsonify({
        'success': True,
        'message': '登录成功',
        'user': user.to_dict(),
    })
