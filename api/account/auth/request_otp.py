from flask import request, jsonify, current_app

from utils.decorators import validate_json, log_action, handle_db_errors
from user_manager import user_manager

from . import auth_bp


@auth_bp.route('/request-otp', methods=['POST'])
@validate_json(['phone'])
@log_action('申请登录验证码')
@handle_db_errors
def request_otp():
    """为已注册手机号发送登录验证码"""
    data = request.get_json()
    code = user_manager.request_login_code(data['phone'])

    # 仅在演示模式且开启调试时回显验证码
    return_code = code if (
        current_app.config.get('SMS_PROVIDER') == 'demo' and current_app.config.get('DEBUG')
    ) else None

    return jsonify({
        'success': True,
        'message': '验证码已发送',
        'code': return_code,
    })
