from flask import request, jsonify

from utils.decorators import validate_json, log_action, handle_db_errors
from user_manager import user_manager

from . import auth_bp, logger


@auth_bp.route('/signup', methods=['POST'])
@validate_json(['phone', 'name', 'hostType'])
@log_action('主理人注册')
@handle_db_errors
def signup():
    """主理人注册"""
    data = request.get_json()

    user = user_manager.register_user(
        phone=data['phone'],
        name=data['name'],
        host_type=data['hostType'],
        email=data.get('email'),
    )

    logger.info(f"主理人 {user.user_id} 注册成功")
    return jsonify({
        'success': True,
        'message': '注册成功',
        'user': user.to_dict(),
    })
