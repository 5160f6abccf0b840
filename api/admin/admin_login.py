from flask import request, jsonify, session, current_app

from utils.decorators import validate_json, log_action, handle_db_errors
from user_manager import authenticate_admin

from . import admin_bp, logger


@admin_bp.route('/login', methods=['POST'])
@validate_json(['password'])
@log_action('管理员登录')
@handle_db_errors
def admin_login():
    """管理员口令登录"""
    data = request.get_json()
    authenticate_admin(data['password'], current_app.config.get('ADMIN_PASSWORD_HASH_RESOLVED'))

    session.clear()
    session['logged_in'] = True
    session['user_id'] = 'admin'
    session['user_name'] = '管理员'
    session['user_role'] = 'admin'
    session.permanent = True

    logger.info("管理员登录成功")
    return jsonify({'success': True, 'message': '登录成功'})
