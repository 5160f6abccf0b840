from flask import jsonify, session

from . import admin_bp


@admin_bp.route('/logout', methods=['POST'])
def admin_logout():
    session.clear()
    return jsonify({'success': True, 'message': '已退出登录'})
