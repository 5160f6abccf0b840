from flask import request, jsonify, session

from utils.decorators import validate_json, log_action, handle_db_errors
from entry_manager import entry_manager

from . import entries_bp, logger


@entries_bp.route('/entries', methods=['POST'])
@validate_json(['title', 'description', 'mediaUrls'])
@log_action('提交参赛作品')
@handle_db_errors
def submit_entry():
    """提交参赛作品（userId 缺省时取当前登录主理人）"""
    data = request.get_json()
    user_id = data.get('userId') or session.get('user_id')

    entry = entry_manager.submit_entry(
        user_id=user_id,
        title=data['title'],
        description=data['description'],
        media_urls=data['mediaUrls'],
        category=data.get('category'),
    )

    logger.info(f"主理人 {user_id} 提交作品 {entry.entry_id}")
    return jsonify({
        'success': True,
        'message': '作品提交成功，等待审核',
        'entry': entry.to_dict(),
    })
