#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
主理人创作大赛评选系统 - 装饰器（权限控制、参数校验、日志、异常处理）
"""

import time
from functools import wraps
from flask import session, jsonify, request
import logging

from errors import ContestError

logger = logging.getLogger(__name__)

def role_required(required_roles):
    """角色权限验证装饰器

    Args:
        required_roles: 字符串或列表，指定需要的角色
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not session.get('logged_in'):
                return jsonify({'success': False, 'error': 'authentication_required', 'message': '请先登录'}), 401

            user_role = session.get('user_role')

            # 确保 required_roles 是列表
            if isinstance(required_roles, str):
                roles = [required_roles]
            else:
                roles = required_roles

            if user_role not in roles:
                return jsonify({'success': False, 'error': 'permission_denied', 'message': '权限不足'}), 403

            return f(*args, **kwargs)
        return decorated_function
    return decorator

def admin_required(f):
    """管理员权限装饰器"""
    return role_required(['admin'])(f)

def validate_json(required_fields=None):
    """JSON数据验证装饰器

    Args:
        required_fields: 必需的字段列表
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not request.is_json:
                return jsonify({'success': False, 'error': 'validation_error', 'message': '请求必须是JSON格式'}), 400

            data = request.get_json(silent=True)
            if not isinstance(data, dict) or not data:
                return jsonify({'success': False, 'error': 'validation_error', 'message': 'JSON数据为空'}), 400

            if required_fields:
                missing_fields = [
                    field for field in required_fields
                    if field not in data or data[field] is None or data[field] == ''
                ]

                if missing_fields:
                    return jsonify({
                        'success': False,
                        'error': 'validation_error',
                        'message': f'请填写: {", ".join(missing_fields)}',
                        'details': {'fields': missing_fields},
                    }), 400

            return f(*args, **kwargs)
        return decorated_function
    return decorator

def log_action(action_name):
    """操作日志装饰器

    Args:
        action_name: 操作名称
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user_id = session.get('user_id')
            user_name = session.get('user_name', 'Anonymous')

            start_time = time.perf_counter()
            logger.info(f"用户 {user_name}(ID:{user_id}) 开始执行操作: {action_name}")

            try:
                result = f(*args, **kwargs)

                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.info(
                    f"用户 {user_name}(ID:{user_id}) 完成操作: {action_name}, 耗时: {duration_ms:.1f} ms"
                )

                return result

            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    f"用户 {user_name}(ID:{user_id}) 执行操作失败: {action_name}, 耗时: {duration_ms:.1f} ms, 错误: {str(e)}"
                )
                raise

        return decorated_function
    return decorator

def handle_db_errors(f):
    """业务与存储错误处理装饰器

    业务异常按其状态码返回；其它异常记录堆栈后返回 500。
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ContestError as e:
            logger.warning(f"业务校验失败 {request.method} {request.path}: {e.error_code} {e.message}")
            return jsonify(e.to_dict()), e.status_code
        except Exception:
            logger.exception(f"存储操作错误 {request.method} {request.path}")
            return jsonify({
                'success': False,
                'error': 'internal_error',
                'message': '操作失败，请稍后重试',
            }), 500

    return decorated_function
