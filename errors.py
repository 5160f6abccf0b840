#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
主理人创作大赛评选系统 - 业务异常定义

所有业务失败都以异常形式同步抛给调用方，由 API 层转换为 JSON 响应。
"""


class ContestError(Exception):
    """业务异常基类"""
    status_code = 400
    error_code = 'contest_error'
    default_message = '操作失败'

    def __init__(self, message=None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self):
        payload = {
            'success': False,
            'error': self.error_code,
            'message': self.message,
        }
        if self.details:
            payload['details'] = self.details
        return payload


class ValidationError(ContestError):
    """缺少字段或字段格式错误"""
    error_code = 'validation_error'
    default_message = '请求参数不正确'


class DuplicateVote(ContestError):
    """同一投票人对同一作品重复投票"""
    error_code = 'duplicate_vote'
    default_message = '您已经为该作品投过票'


class InvalidScore(ContestError):
    """评委分数不在 0-100 之间或不是数字"""
    error_code = 'invalid_score'
    default_message = '分数必须在0-100之间'


class InvalidStatus(ContestError):
    """作品状态不是 pending / approved / rejected"""
    error_code = 'invalid_status'
    default_message = '作品状态无效'


class DuplicateUser(ContestError):
    """手机号已注册"""
    error_code = 'duplicate_user'
    default_message = '该手机号已注册'


class InvalidOTP(ContestError):
    error_code = 'invalid_otp'
    default_message = '验证码错误或已过期'


class EntryNotFound(ContestError):
    status_code = 404
    error_code = 'entry_not_found'
    default_message = '作品不存在'


class UserNotFound(ContestError):
    status_code = 404
    error_code = 'user_not_found'
    default_message = '用户不存在，请先注册'


class AuthenticationError(ContestError):
    status_code = 401
    error_code = 'authentication_required'
    default_message = '请先登录'


class PermissionDenied(ContestError):
    status_code = 403
    error_code = 'permission_denied'
    default_message = '权限不足'


class ConcurrentUpdate(ContestError):
    """乐观锁重试次数用尽"""
    status_code = 409
    error_code = 'concurrent_update'
    default_message = '数据正在被其他请求修改，请稍后重试'
