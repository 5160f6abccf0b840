#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
主理人创作大赛评选系统 - 用户管理模块
"""

import logging
import uuid
from datetime import datetime

from database import DatabaseManager
from errors import AuthenticationError, DuplicateUser, InvalidOTP, UserNotFound, ValidationError
from models import User, HostType
from utils.helpers import generate_password_hash, validate_email, validate_phone, verify_password
from utils.sms_service import sms_provider

logger = logging.getLogger(__name__)


class UserManager:
    """用户管理器 - 主理人注册、验证码登录、管理员口令校验"""

    def __init__(self, db_manager=None):
        self.db_manager = db_manager or DatabaseManager()

    def register_user(self, phone, name, host_type, email=None):
        """注册主理人，手机号唯一"""
        phone = (phone or '').strip()
        name = (name or '').strip()
        email = (email or '').strip()

        missing = [
            field for field, value in (('phone', phone), ('name', name), ('hostType', host_type))
            if not value
        ]
        if missing:
            raise ValidationError(f'请填写: {", ".join(missing)}', fields=missing)

        if not validate_phone(phone):
            raise ValidationError('手机号格式不正确', field='phone')
        if email and not validate_email(email):
            raise ValidationError('邮箱格式不正确', field='email')
        try:
            host_type = HostType(host_type)
        except ValueError:
            raise ValidationError(f'未知的主理人类型: {host_type}', field='hostType')

        user = User(
            user_id=str(uuid.uuid4()),
            phone=phone,
            name=name,
            email=email,
            host_type=host_type,
            kyc_verified=False,
            created_at=datetime.now(),
            profile_complete=False,
        )

        if not self.db_manager.create_user(user):
            logger.warning(f"手机号 {phone} 重复注册，已拒绝")
            raise DuplicateUser()

        logger.info(f"主理人注册成功: {user.user_id}")
        return user

    def request_login_code(self, phone):
        """为已注册手机号签发登录验证码，返回验证码"""
        phone = (phone or '').strip()
        if not phone:
            raise ValidationError('请填写: phone', field='phone')
        if self.db_manager.get_user_by_phone(phone) is None:
            raise UserNotFound()

        success, result = sms_provider.send_verification_code(phone)
        if not success:
            raise ValidationError(result)

        logger.info(f"登录验证码已签发: {phone}")
        return result

    def authenticate_user(self, phone, code):
        """验证码登录，成功后验证码失效"""
        phone = (phone or '').strip()
        if not phone:
            raise ValidationError('请填写: phone', field='phone')

        user = self.db_manager.get_user_by_phone(phone)
        if user is None:
            raise UserNotFound()

        if not code:
            raise InvalidOTP()
        success, message = sms_provider.verify_code(phone, code)
        if not success:
            logger.warning(f"手机号 {phone} 验证码校验失败: {message}")
            raise InvalidOTP(message)

        return user


def resolve_admin_password_hash(app_config):
    """管理员口令哈希：优先使用 ADMIN_PASSWORD_HASH，否则由 ADMIN_PASSWORD 生成"""
    if app_config.get('ADMIN_PASSWORD_HASH'):
        return app_config['ADMIN_PASSWORD_HASH']
    if app_config.get('ADMIN_PASSWORD'):
        return generate_password_hash(app_config['ADMIN_PASSWORD'])
    return None


def authenticate_admin(password, password_hash):
    if not password_hash:
        logger.error("未配置管理员口令，拒绝管理员登录")
        raise AuthenticationError('管理员登录未启用')
    if not verify_password(password or '', password_hash):
        raise AuthenticationError('管理员口令错误')
    return True


# 创建全局用户管理器实例
user_manager = UserManager()
