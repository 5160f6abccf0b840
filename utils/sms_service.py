#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
验证码服务模块 - 登录验证码的生成、存储与校验

验证码优先存入 Redis（配置了 REDIS_URL 时），否则保存在进程内存中。
目前只提供演示发送方式：验证码写入日志，不真正发送短信。
"""

import random
import string
import logging
from datetime import datetime, timedelta
import os
import json

from config import Config

logger = logging.getLogger(__name__)


def _get_redis_client():
    redis_url = os.getenv('REDIS_URL')
    if not redis_url:
        return None
    try:
        import redis
        return redis.from_url(redis_url, decode_responses=True)
    except Exception as e:
        logger.warning(f"Redis client init failed, fallback to memory: {e}")
        return None


class SMSService:
    """验证码服务基类"""

    # 验证码存储（未配置 Redis 时使用）
    verification_codes = {}

    redis_client = _get_redis_client()

    @staticmethod
    def _redis_key(phone: str) -> str:
        return f"otp_verification:{phone}"

    @staticmethod
    def _get_record(phone):
        if SMSService.redis_client is not None:
            try:
                raw = SMSService.redis_client.get(SMSService._redis_key(phone))
                if not raw:
                    return None
                return json.loads(raw)
            except Exception as e:
                logger.warning(f"Redis get failed, fallback to memory: {e}")

        record = SMSService.verification_codes.get(phone)
        if record and SMSService._is_expired(record):
            SMSService.verification_codes.pop(phone, None)
            return None
        return record

    @staticmethod
    def _set_record(phone, record, expire_seconds: int):
        if SMSService.redis_client is not None:
            try:
                SMSService.redis_client.setex(
                    SMSService._redis_key(phone),
                    expire_seconds,
                    json.dumps(record, ensure_ascii=False),
                )
                return
            except Exception as e:
                logger.warning(f"Redis set failed, fallback to memory: {e}")

        SMSService.verification_codes[phone] = record

    @staticmethod
    def _del_record(phone):
        if SMSService.redis_client is not None:
            try:
                SMSService.redis_client.delete(SMSService._redis_key(phone))
                return
            except Exception as e:
                logger.warning(f"Redis delete failed, fallback to memory: {e}")

        SMSService.verification_codes.pop(phone, None)

    @staticmethod
    def _is_expired(record):
        expire_raw = record.get('expire_time')
        if not expire_raw:
            return False
        try:
            return datetime.now() >= datetime.fromisoformat(expire_raw)
        except ValueError:
            return True

    @staticmethod
    def generate_code(length=None):
        """生成随机验证码"""
        return ''.join(random.choices(string.digits, k=length or Config.OTP_LENGTH))

    @staticmethod
    def store_code(phone, code, expire_minutes=None):
        """
        存储验证码
        注意：每次存储会覆盖该手机号的旧验证码，确保只有最新验证码有效
        """
        expire_minutes = expire_minutes or Config.OTP_EXPIRE_MINUTES
        send_time = datetime.now()
        expire_time = send_time + timedelta(minutes=expire_minutes)

        record = {
            'code': code,
            'send_time': send_time.isoformat(),
            'expire_time': expire_time.isoformat(),
        }

        SMSService._set_record(phone, record, expire_seconds=int(expire_minutes * 60))
        logger.info(f"验证码已存储 - 手机: {phone}, 过期时间: {expire_time}")

    @staticmethod
    def check_code(phone, code):
        """
        检查验证码是否正确（不删除验证码）
        返回: (是否成功, 错误消息)
        """
        stored = SMSService._get_record(phone)
        if not stored:
            return False, '验证码不存在或已过期'

        if stored.get('code') != str(code or '').strip():
            return False, '验证码错误'

        return True, '验证成功'

    @staticmethod
    def verify_code(phone, code):
        """
        验证验证码并删除
        返回: (是否成功, 错误消息)
        """
        success, message = SMSService.check_code(phone, code)

        if success:
            SMSService._del_record(phone)

        return success, message

    @staticmethod
    def can_resend(phone, interval_seconds=None):
        """
        检查是否可以重新发送，防止频繁发送
        """
        interval_seconds = Config.OTP_RESEND_INTERVAL if interval_seconds is None else interval_seconds
        stored = SMSService._get_record(phone)
        if not stored:
            return True, None

        send_time_raw = stored.get('send_time')
        try:
            send_time = datetime.fromisoformat(send_time_raw) if send_time_raw else None
        except ValueError:
            send_time = None

        if not send_time:
            return True, None

        elapsed = (datetime.now() - send_time).total_seconds()

        if elapsed < interval_seconds:
            remaining = int(interval_seconds - elapsed)
            return False, f'请在{remaining}秒后再试'

        return True, None


class DemoSMSProvider(SMSService):
    """
    演示用验证码发送方式（开发测试用）
    不实际发送短信，只写入日志
    """

    @staticmethod
    def send_verification_code(phone):
        """发送验证码（演示模式），返回 (是否成功, 验证码或错误消息)"""
        can_send, error_msg = SMSService.can_resend(phone)
        if not can_send:
            return False, error_msg

        code = SMSService.generate_code()
        SMSService.store_code(phone, code)

        logger.info(f"【演示模式】发送验证码到 {phone}: {code}")
        return True, code


def get_sms_provider():
    """
    获取验证码发送方式

    真实短信通道尚未接入，未知的 SMS_PROVIDER 一律回退到演示模式。
    """
    provider_type = Config.SMS_PROVIDER

    if provider_type != 'demo':
        logger.warning(f"短信服务商 {provider_type} 未接入，使用演示模式")
    return DemoSMSProvider()


# 创建全局验证码服务实例
sms_provider = get_sms_provider()
