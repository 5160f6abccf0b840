#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
主理人创作大赛评选系统 - 辅助函数
"""

import os
import hashlib
import hmac
from datetime import datetime
import re

def parse_limit(value, default):
    """解析 limit 查询参数，非法时返回 None"""
    if value is None or value == '':
        return default
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return None
    return limit if limit >= 0 else None

def format_datetime(dt, format_str='%Y-%m-%d %H:%M:%S'):
    """格式化日期时间"""
    if not dt:
        return ''

    if isinstance(dt, str):
        try:
            dt = datetime.fromisoformat(dt)
        except ValueError:
            return dt

    return dt.strftime(format_str)

def validate_email(email):
    """验证邮箱格式"""
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return re.match(pattern, email) is not None

def validate_phone(phone):
    """验证手机号格式（可带 + 号的 7-15 位数字）"""
    if not phone:
        return False

    pattern = r'^\+?\d{7,15}$'
    return re.match(pattern, phone) is not None

def generate_password_hash(password, salt_length=16):
    """生成密码哈希

    返回 salt+hash 的十六进制字符串。
    """
    # 生成随机盐
    salt = os.urandom(salt_length)
    # 使用 PBKDF2 算法生成哈希
    password_hash = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, 100000)
    # 拼接盐和哈希后以十六进制字符串形式返回
    data = salt + password_hash
    return data.hex()


def verify_password(password, password_hash):
    """验证密码（password_hash 为 generate_password_hash 的输出）"""
    if not password or not password_hash:
        return False

    try:
        raw = bytes.fromhex(password_hash)
    except (TypeError, ValueError):
        return False

    # 原始数据至少应包含 16 字节盐 + 32 字节哈希
    if len(raw) < 16 + 32:
        return False

    salt = raw[:16]
    stored_hash = raw[16:]
    computed_hash = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, 100000)
    return hmac.compare_digest(computed_hash, stored_hash)
