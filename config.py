#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
主理人创作大赛评选系统 - 配置文件
"""

import os
from datetime import timedelta
from dotenv import load_dotenv

# 加载环境变量
load_dotenv()

class Config:
    """应用配置类"""

    # Flask 基础配置
    SECRET_KEY = os.environ.get('SECRET_KEY')

    # 存储后端: memory / mysql / redis
    STORE_BACKEND = (os.environ.get('STORE_BACKEND') or 'memory').lower()

    # MySQL 配置（STORE_BACKEND=mysql 时使用）
    DB_HOST = os.environ.get('DB_HOST') or 'localhost'
    DB_PORT = int(os.environ.get('DB_PORT') or 3306)
    DB_USER = os.environ.get('DB_USER') or 'contest'
    DB_PASSWORD = os.environ.get('DB_PASSWORD') or ''
    DB_NAME = os.environ.get('DB_NAME') or 'host_contest'
    # 数据库连接池配置
    DB_POOL_NAME = os.environ.get('DB_POOL_NAME') or 'contest_pool'
    DB_POOL_SIZE = int(os.environ.get('DB_POOL_SIZE') or 5)
    SLOW_QUERY_THRESHOLD_MS = int(os.environ.get('SLOW_QUERY_THRESHOLD_MS') or 50)

    # Redis 配置（STORE_BACKEND=redis 时存储记录；验证码在配置了 REDIS_URL 时也使用）
    REDIS_URL = os.environ.get('REDIS_URL')
    REDIS_KEY_PREFIX = os.environ.get('REDIS_KEY_PREFIX') or 'contest:'
    REDIS_UPDATE_MAX_RETRIES = int(os.environ.get('REDIS_UPDATE_MAX_RETRIES') or 20)

    # 服务器配置
    HOST = os.environ.get('HOST') or '0.0.0.0'
    PORT = int(os.environ.get('PORT') or 5000)
    DEBUG = os.environ.get('DEBUG', 'False').lower() == 'true'

    # Session 配置
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_SECURE = False  # 生产环境应设为 True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # 管理员口令（优先使用哈希）
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')
    ADMIN_PASSWORD_HASH = os.environ.get('ADMIN_PASSWORD_HASH')

    # 验证码配置
    SMS_PROVIDER = (os.environ.get('SMS_PROVIDER') or 'demo').lower()
    OTP_LENGTH = int(os.environ.get('OTP_LENGTH') or 4)
    OTP_EXPIRE_MINUTES = int(os.environ.get('OTP_EXPIRE_MINUTES') or 5)
    OTP_RESEND_INTERVAL = int(os.environ.get('OTP_RESEND_INTERVAL') or 30)

    # 日志配置
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_FILE = os.environ.get('LOG_FILE')

    # 系统配置
    SYSTEM_NAME = '主理人创作大赛评选系统'
    SYSTEM_VERSION = '1.0.0'

    # 大赛配置
    CONTEST_CONFIG = {
        'score_min': 0,                 # 评委打分下限
        'score_max': 100,               # 评委打分上限
        'default_category': 'general',  # 作品默认分类
        'leaderboard_limit': 50,        # 排行榜默认条数
        'unknown_host_name': 'Unknown',
        'unknown_host_type': 'travel',
    }

    @staticmethod
    def init_app(app):
        """初始化应用配置"""
        # 设置日志
        import logging
        handlers = [logging.StreamHandler()]
        log_file = app.config.get('LOG_FILE')
        if log_file:
            handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
        logging.basicConfig(
            level=getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=handlers
        )

class DevelopmentConfig(Config):
    """开发环境配置"""
    DEBUG = True
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'host-contest-dev-secret-key'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'

class ProductionConfig(Config):
    """生产环境配置"""
    DEBUG = False
    SESSION_COOKIE_SECURE = True
    SECRET_KEY = os.environ.get('SECRET_KEY')

class TestingConfig(Config):
    """测试环境配置"""
    TESTING = True
    DEBUG = False
    SECRET_KEY = 'host-contest-test-secret-key'
    ADMIN_PASSWORD = 'admin123'
    ADMIN_PASSWORD_HASH = None
    LOG_FILE = None

# 配置映射
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
