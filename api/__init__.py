#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
主理人创作大赛评选系统 - API接口模块
"""

from .account.auth import auth_bp
from .entries import entries_bp
from .voting import voting_bp
from .jury import jury_bp
from .leaderboard import leaderboard_bp
from .admin import admin_bp
from .maintenance import maintenance_bp

__version__ = '1.0.0'

# 导出所有蓝图
__all__ = [
    'auth_bp',
    'entries_bp',
    'voting_bp',
    'jury_bp',
    'leaderboard_bp',
    'admin_bp',
    'maintenance_bp',
]
