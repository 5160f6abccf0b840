#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
主理人创作大赛评选系统 - 数据模型定义
"""

from datetime import datetime
from enum import Enum

class HostType(Enum):
    """主理人类型枚举"""
    DIGITAL_DETOX = 'digital-detox'                          # 数字排毒与正念
    HEALTHCARE_WELLNESS = 'healthcare-wellness'              # 健康与疗愈
    EXPERIENCES_ENTERTAINMENT = 'experiences-entertainment'  # 体验与现场娱乐
    CULTURE_CRAFT = 'culture-craft'                          # 文化与手作
    ADVENTURE_EXPLORATION = 'adventure-exploration'          # 探险与探索
    STAY_HOSPITALITY = 'stay-hospitality'                    # 住宿与款待
    CULINARY_GASTRONOMY = 'culinary-gastronomy'              # 美食
    PHOTOGRAPHY = 'photography'                              # 摄影
    TRAVEL = 'travel'                                        # 旅行
    SERVICE = 'service'                                      # 服务

class EntryCategory(Enum):
    """作品分类枚举"""
    GENERAL = 'general'                                      # 综合（默认）
    DIGITAL_DETOX = 'digital-detox'
    HEALTHCARE_WELLNESS = 'healthcare-wellness'
    EXPERIENCES_ENTERTAINMENT = 'experiences-entertainment'
    CULTURE_CRAFT = 'culture-craft'
    ADVENTURE_EXPLORATION = 'adventure-exploration'
    STAY_HOSPITALITY = 'stay-hospitality'
    CULINARY_GASTRONOMY = 'culinary-gastronomy'
    PHOTOGRAPHY = 'photography'

class EntryStatus(Enum):
    """作品审核状态枚举"""
    PENDING = 'pending'          # 待审核
    APPROVED = 'approved'        # 已通过
    REJECTED = 'rejected'        # 已驳回


def _isoformat(value):
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _parse_time(value):
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


class User:
    """主理人模型"""
    def __init__(self, user_id=None, phone=None, name=None, email='',
                 host_type=HostType.TRAVEL, kyc_verified=False,
                 created_at=None, profile_complete=False):
        self.user_id = user_id
        self.phone = phone
        self.name = name
        self.email = email or ''
        self.host_type = host_type if isinstance(host_type, HostType) else HostType(host_type)
        self.kyc_verified = kyc_verified
        self.created_at = _parse_time(created_at) or datetime.now()
        self.profile_complete = profile_complete

    def to_dict(self):
        """转换为字典"""
        return {
            'id': self.user_id,
            'phone': self.phone,
            'name': self.name,
            'email': self.email,
            'hostType': self.host_type.value,
            'kycVerified': self.kyc_verified,
            'createdAt': _isoformat(self.created_at),
            'profileComplete': self.profile_complete,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            user_id=data.get('id'),
            phone=data.get('phone'),
            name=data.get('name'),
            email=data.get('email', ''),
            host_type=data.get('hostType', HostType.TRAVEL.value),
            kyc_verified=data.get('kycVerified', False),
            created_at=data.get('createdAt'),
            profile_complete=data.get('profileComplete', False),
        )

class Entry:
    """参赛作品模型

    total_votes / jury_score / overall_score 是投票与评委打分的物化结果，
    只由评分引擎写入。
    """
    def __init__(self, entry_id=None, user_id=None, title=None, description=None,
                 media_urls=None, category=EntryCategory.GENERAL, uploaded_at=None,
                 status=EntryStatus.PENDING, total_votes=0, jury_score=0.0,
                 overall_score=0.0):
        self.entry_id = entry_id
        self.user_id = user_id
        self.title = title
        self.description = description
        self.media_urls = list(media_urls or [])
        self.category = category if isinstance(category, EntryCategory) else EntryCategory(category)
        self.uploaded_at = _parse_time(uploaded_at) or datetime.now()
        self.status = status if isinstance(status, EntryStatus) else EntryStatus(status)
        self.total_votes = int(total_votes or 0)
        self.jury_score = jury_score or 0
        self.overall_score = overall_score or 0

    def to_dict(self):
        """转换为字典"""
        return {
            'id': self.entry_id,
            'userId': self.user_id,
            'title': self.title,
            'description': self.description,
            'mediaUrls': list(self.media_urls),
            'category': self.category.value,
            'uploadedAt': _isoformat(self.uploaded_at),
            'status': self.status.value,
            'totalVotes': self.total_votes,
            'juryScore': self.jury_score,
            'overallScore': self.overall_score,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            entry_id=data.get('id'),
            user_id=data.get('userId'),
            title=data.get('title'),
            description=data.get('description'),
            media_urls=data.get('mediaUrls'),
            category=data.get('category', EntryCategory.GENERAL.value),
            uploaded_at=data.get('uploadedAt'),
            status=data.get('status', EntryStatus.PENDING.value),
            total_votes=data.get('totalVotes', 0),
            jury_score=data.get('juryScore', 0),
            overall_score=data.get('overallScore', 0),
        )

class Vote:
    """公众投票模型，(entry_id, voter_id) 唯一"""
    def __init__(self, entry_id=None, voter_id=None, voted_at=None):
        self.entry_id = entry_id
        self.voter_id = voter_id
        self.voted_at = _parse_time(voted_at) or datetime.now()

    def to_dict(self):
        return {
            'entryId': self.entry_id,
            'voterId': self.voter_id,
            'votedAt': _isoformat(self.voted_at),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            entry_id=data.get('entryId'),
            voter_id=data.get('voterId'),
            voted_at=data.get('votedAt'),
        )

class JuryScore:
    """评委评分模型，(entry_id, jury_id) 唯一，重复提交覆盖旧分"""
    def __init__(self, entry_id=None, jury_id=None, score=0, feedback='', scored_at=None):
        self.entry_id = entry_id
        self.jury_id = jury_id
        self.score = score
        self.feedback = feedback or ''
        self.scored_at = _parse_time(scored_at) or datetime.now()

    def to_dict(self):
        return {
            'entryId': self.entry_id,
            'juryId': self.jury_id,
            'score': self.score,
            'feedback': self.feedback,
            'scoredAt': _isoformat(self.scored_at),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            entry_id=data.get('entryId'),
            jury_id=data.get('juryId'),
            score=data.get('score', 0),
            feedback=data.get('feedback', ''),
            scored_at=data.get('scoredAt'),
        )

# 键值存储表结构定义（MySQL 后端）
KV_STORE_SCHEMA = {
    'kv_store': '''
        CREATE TABLE IF NOT EXISTS kv_store (
            id BIGINT AUTO_INCREMENT PRIMARY KEY,
            store_key VARCHAR(255) NOT NULL,
            store_value LONGTEXT NOT NULL COMMENT 'JSON 序列化的记录',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP,
            UNIQUE KEY uniq_store_key (store_key)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_bin COMMENT='键值记录表（用户、作品、投票、评委评分）';
    ''',
}
