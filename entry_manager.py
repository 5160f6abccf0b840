#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
主理人创作大赛评选系统 - 作品管理模块
"""

import logging
import uuid
from datetime import datetime

from config import Config
from database import DatabaseManager
from errors import EntryNotFound, InvalidStatus, ValidationError
from models import Entry, EntryCategory, EntryStatus
from scoring_engine import ScoringEngine

logger = logging.getLogger(__name__)


def _clean_text(value):
    return value.strip() if isinstance(value, str) else ''


class EntryManager:
    """作品管理器 - 提交、查询、审核"""

    def __init__(self, db_manager=None, engine=None):
        self.db_manager = db_manager or DatabaseManager()
        self.engine = engine or ScoringEngine(self.db_manager)

    def submit_entry(self, user_id, title, description, media_urls, category=None):
        """提交参赛作品，初始状态为待审核，分数全部为 0"""
        user_id = _clean_text(user_id)
        title = _clean_text(title)
        description = _clean_text(description)

        missing = [
            name for name, value in (('userId', user_id), ('title', title), ('description', description))
            if not value
        ]
        if not isinstance(media_urls, (list, tuple)) or not media_urls:
            missing.append('mediaUrls')
        if missing:
            raise ValidationError(f'请填写: {", ".join(missing)}', fields=missing)

        urls = [_clean_text(url) for url in media_urls]
        if not all(urls):
            raise ValidationError('媒体地址不能为空', field='mediaUrls')

        category = category or Config.CONTEST_CONFIG['default_category']
        try:
            category = EntryCategory(category)
        except ValueError:
            raise ValidationError(f'未知的作品分类: {category}', field='category')

        entry = Entry(
            entry_id=str(uuid.uuid4()),
            user_id=user_id,
            title=title,
            description=description,
            media_urls=urls,
            category=category,
            uploaded_at=datetime.now(),
            status=EntryStatus.PENDING,
        )
        self.db_manager.create_entry(entry)

        logger.info(f"作品已创建: {entry.entry_id}，主理人 {user_id}")
        return entry

    def get_entry_detail(self, entry_id):
        """作品详情（含主理人姓名、类型、邮箱）"""
        entry = self.db_manager.get_entry(entry_id)
        if entry is None:
            raise EntryNotFound()

        user = self.db_manager.get_user_by_id(entry.user_id)
        data = entry.to_dict()
        data['hostName'] = user.name if user else Config.CONTEST_CONFIG['unknown_host_name']
        data['hostType'] = user.host_type.value if user else Config.CONTEST_CONFIG['unknown_host_type']
        data['hostEmail'] = user.email if user else ''
        return data

    def get_user_entries(self, user_id):
        return [entry.to_dict() for entry in self.db_manager.get_entries_by_user(user_id)]

    def get_host_stats(self, user_id):
        """主理人看板统计：作品数、总票数、平均综合得分、最佳排名"""
        entries = self.db_manager.get_entries_by_user(user_id)
        total_votes = sum(entry.total_votes for entry in entries)
        average_score = (
            sum(entry.overall_score for entry in entries) / len(entries) if entries else 0
        )

        rank = None
        for position, ranked in enumerate(self.engine.list_approved(), start=1):
            if ranked['userId'] == user_id:
                rank = position
                break

        return {
            'totalEntries': len(entries),
            'totalVotes': total_votes,
            'averageScore': round(average_score, 1),
            'rank': rank,
        }

    def set_entry_status(self, entry_id, status):
        """管理员修改审核状态，任意状态之间可互相切换"""
        try:
            status = EntryStatus(status)
        except ValueError:
            raise InvalidStatus(f'作品状态无效: {status}')

        entry = self.db_manager.update_entry_status(entry_id, status)
        if entry is None:
            raise EntryNotFound()

        logger.info(f"作品 {entry_id} 状态更新为 {status.value}")
        return entry

    def get_status_stats(self):
        """按审核状态统计作品数量"""
        entries = self.db_manager.get_all_entries()
        stats = {'total': len(entries)}
        for status in EntryStatus:
            stats[status.value] = sum(1 for entry in entries if entry.status == status)
        return stats


# 创建全局作品管理器实例
entry_manager = EntryManager()
