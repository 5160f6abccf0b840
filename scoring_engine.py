#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
主理人创作大赛评选系统 - 评分引擎

维护每个作品的票数、评委均分和综合得分，并给出排行榜顺序。

综合得分 = 评委均分 * 0.6 + 票数 * 0.4
票数未做归一化，直接与 0-100 的评委均分相加；票数较多时综合得分会超过 100。
"""

import logging
import math
from datetime import datetime

from config import Config
from database import DatabaseManager
from errors import EntryNotFound, DuplicateVote, InvalidScore, InvalidStatus, ValidationError
from models import EntryCategory, EntryStatus, JuryScore, Vote

logger = logging.getLogger(__name__)

JURY_WEIGHT = 0.6
PUBLIC_WEIGHT = 0.4

LEADERBOARD_FIELDS = (
    'id', 'title', 'hostName', 'hostType', 'category',
    'totalVotes', 'juryScore', 'overallScore', 'mediaUrls',
)


def calculate_overall_score(jury_score, total_votes):
    """计算综合得分"""
    return jury_score * JURY_WEIGHT + total_votes * PUBLIC_WEIGHT


def calculate_jury_average(scores):
    """计算评委均分，没有评分时为 0"""
    if not scores:
        return 0
    return sum(scores) / len(scores)


def _require_id(value, field_name):
    if value is None or not str(value).strip():
        raise ValidationError(f'缺少必填字段: {field_name}', field=field_name)
    return str(value).strip()


def _coerce_score(score):
    score_min = Config.CONTEST_CONFIG['score_min']
    score_max = Config.CONTEST_CONFIG['score_max']

    if isinstance(score, bool) or score is None:
        raise InvalidScore()
    if not isinstance(score, (int, float)):
        try:
            score = float(str(score).strip())
        except ValueError:
            raise InvalidScore('分数格式不正确')
    if isinstance(score, float) and math.isnan(score):
        raise InvalidScore('分数格式不正确')
    if not (score_min <= score <= score_max):
        raise InvalidScore(f'分数必须在{score_min}-{score_max}之间')
    return score


def _coerce_category(category):
    if category is None or isinstance(category, EntryCategory):
        return category
    try:
        return EntryCategory(category)
    except ValueError:
        raise ValidationError(f'未知的作品分类: {category}', field='category')


class ScoringEngine:
    """评分引擎 - 投票、评委打分与排行"""

    def __init__(self, db_manager=None):
        self.db_manager = db_manager or DatabaseManager()

    @staticmethod
    def _refresh_overall_score(entry):
        entry.overall_score = calculate_overall_score(entry.jury_score, entry.total_votes)
        return entry

    def record_vote(self, entry_id, voter_id):
        """记录一次公众投票，返回作品最新票数

        投票记录先于作品计数写入；作品不存在时投票记录保留，抛出 EntryNotFound。
        """
        entry_id = _require_id(entry_id, 'entryId')
        voter_id = _require_id(voter_id, 'voterId')

        vote = Vote(entry_id=entry_id, voter_id=voter_id, voted_at=datetime.now())
        if not self.db_manager.create_vote(vote):
            logger.warning(f"投票人 {voter_id} 重复为作品 {entry_id} 投票，已拒绝")
            raise DuplicateVote()

        def apply(entry):
            entry.total_votes += 1
            self._refresh_overall_score(entry)

        updated = self.db_manager.update_entry(entry_id, apply)
        if updated is None:
            logger.warning(f"投票人 {voter_id} 的投票已记录，但作品 {entry_id} 不存在")
            raise EntryNotFound()

        logger.info(f"投票成功: {voter_id} -> {entry_id}, 当前票数 {updated.total_votes}")
        return updated.total_votes

    def record_jury_score(self, entry_id, jury_id, score, feedback=None):
        """记录评委评分（同一评委重复提交覆盖旧分），并重算评委均分与综合得分"""
        entry_id = _require_id(entry_id, 'entryId')
        jury_id = _require_id(jury_id, 'juryId')
        score = _coerce_score(score)
        if feedback is not None and not isinstance(feedback, str):
            raise ValidationError('评语必须是文本', field='feedback')

        self.db_manager.save_jury_score(JuryScore(
            entry_id=entry_id,
            jury_id=jury_id,
            score=score,
            feedback=(feedback or '').strip(),
            scored_at=datetime.now(),
        ))

        def apply(entry):
            scores = self.db_manager.get_jury_scores_by_entry(entry_id)
            entry.jury_score = calculate_jury_average([s.score for s in scores])
            self._refresh_overall_score(entry)

        updated = self.db_manager.update_entry(entry_id, apply)
        if updated is None:
            logger.warning(f"评委 {jury_id} 的评分已记录，但作品 {entry_id} 不存在，未更新作品得分")
            return None

        logger.info(
            f"评委 {jury_id} 为作品 {entry_id} 打分 {score}, "
            f"评委均分 {updated.jury_score}, 综合得分 {updated.overall_score}"
        )
        return updated

    def _with_host_info(self, entries):
        """为作品附加主理人姓名和类型"""
        defaults = Config.CONTEST_CONFIG
        users = {}
        results = []
        for entry in entries:
            if entry.user_id not in users:
                users[entry.user_id] = self.db_manager.get_user_by_id(entry.user_id)
            user = users[entry.user_id]

            data = entry.to_dict()
            data['hostName'] = user.name if user else defaults['unknown_host_name']
            data['hostType'] = user.host_type.value if user else defaults['unknown_host_type']
            results.append(data)
        return results

    def list_approved(self, category=None):
        """已通过审核的作品，按综合得分降序

        分类精确匹配；得分相同的作品保持提交顺序。
        """
        category = _coerce_category(category)
        entries = [
            entry for entry in self.db_manager.get_all_entries()
            if entry.status == EntryStatus.APPROVED
            and (category is None or entry.category == category)
        ]
        results = self._with_host_info(entries)
        results.sort(key=lambda e: e['overallScore'], reverse=True)
        return results

    def list_for_admin(self, status=None):
        """全部作品（可按状态筛选），按上传时间倒序"""
        if status is not None and not isinstance(status, EntryStatus):
            try:
                status = EntryStatus(status)
            except ValueError:
                raise InvalidStatus(f'作品状态无效: {status}')

        # 先倒转提交顺序，上传时间相同的作品也是后提交的在前
        entries = [
            entry for entry in reversed(self.db_manager.get_all_entries())
            if status is None or entry.status == status
        ]
        entries.sort(key=lambda e: e.uploaded_at, reverse=True)
        return self._with_host_info(entries)

    def leaderboard(self, category=None, limit=None):
        """排行榜，返回 (前 limit 名, 符合条件的作品总数)"""
        if limit is None:
            limit = Config.CONTEST_CONFIG['leaderboard_limit']
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise ValidationError('limit 必须是非负整数', field='limit')

        ranked = self.list_approved(category)
        board = [{field: entry.get(field) for field in LEADERBOARD_FIELDS} for entry in ranked[:limit]]
        return board, len(ranked)


# 创建全局评分引擎实例
scoring_engine = ScoringEngine()
