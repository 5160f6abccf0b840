import logging

from models import JuryScore

from .keys import jury_score_key, jury_scores_prefix


logger = logging.getLogger(__name__)


class JuryScoreDbMixin:
    """评委评分存储操作 mixin。

    每个 (作品, 评委) 只有一条评分记录，重复提交直接覆盖。
    """

    # ==================== 评分相关操作 ====================

    def save_jury_score(self, jury_score):
        """创建或覆盖评委评分"""
        key = jury_score_key(jury_score.entry_id, jury_score.jury_id)
        previous = self.store.get(key)
        self.store.set(key, jury_score.to_dict())
        if previous is not None:
            logger.info(
                f"评委 {jury_score.jury_id} 修改作品 {jury_score.entry_id} 的评分: "
                f"{previous.get('score')} -> {jury_score.score}"
            )
        return jury_score

    def get_jury_score(self, entry_id, jury_id):
        data = self.store.get(jury_score_key(entry_id, jury_id))
        return JuryScore.from_dict(data) if data else None

    def get_jury_scores_by_entry(self, entry_id):
        """获取作品当前的全部评委评分（每位评委一条）"""
        return [JuryScore.from_dict(data) for data in self.store.get_by_prefix(jury_scores_prefix(entry_id))]
