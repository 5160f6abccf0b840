import logging

from models import Entry, EntryStatus

from .keys import (
    ENTRY_INDEX_PREFIX,
    ENTRY_SEQUENCE_KEY,
    entry_index_key,
    entry_key,
    user_entries_prefix,
    user_entry_index_key,
)


logger = logging.getLogger(__name__)


class EntryDbMixin:
    """参赛作品相关存储操作 mixin。

    作品列表不保存为整体数组，而是每个作品一条索引记录（全局一份、
    所属用户一份），读取时按前缀扫描并按上传时间排序，避免并发追加丢失。
    """

    # ==================== 作品相关操作 ====================

    def _next_entry_sequence(self):
        """原子地递增作品提交序号"""
        self.store.set_if_absent(ENTRY_SEQUENCE_KEY, {'value': 0})

        def increment(counter):
            counter['value'] += 1
            return counter

        return self.store.update(ENTRY_SEQUENCE_KEY, increment)['value']

    def create_entry(self, entry):
        data = entry.to_dict()
        index_record = {
            'id': entry.entry_id,
            'uploadedAt': data['uploadedAt'],
            'seq': self._next_entry_sequence(),
        }

        self.store.set(entry_key(entry.entry_id), data)
        self.store.set(entry_index_key(entry.entry_id), index_record)
        self.store.set(user_entry_index_key(entry.user_id, entry.entry_id), index_record)
        return entry

    def get_entry(self, entry_id):
        data = self.store.get(entry_key(entry_id))
        return Entry.from_dict(data) if data else None

    def _load_indexed_entries(self, prefix):
        index_records = self.store.get_by_prefix(prefix)
        # 按上传时间、提交序号升序（提交顺序），与存储后端的扫描顺序和作品 ID 无关
        index_records.sort(key=lambda r: (r.get('uploadedAt') or '', r.get('seq') or 0))

        entries = []
        for record in index_records:
            entry = self.get_entry(record['id'])
            if entry is None:
                logger.warning(f"作品索引 {record['id']} 对应的作品记录不存在，已跳过")
                continue
            entries.append(entry)
        return entries

    def get_all_entries(self):
        """获取全部作品（按提交顺序）"""
        return self._load_indexed_entries(ENTRY_INDEX_PREFIX)

    def get_entries_by_user(self, user_id):
        """获取某个主理人的全部作品（按提交顺序）"""
        return self._load_indexed_entries(user_entries_prefix(user_id))

    def update_entry(self, entry_id, apply):
        """原子地修改作品

        apply 接收 Entry 对象并就地修改；作品不存在时返回 None。
        """
        def mutator(data):
            entry = Entry.from_dict(data)
            apply(entry)
            return entry.to_dict()

        updated = self.store.update(entry_key(entry_id), mutator)
        return Entry.from_dict(updated) if updated else None

    def update_entry_status(self, entry_id, status):
        """只修改审核状态，评分字段保持不变"""
        status = status if isinstance(status, EntryStatus) else EntryStatus(status)

        def apply(entry):
            entry.status = status

        return self.update_entry(entry_id, apply)
