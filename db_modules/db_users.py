import logging

from models import User

from .keys import user_id_key, user_phone_key


logger = logging.getLogger(__name__)


class UserDbMixin:
    """主理人相关存储操作 mixin。

    依赖宿主类提供:
    - self.store: 记录存储
    """

    # ==================== 用户相关操作 ====================

    def create_user(self, user):
        """创建用户

        先以手机号占位（手机号唯一），成功后再写入按 ID 索引的记录。
        手机号已存在时返回 False。
        """
        data = user.to_dict()
        if not self.store.set_if_absent(user_phone_key(user.phone), data):
            return False
        self.store.set(user_id_key(user.user_id), data)
        return True

    def get_user_by_phone(self, phone):
        data = self.store.get(user_phone_key(phone))
        return User.from_dict(data) if data else None

    def get_user_by_id(self, user_id):
        data = self.store.get(user_id_key(user_id))
        return User.from_dict(data) if data else None
