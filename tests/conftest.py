import os

# 测试固定使用内存存储，验证码不走 Redis
os.environ['STORE_BACKEND'] = 'memory'
os.environ.pop('REDIS_URL', None)

import pytest

from app import create_app
from database import DatabaseManager, MemoryRecordStore, get_record_store
from entry_manager import EntryManager
from models import EntryStatus
from scoring_engine import ScoringEngine
from user_manager import UserManager
from utils.sms_service import SMSService


@pytest.fixture(autouse=True)
def clean_state():
    get_record_store().clear()
    SMSService.redis_client = None
    SMSService.verification_codes.clear()
    yield
    get_record_store().clear()
    SMSService.verification_codes.clear()


@pytest.fixture
def app():
    return create_app('testing')


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    resp = client.post('/api/admin/login', json={'password': 'admin123'})
    assert resp.status_code == 200
    return client


@pytest.fixture
def db_manager():
    return DatabaseManager(store=MemoryRecordStore())


@pytest.fixture
def engine(db_manager):
    return ScoringEngine(db_manager)


@pytest.fixture
def entries(db_manager, engine):
    return EntryManager(db_manager, engine)


@pytest.fixture
def users(db_manager):
    return UserManager(db_manager)


@pytest.fixture
def make_entry(entries):
    """提交一个作品，approved=True 时直接审核通过"""
    def _make(title='作品', user_id='host-1', category=None, approved=True):
        entry = entries.submit_entry(
            user_id=user_id,
            title=title,
            description=f'{title} 的介绍',
            media_urls=[f'https://cdn.example.com/{title}.jpg'],
            category=category,
        )
        if approved:
            entries.set_entry_status(entry.entry_id, EntryStatus.APPROVED.value)
        return entry
    return _make
