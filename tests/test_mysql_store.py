import re

import pytest
from mysql.connector.errors import PoolError

import database
from database import DatabaseManager, MySQLRecordStore
from entry_manager import EntryManager
from scoring_engine import ScoringEngine


class FakeTable:
    """kv_store 表的内存替身，只实现存储层用到的语句"""

    def __init__(self):
        self.rows = {}
        self.like_patterns = []


class FakeCursor:
    def __init__(self, table):
        self.table = table
        self.rowcount = 0
        self._result = []

    def execute(self, operation, params=None):
        sql = ' '.join(operation.split())
        rows = self.table.rows
        self._result = []
        self.rowcount = 0

        if sql.startswith('SELECT store_value FROM kv_store WHERE store_key = %s'):
            if params[0] in rows:
                self._result = [(rows[params[0]],)]
        elif sql.startswith('SELECT store_value FROM kv_store WHERE store_key LIKE %s'):
            self.table.like_patterns.append(params[0])
            prefix = re.sub(r'\\(.)', r'\1', params[0][:-1])
            self._result = [(value,) for key, value in rows.items() if key.startswith(prefix)]
        elif sql.startswith('INSERT IGNORE INTO kv_store'):
            if params[0] not in rows:
                rows[params[0]] = params[1]
                self.rowcount = 1
        elif sql.startswith('INSERT INTO kv_store'):
            rows[params[0]] = params[1]
            self.rowcount = 1
        elif sql.startswith('UPDATE kv_store SET store_value = %s WHERE store_key = %s'):
            rows[params[1]] = params[0]
            self.rowcount = 1
        elif sql == 'SELECT 1':
            self._result = [(1,)]
        else:
            raise AssertionError(f'unexpected SQL: {sql}')

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)


class FakeConnection:
    def __init__(self, pool):
        self.pool = pool
        self.rollbacks = 0

    def cursor(self, buffered=False):
        return FakeCursor(self.pool.table)

    def commit(self):
        pass

    def rollback(self):
        self.rollbacks += 1

    def is_connected(self):
        return True

    def close(self):
        self.pool.in_use -= 1


class FakePool:
    """与 mysql-connector 的连接池一样，连接用完时直接抛 PoolError"""

    def __init__(self, size):
        self.size = size
        self.table = FakeTable()
        self.in_use = 0
        self.max_in_use = 0

    def get_connection(self):
        if self.in_use >= self.size:
            raise PoolError('Failed getting connection; pool exhausted')
        self.in_use += 1
        self.max_in_use = max(self.max_in_use, self.in_use)
        return FakeConnection(self)


@pytest.fixture
def pool(monkeypatch):
    pool = FakePool(size=1)
    monkeypatch.setattr(database, '_get_connection_pool', lambda config: pool)
    return pool


@pytest.fixture
def mysql_store(pool):
    return MySQLRecordStore()


def test_basic_operations(mysql_store, pool):
    mysql_store.set('entry:1', {'id': '1'})
    assert mysql_store.get('entry:1') == {'id': '1'}
    assert mysql_store.get('entry:2') is None

    assert mysql_store.set_if_absent('vote:1:v', {'n': 1}) is True
    assert mysql_store.set_if_absent('vote:1:v', {'n': 2}) is False
    assert mysql_store.ping() is True
    assert pool.in_use == 0


def test_prefix_scan_escapes_like_wildcards(mysql_store, pool):
    mysql_store.set('jury:a_b:j1', {'score': 1})
    mysql_store.set('jury:aXb:j1', {'score': 2})

    assert mysql_store.get_by_prefix('jury:a_b:') == [{'score': 1}]
    assert pool.table.like_patterns[-1] == 'jury:a\\_b:%'


def test_reads_inside_update_reuse_transaction_connection(mysql_store, pool):
    mysql_store.set('counter', {'n': 0})
    mysql_store.set('jury:e:j1', {'score': 80})
    mysql_store.set('jury:e:j2', {'score': 100})

    def mutator(value):
        scores = mysql_store.get_by_prefix('jury:e:')
        value['n'] = sum(s['score'] for s in scores) / len(scores)
        return value

    assert mysql_store.update('counter', mutator) == {'n': 90}
    assert pool.max_in_use == 1
    assert pool.in_use == 0


def test_update_error_rolls_back_and_releases(mysql_store, pool):
    mysql_store.set('counter', {'n': 1})

    def boom(value):
        raise RuntimeError('boom')

    with pytest.raises(RuntimeError):
        mysql_store.update('counter', boom)

    assert pool.in_use == 0
    # 事务结束后，读操作重新从连接池取连接
    assert mysql_store.get('counter') == {'n': 1}
    assert mysql_store.update('missing', lambda v: v) is None


def test_jury_scoring_with_single_connection_pool(mysql_store, pool):
    db_manager = DatabaseManager(store=mysql_store)
    engine = ScoringEngine(db_manager)
    entry = EntryManager(db_manager, engine).submit_entry(
        'host-1', '山野徒步', '三天两晚', ['https://cdn.example.com/1.jpg'],
    )

    engine.record_jury_score(entry.entry_id, 'jury-1', 80)
    updated = engine.record_jury_score(entry.entry_id, 'jury-2', 100)

    assert updated.jury_score == pytest.approx(90)
    assert updated.overall_score == pytest.approx(54.0)
    assert pool.max_in_use == 1
    assert pool.in_use == 0
