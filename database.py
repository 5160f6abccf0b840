#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
主理人创作大赛评选系统 - 记录存储与数据库管理器

所有业务记录都保存在一个键值存储中（get / set / 前缀扫描）。
提供内存、MySQL、Redis 三种后端，通过 STORE_BACKEND 选择。
"""

import copy
import json
import logging
import re
import threading
import time
from contextlib import contextmanager

import mysql.connector
from mysql.connector import Error, pooling

from config import Config
from errors import ConcurrentUpdate
from models import KV_STORE_SCHEMA
from db_modules.db_users import UserDbMixin
from db_modules.db_entries import EntryDbMixin
from db_modules.db_votes import VoteDbMixin
from db_modules.db_scores import JuryScoreDbMixin

logger = logging.getLogger(__name__)


def _dumps(value):
    return json.dumps(value, ensure_ascii=False)


class MemoryRecordStore:
    """进程内存储（开发与测试用）

    值以 JSON 字符串保存，读出的对象与存储互不影响。
    """

    backend = 'memory'

    def __init__(self):
        self._data = {}
        self._lock = threading.RLock()

    def get(self, key):
        with self._lock:
            raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key, value):
        raw = _dumps(value)
        with self._lock:
            self._data[key] = raw

    def set_if_absent(self, key, value):
        """键不存在时写入，返回是否写入成功"""
        raw = _dumps(value)
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = raw
            return True

    def get_by_prefix(self, prefix):
        with self._lock:
            raws = [raw for key, raw in self._data.items() if key.startswith(prefix)]
        return [json.loads(raw) for raw in raws]

    def update(self, key, mutator):
        """原子地读取-修改-写回，键不存在时返回 None"""
        with self._lock:
            raw = self._data.get(key)
            if raw is None:
                return None
            value = mutator(json.loads(raw))
            self._data[key] = _dumps(value)
            return copy.deepcopy(value)

    def clear(self):
        with self._lock:
            self._data.clear()

    def ping(self):
        return True


class TimedCursorWrapper:
    def __init__(self, cursor, slow_threshold_ms=50):
        self._cursor = cursor
        self._slow_threshold_ms = slow_threshold_ms

    def execute(self, operation, params=None, **kwargs):
        start = time.perf_counter()
        try:
            return self._cursor.execute(operation, params, **kwargs)
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            if duration_ms >= self._slow_threshold_ms:
                logger.warning(
                    "Slow query took %.1f ms: %s; params=%s",
                    duration_ms,
                    operation,
                    params,
                )

    def __getattr__(self, item):
        return getattr(self._cursor, item)


_connection_pool = None

def _get_connection_pool(config):
    """获取全局数据库连接池"""
    global _connection_pool
    if _connection_pool is None:
        try:
            pool_config = config.copy()
            # 移除连接池配置参数，避免传递给连接池构造函数
            pool_size = pool_config.pop('pool_size', 5)
            pool_name = pool_config.pop('pool_name', Config.DB_POOL_NAME)

            _connection_pool = pooling.MySQLConnectionPool(
                pool_name=pool_name,
                pool_size=pool_size,
                **pool_config
            )
            logger.info(f"数据库连接池创建成功，池大小: {pool_size}")
        except Error as e:
            logger.error(f"创建数据库连接池失败，将回退到直连模式: {e}")
            _connection_pool = None
    return _connection_pool


class MySQLRecordStore:
    """基于 MySQL kv_store 表的记录存储"""

    backend = 'mysql'

    def __init__(self):
        self.config = {
            'host': Config.DB_HOST,
            'port': Config.DB_PORT,
            'user': Config.DB_USER,
            'password': Config.DB_PASSWORD,
            'database': Config.DB_NAME,
            'charset': 'utf8mb4',
            'collation': 'utf8mb4_unicode_ci',
            'autocommit': False,
            'raise_on_warnings': False,
            'pool_size': Config.DB_POOL_SIZE,
            'pool_name': Config.DB_POOL_NAME,
            'pool_reset_session': True,
            'connection_timeout': 30
        }
        self.pool = _get_connection_pool(self.config)
        # 当前线程正在执行 update 事务的连接
        self._local = threading.local()

    @contextmanager
    def get_connection(self):
        """获取数据库连接的上下文管理器"""
        connection = None
        try:
            if self.pool:
                connection = self.pool.get_connection()
            else:
                direct_config = {
                    k: v for k, v in self.config.items()
                    if k not in ('pool_size', 'pool_name', 'pool_reset_session')
                }
                connection = mysql.connector.connect(**direct_config)
            yield connection
        except Error as e:
            logger.error(f"数据库连接错误: {e}")
            if connection:
                connection.rollback()
            raise
        finally:
            if connection and connection.is_connected():
                connection.close()

    @contextmanager
    def _read_connection(self):
        """读操作使用的连接

        update 事务进行中（例如在 mutator 里读取其它记录）时复用事务连接，
        不再从连接池取第二个连接，读取也能看到事务加锁后的最新数据。
        """
        connection = getattr(self._local, 'transaction_connection', None)
        if connection is not None:
            yield connection
            return
        with self.get_connection() as connection:
            yield connection

    def _cursor(self, connection):
        return TimedCursorWrapper(connection.cursor(buffered=True), slow_threshold_ms=Config.SLOW_QUERY_THRESHOLD_MS)

    def init_schema(self):
        """创建数据库和 kv_store 表（已存在则跳过）"""
        temp_config = {
            k: v for k, v in self.config.items()
            if k not in ('database', 'pool_size', 'pool_name', 'pool_reset_session')
        }
        with mysql.connector.connect(**temp_config) as connection:
            cursor = connection.cursor()
            cursor.execute(
                f"CREATE DATABASE IF NOT EXISTS {self.config['database']} "
                "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            )

        with self.get_connection() as connection:
            cursor = self._cursor(connection)
            for table_name, schema in KV_STORE_SCHEMA.items():
                cursor.execute(schema)
                logger.info(f"检查表 {table_name} 完成")
            connection.commit()

    def get(self, key):
        with self._read_connection() as conn:
            cursor = self._cursor(conn)
            cursor.execute("SELECT store_value FROM kv_store WHERE store_key = %s", (key,))
            row = cursor.fetchone()
        return json.loads(row[0]) if row else None

    def set(self, key, value):
        with self.get_connection() as conn:
            cursor = self._cursor(conn)
            cursor.execute(
                """
                INSERT INTO kv_store (store_key, store_value) VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE store_value = VALUES(store_value)
                """,
                (key, _dumps(value)),
            )
            conn.commit()

    def set_if_absent(self, key, value):
        with self.get_connection() as conn:
            cursor = self._cursor(conn)
            cursor.execute(
                "INSERT IGNORE INTO kv_store (store_key, store_value) VALUES (%s, %s)",
                (key, _dumps(value)),
            )
            inserted = cursor.rowcount == 1
            conn.commit()
        return inserted

    def get_by_prefix(self, prefix):
        pattern = prefix.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_') + '%'
        with self._read_connection() as conn:
            cursor = self._cursor(conn)
            cursor.execute(
                "SELECT store_value FROM kv_store WHERE store_key LIKE %s ORDER BY id",
                (pattern,),
            )
            rows = cursor.fetchall()
        return [json.loads(row[0]) for row in rows]

    def update(self, key, mutator):
        """在事务中用 SELECT ... FOR UPDATE 锁定记录后修改"""
        with self.get_connection() as conn:
            cursor = self._cursor(conn)
            self._local.transaction_connection = conn
            try:
                cursor.execute(
                    "SELECT store_value FROM kv_store WHERE store_key = %s FOR UPDATE",
                    (key,),
                )
                row = cursor.fetchone()
                if not row:
                    conn.rollback()
                    return None
                value = mutator(json.loads(row[0]))
                cursor.execute(
                    "UPDATE kv_store SET store_value = %s WHERE store_key = %s",
                    (_dumps(value), key),
                )
                conn.commit()
                return value
            except Exception:
                conn.rollback()
                raise
            finally:
                self._local.transaction_connection = None

    def ping(self):
        with self.get_connection() as conn:
            cursor = self._cursor(conn)
            cursor.execute('SELECT 1')
            cursor.fetchone()
        return True


_GLOB_SPECIAL = re.compile(r'([*?\[\]\\])')


class RedisRecordStore:
    """基于 Redis 的记录存储，更新采用 WATCH/MULTI 乐观重试"""

    backend = 'redis'

    def __init__(self, client, key_prefix='contest:', max_retries=20):
        self.client = client
        self.key_prefix = key_prefix
        self.max_retries = max_retries

    def _key(self, key):
        return f"{self.key_prefix}{key}"

    def get(self, key):
        raw = self.client.get(self._key(key))
        return json.loads(raw) if raw is not None else None

    def set(self, key, value):
        self.client.set(self._key(key), _dumps(value))

    def set_if_absent(self, key, value):
        return bool(self.client.set(self._key(key), _dumps(value), nx=True))

    def get_by_prefix(self, prefix):
        pattern = _GLOB_SPECIAL.sub(r'\\\1', self._key(prefix)) + '*'
        keys = sorted(self.client.scan_iter(match=pattern))
        if not keys:
            return []
        return [json.loads(raw) for raw in self.client.mget(keys) if raw is not None]

    def update(self, key, mutator):
        import redis

        full_key = self._key(key)
        with self.client.pipeline() as pipe:
            for attempt in range(1, self.max_retries + 1):
                try:
                    pipe.watch(full_key)
                    raw = pipe.get(full_key)
                    if raw is None:
                        pipe.unwatch()
                        return None
                    value = mutator(json.loads(raw))
                    pipe.multi()
                    pipe.set(full_key, _dumps(value))
                    pipe.execute()
                    return value
                except redis.WatchError:
                    logger.info(f"记录 {key} 并发修改，第 {attempt} 次重试")
                    continue
        logger.warning(f"记录 {key} 乐观锁重试 {self.max_retries} 次仍失败")
        raise ConcurrentUpdate()

    def ping(self):
        return bool(self.client.ping())


_record_store = None
_record_store_lock = threading.Lock()

def _create_record_store(backend):
    if backend == 'memory':
        return MemoryRecordStore()
    if backend == 'mysql':
        return MySQLRecordStore()
    if backend == 'redis':
        if not Config.REDIS_URL:
            raise RuntimeError('STORE_BACKEND=redis 需要配置 REDIS_URL')
        import redis
        client = redis.from_url(Config.REDIS_URL, decode_responses=True)
        return RedisRecordStore(
            client,
            key_prefix=Config.REDIS_KEY_PREFIX,
            max_retries=Config.REDIS_UPDATE_MAX_RETRIES,
        )
    raise ValueError(f"未知的存储后端: {backend}")

def get_record_store():
    """获取全局记录存储（按 STORE_BACKEND 创建一次）"""
    global _record_store
    if _record_store is None:
        with _record_store_lock:
            if _record_store is None:
                _record_store = _create_record_store(Config.STORE_BACKEND)
                logger.info(f"记录存储初始化完成，后端: {_record_store.backend}")
    return _record_store


class DatabaseManager(
    UserDbMixin,
    EntryDbMixin,
    VoteDbMixin,
    JuryScoreDbMixin,
):
    """数据库管理器"""

    def __init__(self, store=None):
        self.store = store if store is not None else get_record_store()

    def init_database(self):
        """初始化存储结构（仅 MySQL 需要建表）"""
        init_schema = getattr(self.store, 'init_schema', None)
        if init_schema is not None:
            init_schema()
            logger.info("数据库初始化成功")

    def ping(self):
        return self.store.ping()


if __name__ == '__main__':
    # 测试存储连接和初始化
    db_manager = DatabaseManager()
    try:
        db_manager.init_database()
        db_manager.ping()
        print(f"存储初始化成功！后端: {db_manager.store.backend}")
    except Exception as e:
        print(f"存储初始化失败: {e}")
