#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Campus events portal - database connection handling
"""

import mysql.connector
from mysql.connector import Error, pooling
from contextlib import contextmanager
import logging
import time

from config import Config
from models import DATABASE_SCHEMA
from db_modules.db_users import UserDbMixin

logger = logging.getLogger(__name__)


class TimedCursorWrapper:
    def __init__(self, cursor, slow_threshold_ms=50):
        self._cursor = cursor
        self._slow_threshold_ms = slow_threshold_ms

    def execute(self, operation, params=None):
        start = time.perf_counter()
        try:
            return self._cursor.execute(operation, params)
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
    """Return the process-wide connection pool, creating it on first use"""
    global _connection_pool
    if _connection_pool is None:
        try:
            pool_config = config.copy()
            pool_size = pool_config.pop('pool_size', 5)
            pool_name = pool_config.pop('pool_name', Config.DB_POOL_NAME)

            _connection_pool = pooling.MySQLConnectionPool(
                pool_name=pool_name,
                pool_size=pool_size,
                **pool_config
            )
            logger.info(f"Database pool created, size: {pool_size}")
        except Error as e:
            logger.error(f"Could not create database pool, using direct connections: {e}")
            _connection_pool = None
    return _connection_pool


class DatabaseManager(UserDbMixin):
    """Access to the permissions database"""

    def __init__(self, config_obj=None):
        cfg = config_obj or Config
        self.config = {
            'host': cfg.DB_HOST,
            'port': cfg.DB_PORT,
            'user': cfg.DB_USER,
            'password': cfg.DB_PASSWORD,
            'database': cfg.DB_NAME,
            'charset': 'utf8mb4',
            'collation': 'utf8mb4_unicode_ci',
            'autocommit': False,
            'pool_size': cfg.DB_POOL_SIZE,
            'pool_name': cfg.DB_POOL_NAME,
            'pool_reset_session': True,
            'connection_timeout': 30
        }
        self.slow_threshold_ms = getattr(cfg, 'SLOW_QUERY_THRESHOLD_MS', 50)
        self.pool = None

    @contextmanager
    def get_connection(self):
        """Context manager yielding a pooled connection"""
        if self.pool is None:
            self.pool = _get_connection_pool(self.config)

        connection = None
        try:
            if self.pool:
                connection = self.pool.get_connection()
            else:
                direct_config = {k: v for k, v in self.config.items()
                                 if k not in ('pool_size', 'pool_name', 'pool_reset_session')}
                connection = mysql.connector.connect(**direct_config)

            original_cursor = connection.cursor
            threshold = self.slow_threshold_ms

            def timed_cursor(*args, **kwargs):
                return TimedCursorWrapper(original_cursor(*args, **kwargs), slow_threshold_ms=threshold)

            connection.cursor = timed_cursor

            yield connection
        except Error as e:
            logger.error(f"Database connection error: {e}")
            if connection:
                connection.rollback()
            raise
        finally:
            if connection and connection.is_connected():
                connection.close()

    def init_database(self):
        """Create missing tables; existing tables are left untouched"""
        with self.get_connection() as connection:
            cursor = connection.cursor()
            for table_name, schema in DATABASE_SCHEMA.items():
                try:
                    cursor.execute(schema)
                except Error as e:
                    logger.error(f"Failed to create table {table_name}: {e}")
                    raise
            connection.commit()
            cursor.close()
        logger.info("Database schema checked")
