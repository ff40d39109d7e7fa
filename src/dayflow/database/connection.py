from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling
from mysql.connector.errors import PoolError

from ..core.constants import DB_POOL_RETRY_INTERVAL_SECONDS, DB_POOL_TIMEOUT_SECONDS
from ..core.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5
    pool_timeout: float = DB_POOL_TIMEOUT_SECONDS


class DatabaseConnection:
    """Singleton-like factory over a MySQL connection pool.

    ``connect()`` hands out a pooled connection; closing it returns it to the pool.
    The pool is created lazily so the app can start before MySQL is reachable.
    When every pooled connection is checked out, ``connect()`` waits up to
    ``pool_timeout`` seconds for one to come back.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name="dayflow",
                    pool_size=int(self._config.pool_size),
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                    autocommit=False,
                )
            return self._pool

    def connect(self):
        pool = self._get_pool()
        deadline = time.monotonic() + float(self._config.pool_timeout)
        while True:
            try:
                return pool.get_connection()
            except PoolError as exc:
                if time.monotonic() >= deadline:
                    logger.error("Connection pool exhausted for %.1fs", float(self._config.pool_timeout))
                    raise ServiceUnavailableError("Database is busy, please retry") from exc
                time.sleep(DB_POOL_RETRY_INTERVAL_SECONDS)


def db_config_from_dict(db_config: dict) -> DBConfig:
    return DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(db_config.get("pool_size", 5)),
        pool_timeout=float(db_config.get("pool_timeout", DB_POOL_TIMEOUT_SECONDS)),
    )
