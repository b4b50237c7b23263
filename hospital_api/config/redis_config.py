import redis
import logging
from typing import Optional
from hospital_api.config.database import settings

logger = logging.getLogger(__name__)


class RedisConfig:
    """Redis configuration and connection manager"""

    def __init__(self):
        self.host = settings.redis_host
        self.port = settings.redis_port
        self.password = settings.redis_password
        self.db = settings.redis_db
        self.max_connections = settings.redis_max_connections
        self.socket_timeout = settings.redis_socket_timeout
        self.decode_responses = True

        self._client: Optional[redis.Redis] = None
        self._connection_pool: Optional[redis.ConnectionPool] = None

    def get_connection_pool(self) -> redis.ConnectionPool:
        """Create and return Redis connection pool"""
        if not self._connection_pool:
            self._connection_pool = redis.ConnectionPool(
                host=self.host,
                port=self.port,
                password=self.password if self.password else None,
                db=self.db,
                max_connections=self.max_connections,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_timeout,
                decode_responses=self.decode_responses
            )
        return self._connection_pool

    def get_client(self) -> redis.Redis:
        """Get Redis client instance"""
        if not self._client:
            self._client = redis.Redis(
                connection_pool=self.get_connection_pool()
            )
        return self._client

    def set_client(self, client: Optional[redis.Redis]):
        """Replace the shared client (used by tests and scripts)"""
        self._client = client

    def test_connection(self) -> bool:
        """Test Redis connection"""
        try:
            self.get_client().ping()
            logger.info("Redis connection successful")
            return True
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {e}")
            return False

    def close(self):
        """Close Redis connection"""
        if self._client:
            self._client.close()
            self._client = None
        if self._connection_pool:
            self._connection_pool.disconnect()
            self._connection_pool = None


# Redis instance
redis_config = RedisConfig()


def get_redis_client() -> redis.Redis:
    """Dependency injection for Redis client"""
    return redis_config.get_client()
