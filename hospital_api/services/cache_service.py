# hospital_api/services/cache_service.py

import json
import hashlib
import logging
import redis
from typing import Any, Dict, Optional
from hospital_api.config.database import settings
from hospital_api.config.redis_config import get_redis_client

logger = logging.getLogger(__name__)

BRANCHES_CACHE_GROUP = "GetBranches"
DOCTORS_CACHE_GROUP = "GetDoctors"
DOCTOR_SCHEDULES_CACHE_GROUP = "GetDoctorSchedules"


class CacheService:
    """
    Redis JSON cache for list queries.

    Every cached key is registered in a set named after its group so that a
    command can drop all cached pages of a resource at once. Redis errors are
    logged and treated as a cache miss.
    """

    def _get_client(self) -> Optional[redis.Redis]:
        if not settings.cache_enabled:
            return None
        return get_redis_client()

    @staticmethod
    def _group_key(group: str) -> str:
        return f"cache_group:{group}"

    @staticmethod
    def build_key(group: str, params: Dict[str, Any]) -> str:
        digest = hashlib.md5(json.dumps(params, sort_keys=True, default=str).encode()).hexdigest()
        return f"cache:{group}:{digest}"

    def get(self, group: str, params: Dict[str, Any]) -> Optional[Any]:
        client = self._get_client()
        if client is None:
            return None

        key = self.build_key(group, params)
        try:
            data = client.get(key)
        except redis.RedisError as e:
            logger.error(f"❌ Cache get error for {key}: {e}")
            return None

        if data is None:
            logger.debug(f"Cache MISS: {key}")
            return None
        logger.debug(f"✓ Cache HIT: {key}")
        return json.loads(data)

    def set(self, group: str, params: Dict[str, Any], value: Any, ttl: Optional[int] = None) -> bool:
        client = self._get_client()
        if client is None:
            return False

        key = self.build_key(group, params)
        try:
            pipe = client.pipeline()
            pipe.setex(key, ttl or settings.cache_ttl_seconds, json.dumps(value))
            pipe.sadd(self._group_key(group), key)
            pipe.execute()
            return True
        except redis.RedisError as e:
            logger.error(f"❌ Cache set error for {key}: {e}")
            return False

    def invalidate(self, *groups: str) -> int:
        """Drop every cached entry registered under the given groups"""
        client = self._get_client()
        if client is None:
            return 0

        removed = 0
        for group in groups:
            group_key = self._group_key(group)
            try:
                keys = client.smembers(group_key)
                if keys:
                    removed += client.delete(*keys)
                client.delete(group_key)
                logger.debug(f"✓ Cache group {group} invalidated ({len(keys)} keys)")
            except redis.RedisError as e:
                logger.error(f"❌ Cache invalidation error for {group}: {e}")
        return removed


# Global instance
cache_service = CacheService()
