import redis

from hospital_api.services.cache_service import (
    BRANCHES_CACHE_GROUP,
    DOCTORS_CACHE_GROUP,
    CacheService,
)


class BrokenRedis:
    def get(self, key):
        raise redis.ConnectionError("Redis is down")

    def pipeline(self):
        raise redis.ConnectionError("Redis is down")

    def smembers(self, key):
        raise redis.ConnectionError("Redis is down")


def test_set_then_get_returns_value(redis_client):
    cache = CacheService()
    params = {"skip": 0, "limit": 10}

    assert cache.get(BRANCHES_CACHE_GROUP, params) is None
    assert cache.set(BRANCHES_CACHE_GROUP, params, {"items": [], "count": 0}) is True
    assert cache.get(BRANCHES_CACHE_GROUP, params) == {"items": [], "count": 0}
    assert redis_client.ttl(CacheService.build_key(BRANCHES_CACHE_GROUP, params)) > 0


def test_keys_depend_on_params():
    assert CacheService.build_key(DOCTORS_CACHE_GROUP, {"a": 1, "b": 2}) == CacheService.build_key(DOCTORS_CACHE_GROUP, {"b": 2, "a": 1})
    assert CacheService.build_key(DOCTORS_CACHE_GROUP, {"a": 1}) != CacheService.build_key(DOCTORS_CACHE_GROUP, {"a": 2})


def test_invalidate_drops_only_named_group():
    cache = CacheService()
    cache.set(BRANCHES_CACHE_GROUP, {"page": 1}, [1])
    cache.set(BRANCHES_CACHE_GROUP, {"page": 2}, [2])
    cache.set(DOCTORS_CACHE_GROUP, {"page": 1}, [3])

    assert cache.invalidate(BRANCHES_CACHE_GROUP) == 2

    assert cache.get(BRANCHES_CACHE_GROUP, {"page": 1}) is None
    assert cache.get(BRANCHES_CACHE_GROUP, {"page": 2}) is None
    assert cache.get(DOCTORS_CACHE_GROUP, {"page": 1}) == [3]


def test_redis_errors_are_treated_as_miss(monkeypatch):
    cache = CacheService()
    monkeypatch.setattr(cache, "_get_client", lambda: BrokenRedis())

    assert cache.get(BRANCHES_CACHE_GROUP, {}) is None
    assert cache.set(BRANCHES_CACHE_GROUP, {}, [1]) is False
    assert cache.invalidate(BRANCHES_CACHE_GROUP) == 0


def test_branch_list_cache_refreshes_after_create(client, admin_headers, redis_client):
    first = client.get("/api/v1/branches/")
    assert first.status_code == 200
    assert first.json()["count"] == 0
    assert redis_client.smembers("cache_group:GetBranches")

    created = client.post("/api/v1/branches/", json={"name": "Neurology"}, headers=admin_headers)
    assert created.status_code == 201

    second = client.get("/api/v1/branches/")
    assert second.json()["count"] == 1
    assert second.json()["items"][0]["name"] == "Neurology"
