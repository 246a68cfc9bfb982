from __future__ import annotations

import os
import time
from collections import OrderedDict
from typing import Optional, Protocol

from pydantic import TypeAdapter
from redis import Redis

from .models.session import GameSession

REDIS_URL = os.getenv("REDIS_URL")
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "50"))
EVICT_ON_GET = os.getenv("EVICT_ON_GET", "true").lower() != "false"
ACTION_LOG_MAX = int(os.getenv("ACTION_LOG_MAX", "1000"))

_session_ta = TypeAdapter(GameSession)


class SessionStore(Protocol):
    name: str

    def ping(self) -> bool: ...
    def save(self, sess: GameSession) -> None: ...
    def get(self, sid: str) -> Optional[GameSession]: ...
    def delete(self, sid: str) -> bool: ...
    def list_all(self) -> list[GameSession]: ...


class LogStore(Protocol):
    def append(self, sid: str, entry_json: str) -> None: ...
    def list(self, sid: str, limit: int) -> list[str]: ...
    def delete(self, sid: str) -> None: ...


class MemorySessionStore:
    """In-process LRU store; sessions are kept as JSON so reads never alias live state."""

    name = "memory"

    def __init__(self, max_sessions: int = MAX_SESSIONS, logs: Optional[LogStore] = None) -> None:
        self._data: OrderedDict[str, str] = OrderedDict()
        self._max = max_sessions
        self._logs = logs

    def _forget(self, sid: str) -> None:
        if self._logs is not None:
            self._logs.delete(sid)

    def ping(self) -> bool:
        return True

    def save(self, sess: GameSession) -> None:
        self._data[sess.id] = sess.model_dump_json()
        self._data.move_to_end(sess.id)
        while len(self._data) > self._max:
            sid, _ = self._data.popitem(last=False)
            self._forget(sid)

    def get(self, sid: str) -> Optional[GameSession]:
        raw = self._data.get(sid)
        if raw is None:
            return None
        if EVICT_ON_GET:
            self._data.move_to_end(sid)
        return _session_ta.validate_json(raw)

    def delete(self, sid: str) -> bool:
        self._forget(sid)
        return self._data.pop(sid, None) is not None

    def list_all(self) -> list[GameSession]:
        return [_session_ta.validate_json(raw) for raw in reversed(self._data.values())]


class MemoryLogStore:
    def __init__(self, max_entries: int = ACTION_LOG_MAX) -> None:
        self._data: dict[str, list[str]] = {}
        self._max = max_entries

    def append(self, sid: str, entry_json: str) -> None:
        lst = self._data.setdefault(sid, [])
        lst.append(entry_json)
        if len(lst) > self._max:
            del lst[: len(lst) - self._max]

    def list(self, sid: str, limit: int) -> list[str]:
        return list(self._data.get(sid, [])[-limit:])

    def delete(self, sid: str) -> None:
        self._data.pop(sid, None)


class RedisSessionStore:
    """Cross-worker store using Redis with an LRU cap. Set REDIS_URL to enable."""

    name = "redis"
    INDEX = "sess:index"  # sorted-set: member=sid, score=last touch (unix seconds)

    def __init__(self, r: Redis, max_sessions: int = MAX_SESSIONS) -> None:
        self.r = r
        self._max = max_sessions

    @staticmethod
    def _k(sid: str) -> str:
        return f"sess:{sid}"

    def ping(self) -> bool:
        try:
            return bool(self.r.ping())
        except Exception:
            return False

    def _touch(self, sid: str) -> None:
        self.r.zadd(self.INDEX, {sid: time.time()})

    def _enforce_cap(self) -> None:
        # drop the oldest sessions beyond the cap
        count = self.r.zcard(self.INDEX)
        if count <= self._max:
            return
        evicted = self.r.zpopmin(self.INDEX, count - self._max)
        if not evicted:
            return
        pipe = self.r.pipeline()
        for sid, _ in evicted:
            pipe.delete(self._k(sid))
            pipe.delete(RedisLogStore._k(sid))
        pipe.execute()

    def save(self, sess: GameSession) -> None:
        self.r.set(self._k(sess.id), sess.model_dump_json())
        self._touch(sess.id)
        self._enforce_cap()

    def get(self, sid: str) -> Optional[GameSession]:
        raw = self.r.get(self._k(sid))
        if raw is None:
            # index may still list a session whose key expired
            self.r.zrem(self.INDEX, sid)
            return None
        if EVICT_ON_GET:
            self._touch(sid)
            self._enforce_cap()
        return _session_ta.validate_json(raw)

    def delete(self, sid: str) -> bool:
        pipe = self.r.pipeline()
        pipe.delete(self._k(sid))
        pipe.zrem(self.INDEX, sid)
        pipe.delete(RedisLogStore._k(sid))
        res = pipe.execute()
        return bool(res and res[0])

    def list_all(self) -> list[GameSession]:
        sids = self.r.zrevrange(self.INDEX, 0, -1)
        if not sids:
            return []
        raw_sessions = self.r.mget([self._k(sid) for sid in sids])
        sessions = []
        stale_sids = []
        for i, raw in enumerate(raw_sessions):
            if raw:
                sessions.append(_session_ta.validate_json(raw))
            else:
                stale_sids.append(sids[i])
        if stale_sids:
            self.r.zrem(self.INDEX, *stale_sids)
        return sessions


class RedisLogStore:
    def __init__(self, r: Redis, max_entries: int = ACTION_LOG_MAX) -> None:
        self.r = r
        self._max = max_entries

    @staticmethod
    def _k(sid: str) -> str:
        return f"log:{sid}"

    def append(self, sid: str, entry_json: str) -> None:
        pipe = self.r.pipeline()
        pipe.rpush(self._k(sid), entry_json)
        pipe.ltrim(self._k(sid), -self._max, -1)
        pipe.execute()

    def list(self, sid: str, limit: int) -> list[str]:
        return self.r.lrange(self._k(sid), -limit, -1)

    def delete(self, sid: str) -> None:
        self.r.delete(self._k(sid))


if REDIS_URL:
    _redis = Redis.from_url(REDIS_URL, decode_responses=True)
    logs: LogStore = RedisLogStore(_redis)
    sessions: SessionStore = RedisSessionStore(_redis)
else:
    logs = MemoryLogStore()
    sessions = MemorySessionStore(logs=logs)


# Module-level shortcuts over the configured session store
def save(sess: GameSession) -> None:
    sessions.save(sess)


def get(sid: str) -> Optional[GameSession]:
    return sessions.get(sid)


def delete(sid: str) -> bool:
    return sessions.delete(sid)


def list_all() -> list[GameSession]:
    return sessions.list_all()
