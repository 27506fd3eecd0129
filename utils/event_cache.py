#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Read-through cache for the global event list
"""

import json
import logging
import time

import redis

logger = logging.getLogger(__name__)


def get_redis_client(redis_url):
    if not redis_url:
        return None
    try:
        return redis.from_url(redis_url, decode_responses=True)
    except Exception as e:
        logger.warning(f"Redis client init failed, fallback to memory: {e}")
        return None


class EventCache:
    """Caches the backend's full event list for ttl_seconds.

    fetch_events is any callable returning a list of event dicts (normally
    BackendClient.get_events). With a Redis client the list is shared
    between workers; otherwise it lives in this process.
    """

    CACHE_KEY = 'campus_events:all_events'

    def __init__(self, fetch_events, ttl_seconds=60, redis_client=None, clock=time.time):
        self.fetch_events = fetch_events
        self.ttl_seconds = ttl_seconds
        self.redis_client = redis_client
        self.clock = clock
        self._entry = None  # (expires_at, events)

    def _read(self):
        if self.redis_client is not None:
            try:
                raw = self.redis_client.get(self.CACHE_KEY)
                return json.loads(raw) if raw else None
            except Exception as e:
                logger.warning(f"Redis get failed, fallback to memory: {e}")

        if self._entry and self.clock() < self._entry[0]:
            return self._entry[1]
        return None

    def _write(self, events):
        if self.redis_client is not None:
            try:
                self.redis_client.setex(self.CACHE_KEY, self.ttl_seconds, json.dumps(events))
                return
            except Exception as e:
                logger.warning(f"Redis set failed, fallback to memory: {e}")

        self._entry = (self.clock() + self.ttl_seconds, events)

    def get_all(self):
        """Cached list, fetching on a miss. Fetch errors propagate."""
        events = self._read()
        if events is not None:
            return events

        events = self.fetch_events()
        self._write(events)
        logger.info(f"Event cache refreshed with {len(events)} events")
        return events

    def invalidate(self):
        self._entry = None
        if self.redis_client is not None:
            try:
                self.redis_client.delete(self.CACHE_KEY)
            except Exception as e:
                logger.warning(f"Redis delete failed: {e}")
