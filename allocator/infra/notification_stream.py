#!/usr/bin/env python3
"""
Redis Streams sink for allocation notifications and reports.

Delivery is fire-and-forget: a Redis outage is reported on stdout and the
allocation cycle carries on.
"""
from __future__ import annotations

import json
from typing import Any, Optional

import redis
from redis.exceptions import RedisError

from allocator.models import NOTIFICATION_SETTINGS, Notification


class RedisNotificationStream:
    def __init__(
        self,
        url: str | None = None,
        stream: str | None = None,
        maxlen: int | None = None,
        client: Optional[Any] = None,
    ) -> None:
        self.url = url or str(NOTIFICATION_SETTINGS.redis_url)
        self.stream = stream or NOTIFICATION_SETTINGS.notification_stream
        self.maxlen = (
            NOTIFICATION_SETTINGS.notification_stream_maxlen if maxlen is None else maxlen
        )
        # decode_responses=True so we deal with str, not bytes
        self._redis = client or redis.from_url(self.url, decode_responses=True)

    @property
    def client(self):
        return self._redis

    def close(self) -> None:
        self._redis.close()

    def append(self, payload: dict) -> Optional[str]:
        """Append a payload under field 'data'; returns the entry id or None on failure."""
        try:
            return self._redis.xadd(
                name=self.stream,
                fields={"data": json.dumps(payload)},
                maxlen=self.maxlen,
                approximate=True,
            )
        except RedisError as exc:
            print(f"[allocator] notification stream unavailable: {exc}")
            return None

    def __call__(self, notification: Notification) -> None:
        self.append({"kind": "notification", **notification.to_dict()})
