"""
Unit tests for notification delivery
"""

import json

from redis.exceptions import ConnectionError as RedisConnectionError

from allocator.infra.notification_stream import RedisNotificationStream
from allocator.models import Notification, SpendingCategory
from allocator.notifications import emit, world_log_hook


class FakeRedis:
    """Records xadd calls instead of talking to a server."""

    def __init__(self, fail=False):
        self.fail = fail
        self.entries = []

    def xadd(self, name, fields, maxlen=None, approximate=True):
        if self.fail:
            raise RedisConnectionError("connection refused")
        self.entries.append((name, fields, maxlen))
        return f"{len(self.entries)}-0"

    def close(self):
        pass


def _note():
    return Notification(
        agent_id="A",
        category=SpendingCategory.CONSTRUCTION,
        text="[Roma] has purchased [Granary] for [270] gold.",
        turn=3,
        settlement_id=1,
    )


class TestRedisNotificationStream:
    def test_appends_json_payload(self):
        client = FakeRedis()
        stream = RedisNotificationStream(stream="test:notes", maxlen=10, client=client)
        stream(_note())

        name, fields, maxlen = client.entries[0]
        assert name == "test:notes"
        assert maxlen == 10
        payload = json.loads(fields["data"])
        assert payload["kind"] == "notification"
        assert payload["category"] == "construction"
        assert payload["settlement_id"] == 1

    def test_explicit_zero_maxlen_kept(self):
        client = FakeRedis()
        stream = RedisNotificationStream(maxlen=0, client=client)
        assert stream.maxlen == 0
        stream.append({"x": 1})
        assert client.entries[0][2] == 0

    def test_outage_is_reported_not_raised(self, capsys):
        stream = RedisNotificationStream(client=FakeRedis(fail=True))
        assert stream.append({"x": 1}) is None
        stream(_note())
        assert "unavailable" in capsys.readouterr().out


class TestEmit:
    def test_world_log_hook(self, world):
        emit([world_log_hook(world)], _note())
        assert world.notifications == [_note()]

    def test_failing_hook_skipped(self, capsys):
        received = []

        def broken(_):
            raise ValueError("nope")

        emit([broken, received.append], _note())
        assert received == [_note()]
        assert "nope" in capsys.readouterr().out
