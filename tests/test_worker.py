"""
Unit tests for the allocation worker turn loop
"""

import json

from conftest import add_minor, add_settlement, make_world

from allocator.infra.notification_stream import RedisNotificationStream
from services.allocation_worker.worker import run_turn
from test_notifications import FakeRedis


class TestRunTurn:
    def test_allocates_ai_agents_only(self):
        world = make_world(treasury=1000, personality={"industrial": 9})
        add_settlement(world, 1, available=["Granary"])
        add_minor(world, "CS1", influence=0)
        world.agents["H"] = make_world().agents["A"]
        world.agents["H"].id = "H"

        notes_client, reports_client = FakeRedis(), FakeRedis()
        done = run_turn(
            world,
            {"H"},
            RedisNotificationStream(stream="n", client=notes_client),
            RedisNotificationStream(stream="r", client=reports_client),
        )

        assert [r.agent_id for r in done] == ["A"]
        assert len(reports_client.entries) == 1
        payload = json.loads(reports_client.entries[0][1]["data"])
        assert payload["kind"] == "allocation_report"
        assert payload["turn"] == world.turn
        assert len(notes_client.entries) == len(done[0].transactions)
