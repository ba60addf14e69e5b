"""
Unit tests for snapshot loading and report payloads
"""

import json

import pytest

from allocator import allocate
from allocator.state_utils import report_payload, world_from_snapshot


SNAPSHOT = {
    "turn": 12,
    "agents": [
        {
            "id": "A",
            "name": "Aurelia",
            "treasury": 800,
            "personality": {"industrial": 9, "scientific": 9, "cultural": 9},
            "known_agents": ["CS1"],
            "unit_supply": 6,
            "era": 1,
        },
        {"id": "CS1", "name": "Sidon", "is_minor": True, "influence": {"A": 12}},
    ],
    "settlements": [
        {
            "id": 1,
            "owner": "A",
            "name": "Roma",
            "population": 7,
            "position": [0, 0],
            "available": ["Granary"],
            "built": ["Palace"],
        }
    ],
    "units": [{"id": 4, "owner": "A", "unit_type": "Warrior", "position": [1, 0]}],
    "parcels": [
        {"id": 10, "position": [1, -1], "visible_to": ["A"], "resource": "Silk"}
    ],
    "ruleset": {
        "constructions": [
            {"name": "Granary", "kind": "building", "production_cost": 60},
            {"name": "Palace", "kind": "building", "production_cost": 100, "purchasable_with": []},
        ],
        "unit_types": [
            {"name": "Warrior", "cost": 40, "upgrades_to": ["Swordsman"]},
            {"name": "Swordsman", "cost": 75},
        ],
        "resources": [{"name": "Silk", "kind": "luxury"}],
    },
}


class TestWorldFromSnapshot:
    def test_builds_typed_world(self):
        world = world_from_snapshot(SNAPSHOT)
        assert world.turn == 12
        assert world.agents["CS1"].is_minor
        assert world.settlements[1].position == (0, 0)
        assert world.settlements[1].built == {"Palace"}
        assert world.parcels[10].visible_to == {"A"}
        assert world.ruleset.constructions["Palace"].purchasable_with == set()
        assert world.ruleset.constructions["Granary"].purchasable_with == {"gold"}
        assert world.next_unit_id == 5

    def test_malformed_snapshot_raises(self):
        with pytest.raises(KeyError):
            world_from_snapshot({"agents": [{"name": "no id"}]})

    def test_allocates_from_snapshot(self):
        world = world_from_snapshot(SNAPSHOT)
        report = allocate(world, "A")
        assert report.category_order[0].value == "construction"
        assert report.transactions[0].target == "settlement #1 / Granary"


class TestReportPayload:
    def test_payload_is_json_serializable(self):
        world = world_from_snapshot(SNAPSHOT)
        report = allocate(world, "A")
        payload = report_payload(report, turn=world.turn)

        decoded = json.loads(json.dumps(payload))
        assert decoded["agent_id"] == "A"
        assert decoded["turn"] == 12
        assert decoded["initial_budget"] == 800
        assert decoded["remaining_budget"] == report.remaining_budget
        assert decoded["spent"] == 800 - report.remaining_budget
        assert [r["category"] for r in decoded["ranking"]][0] == "construction"
        assert len(decoded["transactions"]) == len(report.transactions)
