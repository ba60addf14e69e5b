#!/usr/bin/env python3
"""
Helpers for moving between JSON snapshots and the in-memory world, and for
building public-facing allocation report payloads.
"""
from __future__ import annotations

from typing import Any, Dict

from allocator.models import (
    Agent,
    AllocationReport,
    ConstructionItem,
    MapUnit,
    Parcel,
    ResourceDef,
    Ruleset,
    Settlement,
    UnitType,
    World,
)


def _position(raw: Any) -> tuple[int, int]:
    q, r = raw
    return int(q), int(r)


def _ruleset_from_snapshot(raw: dict) -> Ruleset:
    constructions: Dict[str, ConstructionItem] = {}
    for item in raw.get("constructions", []) or []:
        item_copy = dict(item)
        item_copy["purchasable_with"] = set(item_copy.get("purchasable_with", ["gold"]))
        constructions[item_copy["name"]] = ConstructionItem(**item_copy)

    unit_types = {
        ut["name"]: UnitType(**ut) for ut in raw.get("unit_types", []) or []
    }
    resources = {r["name"]: ResourceDef(**r) for r in raw.get("resources", []) or []}
    return Ruleset(
        constructions=constructions, unit_types=unit_types, resources=resources
    )


def world_from_snapshot(snapshot: dict) -> World:
    """Build a World from a JSON snapshot. Malformed entries raise KeyError/TypeError."""
    agents = {a["id"]: Agent(**a) for a in snapshot.get("agents", []) or []}

    settlements: Dict[int, Settlement] = {}
    for raw in snapshot.get("settlements", []) or []:
        s = dict(raw)
        s["id"] = int(s["id"])
        s["position"] = _position(s["position"])
        s["available"] = list(s.get("available", []))
        s["built"] = set(s.get("built", []))
        settlements[s["id"]] = Settlement(**s)

    units: Dict[int, MapUnit] = {}
    for raw in snapshot.get("units", []) or []:
        u = dict(raw)
        u["id"] = int(u["id"])
        u["position"] = _position(u["position"])
        units[u["id"]] = MapUnit(**u)

    parcels: Dict[int, Parcel] = {}
    for raw in snapshot.get("parcels", []) or []:
        p = dict(raw)
        p["id"] = int(p["id"])
        p["position"] = _position(p["position"])
        p["visible_to"] = set(p.get("visible_to", []))
        parcels[p["id"]] = Parcel(**p)

    return World(
        turn=int(snapshot.get("turn", 0)),
        agents=agents,
        settlements=settlements,
        units=units,
        parcels=parcels,
        ruleset=_ruleset_from_snapshot(snapshot.get("ruleset", {}) or {}),
        next_unit_id=max(units.keys(), default=-1) + 1,
    )


def report_payload(report: AllocationReport, turn: int | None = None) -> dict:
    """JSON-serializable view of an allocation report."""
    return {
        "kind": "allocation_report",
        "turn": turn,
        "agent_id": report.agent_id,
        "ranking": [
            {"category": category.value, "weight": weight}
            for category, weight in report.ranking
        ],
        "initial_budget": report.initial_budget,
        "remaining_budget": report.remaining_budget,
        "spent": report.spent,
        "transactions": [
            {
                "category": tx.category.value,
                "target": tx.target,
                "cost": tx.cost,
                "budget_before": tx.budget_before,
            }
            for tx in report.transactions
        ],
        "failures": [
            {
                "category": opp.category.value,
                "target": opp.describe(),
                "cost": opp.cost,
            }
            for opp in report.failures
        ],
        "categories_visited": [c.value for c in report.categories_visited],
    }
