#!/usr/bin/env python3
"""
Purchase executor: turns an opportunity into a world mutation and commits
the cost to the agent's treasury. Returns False, touching nothing, whenever
the purchase cannot go through.
"""
from __future__ import annotations

from typing import Optional

from allocator.helper.world_helpers import owned_settlements
from allocator.models import ALLOCATION_CONFIG, AllocationSettings
from allocator.models import Notification, Opportunity, SpendingCategory, World
from allocator.world import (
    claim_parcel,
    purchase_construction,
    receive_gift,
    spend,
    upgrade_unit,
)


def _construction(world: World, opp: Opportunity) -> bool:
    settlement = world.settlements.get(opp.settlement_id)
    item = world.ruleset.constructions.get(opp.item or "")
    if settlement is None or item is None:
        return False
    return purchase_construction(world, settlement, item)


def _influence(world: World, agent_id: str, opp: Opportunity, config: AllocationSettings) -> bool:
    if opp.rival_id not in world.agents:
        return False
    receive_gift(world, agent_id, opp.rival_id, opp.cost, config)
    return True


def _expansion(world: World, opp: Opportunity) -> bool:
    settlement = world.settlements.get(opp.settlement_id)
    parcel = world.parcels.get(opp.parcel_id)
    if settlement is None or parcel is None:
        return False
    return claim_parcel(world, settlement, parcel)


def _modernization(world: World, opp: Opportunity) -> bool:
    unit = world.units.get(opp.unit_id)
    if unit is None:
        return False
    return upgrade_unit(world, unit)


def execute(
    world: World,
    agent_id: str,
    opp: Opportunity,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> bool:
    if world.agents[agent_id].treasury < opp.cost:
        return False

    if opp.category in (SpendingCategory.CONSTRUCTION, SpendingCategory.RECRUITMENT):
        done = _construction(world, opp)
    elif opp.category == SpendingCategory.INFLUENCE:
        done = _influence(world, agent_id, opp, config)
    elif opp.category == SpendingCategory.EXPANSION:
        done = _expansion(world, opp)
    elif opp.category == SpendingCategory.MODERNIZATION:
        done = _modernization(world, opp)
    else:
        raise ValueError(f"unknown spending category: {opp.category!r}")

    if not done:
        return False
    return spend(world, agent_id, opp.cost)


def describe_purchase(
    world: World, agent_id: str, opp: Opportunity, currency: str = "gold"
) -> Notification:
    """Player-facing message for a completed purchase."""
    settlement = world.settlements.get(opp.settlement_id) if opp.settlement_id is not None else None
    place = settlement.name if settlement else "Unknown settlement"
    settlement_id: Optional[int] = settlement.id if settlement else None

    if opp.category in (SpendingCategory.CONSTRUCTION, SpendingCategory.RECRUITMENT):
        text = f"[{place}] has purchased [{opp.item}] for [{opp.cost}] {currency}."
    elif opp.category == SpendingCategory.INFLUENCE:
        rival = world.agents.get(opp.rival_id or "")
        rival_name = rival.name if rival else "Unknown polity"
        text = f"Gained influence with [{rival_name}] via a [{opp.cost}] {currency} gift."
    elif opp.category == SpendingCategory.EXPANSION:
        parcel = world.parcels.get(opp.parcel_id)
        where = parcel.position if parcel else "?"
        text = f"[{place}] has expanded to parcel [{where}] for [{opp.cost}] {currency}."
    else:
        unit = world.units.get(opp.unit_id)
        unit_name = unit.unit_type if unit else "Unknown unit"
        if unit is not None:
            settlement_id = _settlement_at(world, agent_id, unit.position)
        text = f"[{unit_name}] has been upgraded for [{opp.cost}] {currency}."

    return Notification(
        agent_id=agent_id,
        category=opp.category,
        text=text,
        turn=world.turn,
        settlement_id=settlement_id,
    )


def _settlement_at(world: World, agent_id: str, position) -> Optional[int]:
    for settlement in owned_settlements(world, agent_id):
        if settlement.position == position:
            return settlement.id
    return None
