#!/usr/bin/env python3
"""
Mutating capabilities of the simulation state consumed by the allocator:
treasury spending, construction purchase, parcel claims, gifts and upgrades.

Every function reports success with a bool instead of raising, so a failed
purchase leaves the world untouched.
"""
from __future__ import annotations

from allocator.helper.world_helpers import (
    can_upgrade_now,
    gift_influence,
    successor_type,
)
from allocator.models import ALLOCATION_CONFIG, AllocationSettings
from allocator.models import ConstructionItem, MapUnit, Parcel, Settlement, World


def spend(world: World, agent_id: str, amount: int) -> bool:
    agent = world.agents[agent_id]
    if amount < 0 or agent.treasury < amount:
        return False
    agent.treasury -= amount
    return True


def purchase_construction(
    world: World, settlement: Settlement, item: ConstructionItem
) -> bool:
    """Complete an item in a settlement immediately."""
    if item.name not in settlement.available:
        return False
    if item.kind == "unit":
        if item.unit_type is None or item.unit_type not in world.ruleset.unit_types:
            return False
        uid = world.next_unit_id
        world.next_unit_id += 1
        world.units[uid] = MapUnit(
            id=uid,
            owner=settlement.owner,
            unit_type=item.unit_type,
            position=settlement.position,
            in_friendly_territory=True,
            movement_left=0.0,  # freshly bought units wait a turn
        )
        return True
    if item.name in settlement.built:
        return False
    settlement.built.add(item.name)
    settlement.available.remove(item.name)
    return True


def claim_parcel(world: World, settlement: Settlement, parcel: Parcel) -> bool:
    if parcel.owner is not None:
        return False
    parcel.owner = settlement.owner
    parcel.settlement_id = settlement.id
    settlement.claimed_parcels += 1
    return True


def receive_gift(
    world: World,
    donor_id: str,
    recipient_id: str,
    amount: int,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> int:
    """Hand currency to a minor polity; returns the influence gained."""
    recipient = world.agents[recipient_id]
    recipient.treasury += amount
    gained = gift_influence(amount, config)
    recipient.influence[donor_id] = recipient.influence.get(donor_id, 0.0) + gained
    return gained


def upgrade_unit(world: World, unit: MapUnit) -> bool:
    if not can_upgrade_now(world, unit):
        return False
    successor = successor_type(world, unit)
    if successor is None:
        return False
    unit.unit_type = successor.name
    unit.movement_left = 0.0
    return True
