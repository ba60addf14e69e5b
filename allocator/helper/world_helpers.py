#!/usr/bin/env python3
from __future__ import annotations

from typing import Dict, List, Optional

from allocator.models import ALLOCATION_CONFIG, AllocationSettings
from allocator.models import (
    ConstructionItem,
    MapUnit,
    Parcel,
    Settlement,
    SupplyState,
    UnitType,
    World,
)
from allocator.models.world_config import Position


# ---------- Geometry ----------


def hex_distance(a: Position, b: Position) -> int:
    """Aerial distance between two axial hex coordinates."""
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


# ---------- Settlements ----------


def owned_settlements(world: World, agent_id: str) -> List[Settlement]:
    return [s for s in world.settlements.values() if s.owner == agent_id]


def productive_settlements(world: World, agent_id: str) -> List[Settlement]:
    """Settlements that may spend: puppets and settlements being razed are skipped."""
    return [
        s
        for s in owned_settlements(world, agent_id)
        if not s.is_puppet and not s.is_razing
    ]


def by_population(settlements: List[Settlement]) -> List[Settlement]:
    # stable on id so equal populations keep a fixed order
    return sorted(settlements, key=lambda s: (-s.population, s.id))


# ---------- Construction purchase ----------


def purchase_allowed(
    world: World, settlement: Settlement, item: ConstructionItem, currency: str
) -> bool:
    if item.name not in settlement.available:
        return False
    if item.is_perpetual:
        return False
    if currency not in item.purchasable_with:
        return False
    if item.kind == "building" and item.name in settlement.built:
        return False
    if item.kind == "unit" and (
        item.unit_type is None or item.unit_type not in world.ruleset.unit_types
    ):
        return False
    return True


def gold_buy_cost(
    item: ConstructionItem, config: AllocationSettings = ALLOCATION_CONFIG
) -> Optional[int]:
    """Currency price of hurrying an item, or None when it has no production cost."""
    if item.production_cost is None or item.production_cost <= 0:
        return None
    cfg = config.construction
    raw = (cfg.production_multiplier * item.production_cost) ** cfg.exponent
    return int(raw) // cfg.round_to * cfg.round_to


def available_items(world: World, settlement: Settlement) -> List[ConstructionItem]:
    items: List[ConstructionItem] = []
    for name in settlement.available:
        item = world.ruleset.constructions.get(name)
        if item is not None:
            items.append(item)
    return items


# ---------- Territory ----------


def resource_stock(world: World, agent_id: str) -> Dict[str, int]:
    """Units of each resource sitting on parcels the agent owns."""
    stock: Dict[str, int] = {}
    for parcel in world.parcels.values():
        if parcel.owner != agent_id or parcel.resource is None:
            continue
        stock[parcel.resource] = stock.get(parcel.resource, 0) + parcel.resource_amount
    return stock


def parcels_in_range(world: World, settlement: Settlement, radius: int) -> List[Parcel]:
    return [
        p
        for p in world.parcels.values()
        if 0 < hex_distance(p.position, settlement.position) <= radius
    ]


def is_claimable(parcel: Parcel, agent_id: str) -> bool:
    return parcel.owner is None and agent_id in parcel.visible_to


def parcel_gold_cost(
    world: World,
    settlement: Settlement,
    parcel: Parcel,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> int:
    """Distance- and era-sensitive price of claiming a parcel for a settlement."""
    cfg = config.expansion
    distance = hex_distance(settlement.position, parcel.position)
    cost = cfg.base_cost * max(1, distance - 1)
    cost += cfg.claimed_parcel_cost * settlement.claimed_parcels
    era = world.agents[settlement.owner].era
    return int(round(cost * (1.0 + cfg.era_multiplier_step * era)))


# ---------- Units ----------


def unit_type_of(world: World, unit: MapUnit) -> Optional[UnitType]:
    return world.ruleset.unit_types.get(unit.unit_type)


def successor_type(world: World, unit: MapUnit) -> Optional[UnitType]:
    current = unit_type_of(world, unit)
    if current is None:
        return None
    for name in current.upgrades_to:
        successor = world.ruleset.unit_types.get(name)
        if successor is not None:
            return successor
    return None


def can_upgrade_now(world: World, unit: MapUnit) -> bool:
    if successor_type(world, unit) is None:
        return False
    return unit.in_friendly_territory and unit.movement_left > 0


def owned_units(world: World, agent_id: str) -> List[MapUnit]:
    return sorted(
        (u for u in world.units.values() if u.owner == agent_id), key=lambda u: u.id
    )


def supply_state(world: World, agent_id: str) -> SupplyState:
    military = 0
    for unit in owned_units(world, agent_id):
        unit_type = unit_type_of(world, unit)
        if unit_type is not None and unit_type.is_military:
            military += 1
    return SupplyState(
        current_military_count=military,
        max_military_supply=world.agents[agent_id].unit_supply,
    )


# ---------- Diplomacy ----------


def gift_influence(amount: int, config: AllocationSettings = ALLOCATION_CONFIG) -> int:
    """Influence a minor polity grants for a currency gift of the given size."""
    cfg = config.influence
    gained = amount**cfg.gift_exponent / cfg.gift_divisor
    gained -= gained % cfg.gift_step
    return int(max(cfg.gift_minimum, gained))


def known_minor_agents(world: World, agent_id: str) -> List[str]:
    agent = world.agents[agent_id]
    return [
        rid
        for rid in agent.known_agents
        if rid in world.agents and world.agents[rid].is_minor and rid != agent_id
    ]
