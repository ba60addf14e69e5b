#!/usr/bin/env python3
"""
Opportunity scanners, one per spending category.

Each scanner reads the world for one agent and returns the costed, eligible
opportunities of its category, cheapest first (modernization keeps unit order).
Anything ineligible or without a price is simply left out.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from allocator.helper.world_helpers import (
    available_items,
    by_population,
    gold_buy_cost,
    hex_distance,
    is_claimable,
    known_minor_agents,
    owned_units,
    parcel_gold_cost,
    parcels_in_range,
    productive_settlements,
    purchase_allowed,
    resource_stock,
    successor_type,
    unit_type_of,
)
from allocator.models import ALLOCATION_CONFIG, AllocationSettings
from allocator.models import Opportunity, Parcel, Settlement, SpendingCategory, World


def _cheapest_first(opportunities: List[Opportunity]) -> List[Opportunity]:
    # sorted() is stable: equal costs keep discovery order
    return sorted(opportunities, key=lambda o: o.cost)


def _scan_settlement_items(
    world: World,
    agent_id: str,
    category: SpendingCategory,
    config: AllocationSettings,
) -> List[Opportunity]:
    found: List[Opportunity] = []
    for settlement in by_population(productive_settlements(world, agent_id)):
        for item in available_items(world, settlement):
            if category == SpendingCategory.CONSTRUCTION and item.kind != "building":
                continue
            if category == SpendingCategory.RECRUITMENT and not (
                item.kind == "unit" and item.is_military
            ):
                continue
            if not purchase_allowed(world, settlement, item, config.currency):
                continue
            cost = gold_buy_cost(item, config)
            if cost is None:
                continue
            found.append(
                Opportunity(
                    category=category,
                    cost=cost,
                    settlement_id=settlement.id,
                    item=item.name,
                )
            )
    return _cheapest_first(found)


def scan_construction(
    world: World,
    agent_id: str,
    budget: int,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> List[Opportunity]:
    return _scan_settlement_items(
        world, agent_id, SpendingCategory.CONSTRUCTION, config
    )


def scan_recruitment(
    world: World,
    agent_id: str,
    budget: int,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> List[Opportunity]:
    return _scan_settlement_items(world, agent_id, SpendingCategory.RECRUITMENT, config)


def scan_influence(
    world: World,
    agent_id: str,
    budget: int,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> List[Opportunity]:
    """
    Tiered gifts to known minor polities. The first tier whose influence
    threshold and price both fit wins; a rival gets at most one offer.
    """
    found: List[Opportunity] = []
    for rival_id in sorted(known_minor_agents(world, agent_id)):
        influence = world.agents[rival_id].influence.get(agent_id, 0.0)
        for tier in config.influence.gift_tiers:
            if influence < tier.influence_below and budget >= tier.cost:
                found.append(
                    Opportunity(
                        category=SpendingCategory.INFLUENCE,
                        cost=tier.cost,
                        rival_id=rival_id,
                    )
                )
                break
    return _cheapest_first(found)


def parcel_score(
    world: World,
    parcel: Parcel,
    stock: Dict[str, int],
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> int:
    cfg = config.expansion
    score = 0
    if parcel.natural_feature:
        score += cfg.natural_feature_score
    if parcel.resource:
        resource = world.ruleset.resources.get(parcel.resource)
        kind = resource.kind if resource else "bonus"
        owned = stock.get(parcel.resource, 0)
        if kind == "luxury" and owned == 0:
            score += cfg.luxury_missing_score
        elif kind == "strategic" and owned <= cfg.strategic_scarce_max_stock:
            score += cfg.strategic_scarce_score
        else:
            score += cfg.stocked_resource_score
    return score


def _assign_contested_parcels(
    world: World,
    agent_id: str,
    settlements: List[Settlement],
    radius: int,
) -> Dict[int, List[Parcel]]:
    """Give each claimable parcel to the nearest settlement (lowest id on ties)."""
    nearest: Dict[int, Tuple[int, int]] = {}  # parcel id -> (distance, settlement id)
    for settlement in settlements:
        for parcel in parcels_in_range(world, settlement, radius):
            if not is_claimable(parcel, agent_id):
                continue
            distance = hex_distance(parcel.position, settlement.position)
            best = nearest.get(parcel.id)
            if best is None or distance < best[0]:
                nearest[parcel.id] = (distance, settlement.id)

    assigned: Dict[int, List[Parcel]] = {s.id: [] for s in settlements}
    for parcel_id, (_, settlement_id) in sorted(nearest.items()):
        assigned[settlement_id].append(world.parcels[parcel_id])
    return assigned


def scan_expansion(
    world: World,
    agent_id: str,
    budget: int,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> List[Opportunity]:
    settlements = sorted(
        (s for s in productive_settlements(world, agent_id) if s.can_expand),
        key=lambda s: s.id,
    )
    assigned = _assign_contested_parcels(
        world, agent_id, settlements, config.expansion.search_radius
    )
    stock = resource_stock(world, agent_id)

    found: List[Opportunity] = []
    for settlement in settlements:
        best: Optional[Opportunity] = None
        for parcel in assigned[settlement.id]:
            score = parcel_score(world, parcel, stock, config)
            if score <= 0:
                continue
            cost = parcel_gold_cost(world, settlement, parcel, config)
            if cost > budget:
                continue
            candidate = Opportunity(
                category=SpendingCategory.EXPANSION,
                cost=cost,
                settlement_id=settlement.id,
                parcel_id=parcel.id,
                score=score,
            )
            # parcels arrive in id order, so strict comparison keeps the lowest id
            if best is None or (candidate.score, -candidate.cost) > (
                best.score,
                -best.cost,
            ):
                best = candidate
        if best is not None:
            found.append(best)
    return _cheapest_first(found)


def scan_modernization(
    world: World,
    agent_id: str,
    budget: int,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> List[Opportunity]:
    found: List[Opportunity] = []
    for unit in owned_units(world, agent_id):
        current = unit_type_of(world, unit)
        successor = successor_type(world, unit)
        if current is None or successor is None:
            continue
        found.append(
            Opportunity(
                category=SpendingCategory.MODERNIZATION,
                cost=max(0, successor.cost - current.cost),
                unit_id=unit.id,
            )
        )
    return found


def scan(
    category: SpendingCategory,
    world: World,
    agent_id: str,
    budget: int,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> List[Opportunity]:
    if category == SpendingCategory.CONSTRUCTION:
        return scan_construction(world, agent_id, budget, config)
    if category == SpendingCategory.RECRUITMENT:
        return scan_recruitment(world, agent_id, budget, config)
    if category == SpendingCategory.INFLUENCE:
        return scan_influence(world, agent_id, budget, config)
    if category == SpendingCategory.EXPANSION:
        return scan_expansion(world, agent_id, budget, config)
    if category == SpendingCategory.MODERNIZATION:
        return scan_modernization(world, agent_id, budget, config)
    raise ValueError(f"unknown spending category: {category!r}")
