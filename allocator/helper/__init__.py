from allocator.helper.world_helpers import (
    hex_distance,
    owned_settlements,
    productive_settlements,
    by_population,
    purchase_allowed,
    gold_buy_cost,
    available_items,
    resource_stock,
    parcels_in_range,
    is_claimable,
    parcel_gold_cost,
    unit_type_of,
    successor_type,
    can_upgrade_now,
    owned_units,
    supply_state,
    gift_influence,
    known_minor_agents,
)


__all__ = [
    "hex_distance",
    "owned_settlements",
    "productive_settlements",
    "by_population",
    "purchase_allowed",
    "gold_buy_cost",
    "available_items",
    "resource_stock",
    "parcels_in_range",
    "is_claimable",
    "parcel_gold_cost",
    "unit_type_of",
    "successor_type",
    "can_upgrade_now",
    "owned_units",
    "supply_state",
    "gift_influence",
    "known_minor_agents",
]
