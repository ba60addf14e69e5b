#!/usr/bin/env python3
from __future__ import annotations

from fractions import Fraction
from typing import Dict, List, Tuple

from allocator.models import ALLOCATION_CONFIG, AllocationSettings
from allocator.models import PersonalityWeights, SpendingCategory, SupplyState, Trait

_TIE_ORDER: Dict[SpendingCategory, int] = {
    category: idx for idx, category in enumerate(SpendingCategory)
}


def _trait(weights: PersonalityWeights, trait: Trait) -> float:
    return max(0.0, float(weights.get(trait.value, 0.0)))


def base_weights(weights: PersonalityWeights) -> Dict[SpendingCategory, float]:
    """Personality-derived weight of each category before supply adjustment."""
    militaristic = _trait(weights, Trait.MILITARISTIC)
    return {
        SpendingCategory.RECRUITMENT: militaristic,
        SpendingCategory.INFLUENCE: (
            _trait(weights, Trait.DIPLOMATIC) + _trait(weights, Trait.COMMERCIAL)
        )
        / 2.0,
        SpendingCategory.CONSTRUCTION: (
            _trait(weights, Trait.INDUSTRIAL)
            + _trait(weights, Trait.SCIENTIFIC)
            + _trait(weights, Trait.CULTURAL)
        )
        / 3.0,
        SpendingCategory.EXPANSION: _trait(weights, Trait.EXPANSIVE),
        SpendingCategory.MODERNIZATION: militaristic,
    }


def _exact(value: float) -> Fraction:
    # decimal text, so 0.2 is 1/5 rather than its binary neighbour
    return Fraction(str(value))


def _exact_supply_ratio(supply: SupplyState) -> Fraction:
    if supply.max_military_supply <= 0:
        return Fraction(0)
    return Fraction(supply.current_military_count, supply.max_military_supply)


def _exact_target_ratio(weights: PersonalityWeights, config: AllocationSettings) -> Fraction:
    cfg = config.priority
    scale = _exact(cfg.trait_scale)
    focus = min(_exact(_trait(weights, Trait.MILITARISTIC)), scale) / scale
    return _exact(cfg.supply_target_base) + _exact(cfg.supply_target_span) * focus


def supply_ratio(supply: SupplyState) -> float:
    return float(_exact_supply_ratio(supply))


def target_supply_ratio(
    weights: PersonalityWeights, config: AllocationSettings = ALLOCATION_CONFIG
) -> float:
    return float(_exact_target_ratio(weights, config))


def recruitment_multiplier(
    weights: PersonalityWeights,
    supply: SupplyState,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> float:
    cfg = config.priority
    # compared exactly: a ratio sitting on the target counts as supplied
    if _exact_supply_ratio(supply) < _exact_target_ratio(weights, config):
        return cfg.under_supplied_multiplier
    return cfg.over_supplied_multiplier


def rank_categories(
    weights: PersonalityWeights,
    supply: SupplyState,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> List[Tuple[SpendingCategory, float]]:
    """
    Rank the five spending categories, highest weight first.
    Equal weights fall back to the declaration order of SpendingCategory.
    """
    category_weights = base_weights(weights)
    category_weights[SpendingCategory.RECRUITMENT] *= recruitment_multiplier(
        weights, supply, config
    )
    ranked = sorted(
        category_weights.items(), key=lambda kv: (-kv[1], _TIE_ORDER[kv[0]])
    )
    return ranked
