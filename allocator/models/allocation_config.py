import json
from pathlib import Path
from pydantic import BaseModel, PositiveInt, PositiveFloat, NonNegativeInt
from pydantic import Field, field_validator  # type: ignore
from typing import Annotated, List

# # NOTE: Each process imports this module once. The loaded config lives
# # in-process only and is read-only for the allocation engine.


class PriorityModifiers(BaseModel):
    trait_scale: PositiveFloat
    supply_target_base: Annotated[float, Field(ge=0, le=1)]
    supply_target_span: Annotated[float, Field(ge=0, le=1)]
    under_supplied_multiplier: PositiveFloat
    over_supplied_multiplier: PositiveFloat


class GiftTier(BaseModel):
    influence_below: float
    cost: PositiveInt


class InfluenceModifiers(BaseModel):
    gift_tiers: Annotated[List[GiftTier], Field(min_length=1)]
    gift_exponent: PositiveFloat
    gift_divisor: PositiveFloat
    gift_step: PositiveInt
    gift_minimum: NonNegativeInt

    @field_validator("gift_tiers")
    @classmethod
    def _tiers_ascending(cls, tiers: List[GiftTier]) -> List[GiftTier]:
        # tiers are checked in order, so thresholds must grow
        thresholds = [t.influence_below for t in tiers]
        if thresholds != sorted(thresholds) or len(set(thresholds)) != len(thresholds):
            raise ValueError("gift_tiers must be ordered by strictly increasing influence_below")
        return tiers


class ExpansionModifiers(BaseModel):
    search_radius: PositiveInt
    natural_feature_score: NonNegativeInt
    luxury_missing_score: NonNegativeInt
    strategic_scarce_score: NonNegativeInt
    strategic_scarce_max_stock: NonNegativeInt
    stocked_resource_score: NonNegativeInt
    base_cost: PositiveInt
    claimed_parcel_cost: NonNegativeInt
    era_multiplier_step: Annotated[float, Field(ge=0)]


class ConstructionModifiers(BaseModel):
    production_multiplier: PositiveFloat
    exponent: PositiveFloat
    round_to: PositiveInt


class AllocationSettings(BaseModel):
    currency: Annotated[str, Field(min_length=1)]
    priority: PriorityModifiers
    influence: InfluenceModifiers
    expansion: ExpansionModifiers
    construction: ConstructionModifiers

    @classmethod
    def load_json(cls, path: str | Path) -> "AllocationSettings":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)


_BASE_DIR = Path(__file__).resolve().parents[1]
_CONFIG_PATH = _BASE_DIR / "config" / "allocation_config.json"

ALLOCATION_CONFIG = AllocationSettings.model_validate_json(
    _CONFIG_PATH.read_text(encoding="utf-8")
)
