from .allocation_config import ALLOCATION_CONFIG, AllocationSettings
from .redis_config import NOTIFICATION_SETTINGS, NotificationSettings
from .world_config import (
    Agent,
    Settlement,
    ConstructionItem,
    UnitType,
    MapUnit,
    ResourceDef,
    Parcel,
    Ruleset,
    World,
)
from .allocation_types import (
    SpendingCategory,
    Trait,
    PersonalityWeights,
    SupplyState,
    Opportunity,
    Transaction,
    Notification,
    AllocationReport,
)

__all__ = [
    "ALLOCATION_CONFIG",
    "AllocationSettings",
    "NOTIFICATION_SETTINGS",
    "NotificationSettings",
    "Agent",
    "Settlement",
    "ConstructionItem",
    "UnitType",
    "MapUnit",
    "ResourceDef",
    "Parcel",
    "Ruleset",
    "World",
    "SpendingCategory",
    "Trait",
    "PersonalityWeights",
    "SupplyState",
    "Opportunity",
    "Transaction",
    "Notification",
    "AllocationReport",
]
