from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

# trait -> weight, 0..10
PersonalityWeights = Dict[str, float]


class SpendingCategory(str, Enum):
    # declaration order is the tie-break order for equal weights
    RECRUITMENT = "recruitment"
    INFLUENCE = "influence"
    CONSTRUCTION = "construction"
    EXPANSION = "expansion"
    MODERNIZATION = "modernization"


class Trait(str, Enum):
    MILITARISTIC = "militaristic"
    DIPLOMATIC = "diplomatic"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
    SCIENTIFIC = "scientific"
    CULTURAL = "cultural"
    EXPANSIVE = "expansive"


@dataclass(frozen=True)
class SupplyState:
    current_military_count: int
    max_military_supply: int


@dataclass(frozen=True)
class Opportunity:
    """One costed, already-eligible spend candidate produced by a scanner."""

    category: SpendingCategory
    cost: int
    settlement_id: Optional[int] = None
    item: Optional[str] = None  # construction item name
    parcel_id: Optional[int] = None
    unit_id: Optional[int] = None
    rival_id: Optional[str] = None
    score: int = 0  # desirability, expansion only

    def describe(self) -> str:
        parts: List[str] = []
        if self.settlement_id is not None:
            parts.append(f"settlement #{self.settlement_id}")
        if self.item is not None:
            parts.append(self.item)
        if self.parcel_id is not None:
            parts.append(f"parcel #{self.parcel_id}")
        if self.unit_id is not None:
            parts.append(f"unit #{self.unit_id}")
        if self.rival_id is not None:
            parts.append(f"rival {self.rival_id}")
        return " / ".join(parts) or self.category.value


@dataclass(frozen=True)
class Transaction:
    category: SpendingCategory
    target: str
    cost: int
    budget_before: int
    opportunity: Opportunity


@dataclass(frozen=True)
class Notification:
    agent_id: str
    category: SpendingCategory
    text: str
    turn: int
    settlement_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent_id": self.agent_id,
            "category": self.category.value,
            "text": self.text,
            "turn": self.turn,
            "settlement_id": self.settlement_id,
        }


@dataclass
class AllocationReport:
    """Outcome of one allocation cycle, for observability and tests."""

    agent_id: str
    ranking: List[Tuple[SpendingCategory, float]]
    initial_budget: int
    remaining_budget: int
    transactions: List[Transaction] = field(default_factory=list)
    failures: List[Opportunity] = field(default_factory=list)
    categories_visited: List[SpendingCategory] = field(default_factory=list)

    @property
    def spent(self) -> int:
        return self.initial_budget - self.remaining_budget

    @property
    def category_order(self) -> List[SpendingCategory]:
        return [category for category, _ in self.ranking]
