from dataclasses import dataclass, field
from typing import Optional, List, Dict, Set, Tuple

from .allocation_types import Notification

# axial hex coordinates (q, r)
Position = Tuple[int, int]


@dataclass
class Agent:
    id: str
    name: str
    treasury: int = 0
    personality: Dict[str, float] = field(default_factory=dict)  # trait -> 0..10
    is_minor: bool = False  # minor polity (city-state), never allocates
    known_agents: List[str] = field(default_factory=list)
    influence: Dict[str, float] = field(default_factory=dict)  # donor id -> influence
    unit_supply: int = 0  # max supported military units
    era: int = 0


@dataclass
class Settlement:
    id: int
    owner: str
    name: str
    population: int
    position: Position
    is_puppet: bool = False
    is_razing: bool = False
    can_expand: bool = True
    available: List[str] = field(default_factory=list)  # construction item names
    built: Set[str] = field(default_factory=set)
    claimed_parcels: int = 0


@dataclass
class ConstructionItem:
    name: str
    kind: str = "building"  # "building" | "unit"
    production_cost: Optional[int] = None
    purchasable_with: Set[str] = field(default_factory=lambda: {"gold"})
    is_perpetual: bool = False
    is_military: bool = False
    unit_type: Optional[str] = None  # spawned unit type for kind == "unit"


@dataclass
class UnitType:
    name: str
    cost: int
    is_military: bool = True
    upgrades_to: List[str] = field(default_factory=list)


@dataclass
class MapUnit:
    id: int
    owner: str
    unit_type: str
    position: Position
    in_friendly_territory: bool = True
    movement_left: float = 2.0


@dataclass
class ResourceDef:
    name: str
    kind: str  # "luxury" | "strategic" | "bonus"


@dataclass
class Parcel:
    id: int
    position: Position
    owner: Optional[str] = None  # agent id or None
    settlement_id: Optional[int] = None  # owning settlement
    visible_to: Set[str] = field(default_factory=set)
    natural_feature: Optional[str] = None
    resource: Optional[str] = None
    resource_amount: int = 1


@dataclass
class Ruleset:
    constructions: Dict[str, ConstructionItem] = field(default_factory=dict)
    unit_types: Dict[str, UnitType] = field(default_factory=dict)
    resources: Dict[str, ResourceDef] = field(default_factory=dict)


@dataclass
class World:
    turn: int
    agents: Dict[str, Agent]
    settlements: Dict[int, Settlement] = field(default_factory=dict)
    units: Dict[int, MapUnit] = field(default_factory=dict)
    parcels: Dict[int, Parcel] = field(default_factory=dict)
    ruleset: Ruleset = field(default_factory=Ruleset)
    notifications: List[Notification] = field(default_factory=list)
    next_unit_id: int = 0


