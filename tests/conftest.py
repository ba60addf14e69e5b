"""Shared world builders for allocator tests."""

import pytest

from allocator.models import (
    Agent,
    ConstructionItem,
    MapUnit,
    Parcel,
    ResourceDef,
    Ruleset,
    Settlement,
    UnitType,
    World,
)


def make_ruleset():
    return Ruleset(
        constructions={
            "Granary": ConstructionItem(name="Granary", kind="building", production_cost=60),
            "Library": ConstructionItem(name="Library", kind="building", production_cost=75),
            "Wealth": ConstructionItem(
                name="Wealth", kind="building", production_cost=1, is_perpetual=True
            ),
            "Palace": ConstructionItem(
                name="Palace", kind="building", production_cost=100, purchasable_with=set()
            ),
            "Monument": ConstructionItem(name="Monument", kind="building", production_cost=None),
            "Warrior": ConstructionItem(
                name="Warrior", kind="unit", production_cost=40,
                is_military=True, unit_type="Warrior",
            ),
            "Settler": ConstructionItem(
                name="Settler", kind="unit", production_cost=106,
                is_military=False, unit_type="Settler",
            ),
        },
        unit_types={
            "Warrior": UnitType(name="Warrior", cost=40, upgrades_to=["Swordsman"]),
            "Swordsman": UnitType(name="Swordsman", cost=75, upgrades_to=["Longswordsman"]),
            "Longswordsman": UnitType(name="Longswordsman", cost=120),
            "Settler": UnitType(name="Settler", cost=106, is_military=False),
            "Archer": UnitType(name="Archer", cost=80, upgrades_to=["Slinger"]),
            "Slinger": UnitType(name="Slinger", cost=50),
            "Scout": UnitType(name="Scout", cost=25, upgrades_to=["NotInRuleset"]),
        },
        resources={
            "Silk": ResourceDef(name="Silk", kind="luxury"),
            "Iron": ResourceDef(name="Iron", kind="strategic"),
            "Wheat": ResourceDef(name="Wheat", kind="bonus"),
        },
    )


def make_world(treasury=1000, personality=None, **agent_kwargs):
    unit_supply = agent_kwargs.pop("unit_supply", 10)
    agent = Agent(
        id="A",
        name="Aurelia",
        treasury=treasury,
        personality=personality or {},
        unit_supply=unit_supply,
        **agent_kwargs,
    )
    return World(turn=1, agents={"A": agent}, ruleset=make_ruleset())


def add_settlement(world, sid, population=5, position=(0, 0), owner="A", **kwargs):
    name = kwargs.pop("name", f"Town {sid}")
    settlement = Settlement(
        id=sid,
        owner=owner,
        name=name,
        population=population,
        position=position,
        **kwargs,
    )
    world.settlements[sid] = settlement
    return settlement


def add_unit(world, uid, unit_type, owner="A", position=(0, 0), **kwargs):
    unit = MapUnit(id=uid, owner=owner, unit_type=unit_type, position=position, **kwargs)
    world.units[uid] = unit
    world.next_unit_id = max(world.next_unit_id, uid + 1)
    return unit


def add_parcel(world, pid, position, visible_to=("A",), **kwargs):
    parcel = Parcel(id=pid, position=position, visible_to=set(visible_to), **kwargs)
    world.parcels[pid] = parcel
    return parcel


def add_minor(world, rid, influence=0.0, known_by="A"):
    world.agents[rid] = Agent(
        id=rid, name=f"City-State {rid}", is_minor=True, influence={known_by: influence}
    )
    world.agents[known_by].known_agents.append(rid)
    return world.agents[rid]


@pytest.fixture
def world():
    return make_world()
