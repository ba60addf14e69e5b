#!/usr/bin/env python3
"""
Gold allocation for one AI agent per decision cycle.

Categories are ranked once from the agent's personality and military supply,
then visited exactly once each in that order. Inside a category the scanner's
opportunities are bought greedily while the budget covers them. The budget is
threaded through the loop and committed to the treasury once per purchase.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from allocator.executor import describe_purchase, execute
from allocator.helper.world_helpers import supply_state
from allocator.models import (
    ALLOCATION_CONFIG,
    NOTIFICATION_SETTINGS,
    AllocationReport,
    AllocationSettings,
    Transaction,
    World,
)
from allocator.notifications import NotificationHook, emit_built, world_log_hook
from allocator.priority import rank_categories
from allocator.scanners import scan


def allocate(
    world: World,
    agent_id: str,
    hooks: Optional[Iterable[NotificationHook]] = None,
    config: AllocationSettings = ALLOCATION_CONFIG,
) -> AllocationReport:
    agent = world.agents[agent_id]
    hook_list: List[NotificationHook] = (
        list(hooks) if hooks is not None else [world_log_hook(world)]
    )

    ranking = rank_categories(
        agent.personality, supply_state(world, agent_id), config
    )
    budget = max(0, agent.treasury)
    report = AllocationReport(
        agent_id=agent_id,
        ranking=ranking,
        initial_budget=budget,
        remaining_budget=budget,
    )

    for category, _ in ranking:
        if budget <= 0:
            break
        report.categories_visited.append(category)
        for opp in scan(category, world, agent_id, budget, config):
            if budget <= 0:
                break
            if budget < opp.cost:
                continue
            if not execute(world, agent_id, opp, config):
                report.failures.append(opp)
                continue
            report.transactions.append(
                Transaction(
                    category=category,
                    target=opp.describe(),
                    cost=opp.cost,
                    budget_before=budget,
                    opportunity=opp,
                )
            )
            budget -= opp.cost
            emit_built(
                hook_list,
                lambda: describe_purchase(world, agent_id, opp, config.currency),
            )

    report.remaining_budget = budget
    if NOTIFICATION_SETTINGS.verbose:
        order = ",".join(c.value for c in report.category_order)
        print(
            f"[allocator] turn={world.turn} agent={agent_id} order={order} "
            f"bought={len(report.transactions)} failed={len(report.failures)} "
            f"budget={report.initial_budget}->{budget}"
        )
    return report
