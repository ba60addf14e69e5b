#!/usr/bin/env python3
"""
Allocation worker that reads world snapshots from Redis, runs the gold
allocator for every AI-controlled agent once per turn, and publishes the
reports and purchase notifications to Redis streams.
"""
from __future__ import annotations

import json
import time
from typing import List, Optional, Set

import redis
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from allocator.engine import allocate
from allocator.infra.notification_stream import RedisNotificationStream
from allocator.models import NOTIFICATION_SETTINGS, AllocationReport, World
from allocator.state_utils import report_payload, world_from_snapshot


class WorkerConfig(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False)

    redis_url: str = Field(
        default_factory=lambda: str(NOTIFICATION_SETTINGS.redis_url),
        alias="REDIS_URL",
    )
    snapshot_key: str = Field(default="allocator:snapshot", alias="SNAPSHOT_KEY")
    report_stream: str = Field(default="allocator:reports", alias="REPORT_STREAM")
    human_agents_key: str = Field(default="allocator:human_agents", alias="HUMAN_AGENTS_KEY")
    poll_interval: float = Field(default=1.0, alias="ALLOCATOR_POLL_INTERVAL")
    run_once: bool = Field(default=False, alias="ALLOCATOR_RUN_ONCE")


_CONFIG = WorkerConfig()


def _load_snapshot(client: redis.Redis, config: WorkerConfig) -> Optional[dict]:
    data = client.hget(config.snapshot_key, "data")
    if not data:
        return None
    return json.loads(data)


def _get_human_agents(client: redis.Redis, config: WorkerConfig) -> Set[str]:
    return set(client.smembers(config.human_agents_key) or [])


def run_turn(
    world: World,
    human_agents: Set[str],
    notifications: RedisNotificationStream,
    reports: RedisNotificationStream,
) -> List[AllocationReport]:
    """Allocate for every AI agent in id order and publish the reports."""
    out: List[AllocationReport] = []
    for agent_id in sorted(world.agents):
        agent = world.agents[agent_id]
        if agent.is_minor or agent_id in human_agents:
            continue
        report = allocate(world, agent_id, hooks=[notifications])
        reports.append(report_payload(report, turn=world.turn))
        out.append(report)
    return out


def main() -> None:
    client = redis.from_url(_CONFIG.redis_url, decode_responses=True)
    notifications = RedisNotificationStream(client=client)
    reports = RedisNotificationStream(stream=_CONFIG.report_stream, client=client)
    last_turn = -1
    print(f"[allocator-worker] starting poll={_CONFIG.poll_interval}s")
    while True:
        snapshot = _load_snapshot(client, _CONFIG)
        if snapshot is None:
            if _CONFIG.run_once:
                print("[allocator-worker] no snapshot available")
                return
            time.sleep(_CONFIG.poll_interval)
            continue

        world = world_from_snapshot(snapshot)
        if world.turn < last_turn:
            last_turn = -1  # new game
        if world.turn > last_turn:
            done = run_turn(
                world, _get_human_agents(client, _CONFIG), notifications, reports
            )
            spent = sum(r.spent for r in done)
            print(
                f"[allocator-worker] turn={world.turn} agents={len(done)} spent={spent}"
            )
            last_turn = world.turn

        if _CONFIG.run_once:
            return
        time.sleep(_CONFIG.poll_interval)


if __name__ == "__main__":
    main()
