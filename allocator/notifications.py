#!/usr/bin/env python3
from __future__ import annotations

from typing import Callable, Iterable

from allocator.models import Notification, World

NotificationHook = Callable[[Notification], None]


def world_log_hook(world: World) -> NotificationHook:
    """Default sink: keep notifications on the world for the UI to pick up."""

    def _append(notification: Notification) -> None:
        world.notifications.append(notification)

    return _append


def emit(hooks: Iterable[NotificationHook], notification: Notification) -> None:
    """Deliver to every hook; a failing hook never stops the allocation cycle."""
    for hook in hooks:
        try:
            hook(notification)
        except Exception as exc:
            print(f"[allocator] notification hook failed: {exc}")


def emit_built(
    hooks: Iterable[NotificationHook], build: Callable[[], Notification]
) -> None:
    """Build the message and deliver it; a failure in either is reported and dropped."""
    try:
        notification = build()
    except Exception as exc:
        print(f"[allocator] notification could not be built: {exc}")
        return
    emit(hooks, notification)
