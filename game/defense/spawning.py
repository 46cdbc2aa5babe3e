"""
Rocket spawn scheduling, scaled by round
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from . import config
from .entities import Point, Rocket
from .store import EntityStore

logger = logging.getLogger(__name__)


def rocket_speed(round_no: int) -> float:
    return config.ROCKET_BASE_SPEED + round_no * config.ROCKET_SPEED_PER_ROUND


def spawn_interval_ms(round_no: int) -> float:
    return max(config.SPAWN_MIN_INTERVAL_MS,
               config.SPAWN_BASE_INTERVAL_MS - round_no * config.SPAWN_INTERVAL_STEP_MS)


def spawn_rocket(store: EntityStore, rng: random.Random) -> Optional[Rocket]:
    """Launch one rocket at a random active turret or city, if any remain"""
    start_x = rng.random() * store.width
    targets = [c for c in store.cities if c.active] + [t for t in store.turrets if t.active]
    if not targets:
        return None
    target = targets[int(rng.random() * len(targets))]

    store.emit_warning(start_x)
    rocket = Rocket(
        id=store.next_id(),
        start=Point(start_x, 0.0),
        end=Point(target.x, target.y),
        current=Point(start_x, 0.0),
        speed=rocket_speed(store.round),
        color=config.ROCKET_C,
    )
    store.rockets.append(rocket)
    logger.debug("Spawned rocket #%d at x=%.1f -> (%.1f, %.1f)", rocket.id, start_x, target.x, target.y)
    return rocket


def step(store: EntityStore, rng: random.Random) -> Optional[Rocket]:
    """Spawn a rocket when the simulated clock has passed the scheduled threshold"""
    if store.clock_ms <= store.next_spawn_ms:
        return None
    rocket = spawn_rocket(store, rng)
    store.next_spawn_ms = store.clock_ms + spawn_interval_ms(store.round)
    return rocket
