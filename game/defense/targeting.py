"""
Click -> turret launch resolution
"""

from __future__ import annotations

import logging
from typing import Optional

from . import config
from .entities import Interceptor, Point
from .store import EntityStore
from .utils import distance

logger = logging.getLogger(__name__)


def nearest_turret(store: EntityStore, x: float, y: float) -> Optional[int]:
    """Index of the closest active turret with ammo left.

    Ties keep the lowest index (left to right).
    """
    best_index = None
    best_dist = float("inf")
    for index, turret in enumerate(store.turrets):
        if not turret.active or turret.ammo <= 0:
            continue
        d = distance(turret.x, turret.y, x, y)
        if d < best_dist:
            best_dist = d
            best_index = index
    return best_index


def launch(store: EntityStore, x: float, y: float) -> Optional[Interceptor]:
    index = nearest_turret(store, x, y)
    if index is None:
        return None

    turret = store.turrets[index]
    turret.ammo -= 1
    inter = Interceptor(
        id=store.next_id(),
        start=Point(turret.x, turret.y),
        target=Point(x, y),
        current=Point(turret.x, turret.y),
        speed=config.INTERCEPTOR_SPEED,
        turret_index=index,
    )
    store.interceptors.append(inter)
    store.launches += 1
    logger.debug("Turret %d fired at (%.1f, %.1f), %d left", index, x, y, turret.ammo)
    return inter
