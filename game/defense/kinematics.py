"""
Straight-line projectile motion

Rockets and interceptors move along the fixed start->destination line at a
constant per-tick speed. Arrival is a coarse threshold on y, so a fast
projectile may overshoot its destination by up to one tick of travel.
"""

from __future__ import annotations

from typing import List, Tuple

from .entities import Interceptor, Point, Rocket
from .store import EntityStore
from .utils import normalize


def advance(current: Point, start: Point, dest: Point, speed: float) -> bool:
    """Move `current` one tick toward `dest`; False if the path is too short to have a direction"""
    nx, ny = normalize(dest.x - start.x, dest.y - start.y)
    if nx == 0.0 and ny == 0.0:
        return False
    current.x += nx * speed
    current.y += ny * speed
    return True


def rocket_arrived(rocket: Rocket) -> bool:
    return rocket.current.y >= rocket.end.y


def interceptor_arrived(inter: Interceptor) -> bool:
    # interceptors fly upward
    return inter.current.y <= inter.target.y


def step(store: EntityStore) -> Tuple[List[Rocket], List[Interceptor]]:
    """Advance every rocket and interceptor; return the ones that arrived this tick"""
    landed: List[Rocket] = []
    for rocket in store.rockets:
        # a degenerate path counts as already arrived
        if not advance(rocket.current, rocket.start, rocket.end, rocket.speed) or rocket_arrived(rocket):
            landed.append(rocket)

    detonated: List[Interceptor] = []
    for inter in store.interceptors:
        if not advance(inter.current, inter.start, inter.target, inter.speed) or interceptor_arrived(inter):
            detonated.append(inter)

    return landed, detonated
