"""
Impact, detonation and blast resolution

Order inside one tick:
  1. rockets that reached the ground explode and flatten the strip below them
  2. interceptors that reached their click point detonate there
  3. every live explosion grows/shrinks, then destroys rockets inside it;
     each kill spawns a chained full-size explosion
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, List

from . import config
from .entities import Explosion, Interceptor, Point, Rocket
from .store import EntityStore
from .utils import distance

logger = logging.getLogger(__name__)


def make_explosion(store: EntityStore, pos: Point, max_radius: float) -> Explosion:
    explosion = Explosion(
        id=store.next_id(),
        pos=pos.copy(),
        radius=config.EXPLOSION_START_RADIUS,
        max_radius=max_radius,
    )
    store.explosions.append(explosion)
    return explosion


def resolve_ground_impacts(store: EntityStore, landed: Iterable[Rocket], rng: random.Random) -> None:
    landed_ids = set()
    for rocket in landed:
        landed_ids.add(rocket.id)
        pos = rocket.current
        make_explosion(store, pos, config.IMPACT_MAX_RADIUS)
        store.emit_particles(pos.x, pos.y, rocket.color, config.IMPACT_PARTICLES, rng)
        store.pulse_shake(config.IMPACT_SHAKE)
        store.impacts += 1

        # horizontal strip only, height is not checked
        for city in store.cities:
            if city.active and abs(city.x - pos.x) < config.KILL_STRIP:
                city.active = False
                logger.info("City at x=%.1f destroyed", city.x)
        for turret in store.turrets:
            if turret.active and abs(turret.x - pos.x) < config.KILL_STRIP:
                turret.active = False
                logger.info("Turret at x=%.1f destroyed", turret.x)

    if landed_ids:
        store.rockets = [r for r in store.rockets if r.id not in landed_ids]


def resolve_detonations(store: EntityStore, detonated: Iterable[Interceptor]) -> None:
    detonated_ids = set()
    for inter in detonated:
        detonated_ids.add(inter.id)
        # blast at the click point, not where the interceptor overshot to
        make_explosion(store, inter.target, config.EXPLOSION_MAX_RADIUS)

    if detonated_ids:
        store.interceptors = [i for i in store.interceptors if i.id not in detonated_ids]


def update_explosion(explosion: Explosion) -> None:
    if explosion.growing:
        explosion.radius = min(explosion.radius + config.EXPLOSION_SPEED, explosion.max_radius)
        if explosion.radius >= explosion.max_radius:
            explosion.growing = False
    else:
        explosion.radius = max(0.0, explosion.radius - config.EXPLOSION_SPEED * config.EXPLOSION_SHRINK_FACTOR)
        explosion.alpha -= config.EXPLOSION_FADE


def destroy_rocket(store: EntityStore, rocket: Rocket, rng: random.Random) -> None:
    pos = rocket.current
    store.score += config.ROCKET_SCORE
    store.kills += 1
    store.emit_text(pos.x, pos.y, f"+{config.ROCKET_SCORE}", config.CITY_C)
    store.emit_particles(pos.x, pos.y, config.WHITE_C, config.KILL_PARTICLES, rng)
    make_explosion(store, pos, config.EXPLOSION_MAX_RADIUS)


def resolve_explosions(store: EntityStore, rng: random.Random) -> None:
    # chained explosions appended during the pass start updating next tick
    current: List[Explosion] = list(store.explosions)
    for explosion in current:
        update_explosion(explosion)

        survivors = []
        for rocket in store.rockets:
            d = distance(rocket.current.x, rocket.current.y, explosion.pos.x, explosion.pos.y)
            if d < explosion.radius:
                destroy_rocket(store, rocket, rng)
            else:
                survivors.append(rocket)
        store.rockets = survivors

    spent = {e.id for e in current if e.radius <= 0 or e.alpha <= 0}
    if spent:
        store.explosions = [e for e in store.explosions if e.id not in spent]


def step(store: EntityStore, landed: List[Rocket], detonated: List[Interceptor], rng: random.Random) -> None:
    resolve_ground_impacts(store, landed, rng)
    resolve_detonations(store, detonated)
    resolve_explosions(store, rng)
