"""Builders for hand-placed entities."""
from game.defense.entities import Explosion, Point, Rocket
from game.defense.store import EntityStore


def make_rocket(store: EntityStore, start, end, current=None, speed: float = 1.35) -> Rocket:
    rocket = Rocket(
        id=store.next_id(),
        start=Point(*start),
        end=Point(*end),
        current=Point(*(current if current is not None else start)),
        speed=speed,
        color=(208, 0, 255),
    )
    store.rockets.append(rocket)
    return rocket


def make_explosion(store: EntityStore, pos, radius: float, max_radius: float = 75.0,
                   growing: bool = True) -> Explosion:
    explosion = Explosion(id=store.next_id(), pos=Point(*pos), radius=radius,
                          max_radius=max_radius, growing=growing)
    store.explosions.append(explosion)
    return explosion
