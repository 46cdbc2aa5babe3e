"""
EntityStore - the per-match simulation state aggregate

Every component step function receives the same ``EntityStore`` by
reference; nothing else keeps its own copy of the entity lists.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Tuple

from . import config
from .entities import (
    City,
    Color,
    Explosion,
    FloatingText,
    GameMode,
    Interceptor,
    MatchState,
    Particle,
    Point,
    Rocket,
    Turret,
    Warning,
)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the rendering collaborator each frame"""
    width: float
    height: float
    state: MatchState
    mode: GameMode
    score: int
    round: int
    high_score: int
    universe_mode: bool
    shake: float
    turrets: Tuple[Turret, ...]
    cities: Tuple[City, ...]
    rockets: Tuple[Rocket, ...]
    interceptors: Tuple[Interceptor, ...]
    explosions: Tuple[Explosion, ...]
    particles: Tuple[Particle, ...]
    floating_texts: Tuple[FloatingText, ...]
    warnings: Tuple[Warning, ...]

    @property
    def total_ammo(self) -> int:
        return sum(t.ammo for t in self.turrets)


@dataclass
class EntityStore:
    width: float = 800.0
    height: float = 600.0
    state: MatchState = MatchState.START
    mode: GameMode = GameMode.CLASSIC

    # Scalars
    score: int = 0
    round: int = 1
    clock_ms: float = 0.0
    next_spawn_ms: float = 0.0
    shake: float = 0.0

    # Milestone latches
    refilled_at_universe: bool = False
    last_refill_score: int = 0

    # Per-tick counters, cleared at the start of every tick
    kills: int = 0
    impacts: int = 0
    launches: int = 0

    turrets: List[Turret] = field(default_factory=list)
    cities: List[City] = field(default_factory=list)
    rockets: List[Rocket] = field(default_factory=list)
    interceptors: List[Interceptor] = field(default_factory=list)
    explosions: List[Explosion] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    floating_texts: List[FloatingText] = field(default_factory=list)
    warnings: List[Warning] = field(default_factory=list)

    _id_counter: int = 0

    def next_id(self) -> int:
        self._id_counter += 1
        return self._id_counter

    # ----------------------------
    # Match lifecycle
    # ----------------------------

    def reset(self, width: float, height: float) -> None:
        """Clear transient entities, counters and latches, and lay out a fresh field"""
        self.width = width
        self.height = height
        self.score = 0
        self.round = 1
        self.clock_ms = 0.0
        self.next_spawn_ms = 0.0
        self.shake = 0.0
        self.refilled_at_universe = False
        self.last_refill_score = 0
        self.clear_tick_counters()
        self.rockets = []
        self.interceptors = []
        self.explosions = []
        self.particles = []
        self.floating_texts = []
        self.warnings = []
        self._id_counter = 0
        self.layout()

    def layout(self) -> None:
        ground_y = self.ground_y
        self.turrets = [
            Turret(x=config.TURRET_EDGE_OFFSET, y=ground_y,
                   ammo=config.SIDE_TURRET_AMMO, max_ammo=config.SIDE_TURRET_AMMO),
            Turret(x=self.width / 2, y=ground_y,
                   ammo=config.CENTER_TURRET_AMMO, max_ammo=config.CENTER_TURRET_AMMO),
            Turret(x=self.width - config.TURRET_EDGE_OFFSET, y=ground_y,
                   ammo=config.SIDE_TURRET_AMMO, max_ammo=config.SIDE_TURRET_AMMO),
        ]
        self.cities = [City(x=self.width * f, y=ground_y) for f in config.CITY_FRACTIONS]

    @property
    def ground_y(self) -> float:
        return self.height - config.GROUND_MARGIN

    @property
    def universe_mode(self) -> bool:
        return self.score >= config.UNIVERSE_SCORE

    def clear_tick_counters(self) -> None:
        self.kills = 0
        self.impacts = 0
        self.launches = 0

    def active_turrets(self) -> List[Turret]:
        return [t for t in self.turrets if t.active]

    def refill_active_turrets(self) -> List[Turret]:
        refilled = self.active_turrets()
        for t in refilled:
            t.refill()
        return refilled

    # ----------------------------
    # Visual emitters
    # ----------------------------

    def emit_particles(self, x: float, y: float, color: Color, count: int, rng: random.Random) -> None:
        for _ in range(count):
            self.particles.append(Particle(
                id=self.next_id(),
                x=x,
                y=y,
                vx=(rng.random() - 0.5) * 8,
                vy=(rng.random() - 0.5) * 8,
                life=1.0,
                color=color,
                size=rng.random() * 4 + 1,
            ))

    def emit_text(self, x: float, y: float, text: str, color: Color) -> None:
        self.floating_texts.append(FloatingText(id=self.next_id(), x=x, y=y, text=text, life=1.0, color=color))

    def emit_warning(self, x: float) -> None:
        self.warnings.append(Warning(id=self.next_id(), x=x, life=1.0))

    def pulse_shake(self, amount: float) -> None:
        self.shake = amount

    # ----------------------------
    # Read-only view
    # ----------------------------

    def snapshot(self, high_score: int = 0) -> Snapshot:
        def frozen(items):
            return tuple(_copy_entity(e) for e in items)

        return Snapshot(
            width=self.width,
            height=self.height,
            state=self.state,
            mode=self.mode,
            score=self.score,
            round=self.round,
            high_score=high_score,
            universe_mode=self.universe_mode,
            shake=self.shake,
            turrets=frozen(self.turrets),
            cities=frozen(self.cities),
            rockets=frozen(self.rockets),
            interceptors=frozen(self.interceptors),
            explosions=frozen(self.explosions),
            particles=frozen(self.particles),
            floating_texts=frozen(self.floating_texts),
            warnings=frozen(self.warnings),
        )


def _copy_entity(entity):
    # Point fields are mutable, so copy them too
    values = {}
    for name, value in vars(entity).items():
        values[name] = value.copy() if isinstance(value, Point) else value
    return type(entity)(**values)
