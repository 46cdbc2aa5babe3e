"""
DefenseSimulation - match state machine and per-frame tick driver

One ``tick`` runs, in fixed order:
    spawn -> kinematics -> collisions -> transient decay -> progression -> terminal check

All deltas are per tick (frame-rate coupled); the simulated clock only
drives the spawn schedule and advances by ``dt_ms`` per tick, so a test
harness can step the match deterministically.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Union

from . import collisions, config, kinematics, progression, spawning, targeting
from .entities import GameMode, Interceptor, MatchState
from .highscore import HighScoreBook
from .store import EntityStore, Snapshot
from .utils import clamp

logger = logging.getLogger(__name__)


class MatchStateError(RuntimeError):
    """Raised when a match transition is requested from the wrong state"""


def parse_mode(mode: Union[str, GameMode]) -> GameMode:
    if isinstance(mode, GameMode):
        return mode
    try:
        return GameMode(str(mode).lower())
    except ValueError:
        raise ValueError(f"Unknown game mode: {mode!r}") from None


class DefenseSimulation:
    """Owns the match state and drives every component step"""

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        high_scores: Optional[HighScoreBook] = None,
        rng: Optional[random.Random] = None,
        tick_ms: float = config.TICK_MS,
    ):
        self._check_dims(width, height)
        self.rng = rng if rng is not None else random.Random()
        self.tick_ms = tick_ms
        self.high_scores = high_scores if high_scores is not None else HighScoreBook()
        self.high_score = self.high_scores.load()

        self.world = EntityStore(width=width, height=height)
        self.world.layout()

    # ----------------------------
    # Properties
    # ----------------------------

    @property
    def state(self) -> MatchState:
        return self.world.state

    @property
    def mode(self) -> GameMode:
        return self.world.mode

    @property
    def score(self) -> int:
        return self.world.score

    @property
    def round(self) -> int:
        return self.world.round

    @property
    def universe_mode(self) -> bool:
        return self.world.universe_mode

    # ----------------------------
    # Transitions
    # ----------------------------

    def start_game(self, mode: Union[str, GameMode] = GameMode.CLASSIC,
                   width: Optional[float] = None, height: Optional[float] = None) -> None:
        if self.world.state is MatchState.PLAYING:
            raise MatchStateError("Match already in progress")
        game_mode = parse_mode(mode)
        width = self.world.width if width is None else width
        height = self.world.height if height is None else height
        self._check_dims(width, height)

        self.world.reset(width, height)
        self.world.mode = game_mode
        self._set_state(MatchState.PLAYING)
        logger.info("Match started: mode=%s, field=%dx%d", game_mode.value, width, height)

    def restart(self) -> None:
        """Abandon the current match and go back to START"""
        self.world.reset(self.world.width, self.world.height)
        self._set_state(MatchState.START)

    def resize(self, width: float, height: float) -> None:
        self._check_dims(width, height)
        self.world.width = width
        self.world.height = height
        if self.world.state is MatchState.START:
            self.world.layout()

    def _set_state(self, state: MatchState) -> None:
        if state is not self.world.state:
            logger.info("State %s -> %s", self.world.state.value, state.value)
        self.world.state = state

    @staticmethod
    def _check_dims(width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")

    # ----------------------------
    # Input
    # ----------------------------

    def click(self, x: float, y: float) -> Optional[Interceptor]:
        if self.world.state is not MatchState.PLAYING:
            return None
        x = clamp(x, 0.0, self.world.width)
        y = clamp(y, 0.0, self.world.height)
        return targeting.launch(self.world, x, y)

    # ----------------------------
    # Tick
    # ----------------------------

    def tick(self, dt_ms: Optional[float] = None) -> bool:
        """Run one frame; returns False when the match is not running"""
        world = self.world
        if world.state is not MatchState.PLAYING:
            return False

        world.clear_tick_counters()
        world.clock_ms += self.tick_ms if dt_ms is None else dt_ms
        if world.shake > 0:
            world.shake = max(0.0, world.shake - config.SHAKE_DECAY)

        spawning.step(world, self.rng)
        landed, detonated = kinematics.step(world)
        collisions.step(world, landed, detonated, self.rng)
        self._decay_transients()
        progression.step(world)

        outcome = progression.terminal_state(world)
        if outcome is MatchState.LOST:
            self.high_score = self.high_scores.record(world.score, self.high_score)
        if outcome is not None:
            self._set_state(outcome)
        return True

    def _decay_transients(self) -> None:
        world = self.world
        for p in world.particles:
            p.x += p.vx
            p.y += p.vy
            p.life -= config.LIFE_DECAY
        world.particles = [p for p in world.particles if p.life > 0]

        for t in world.floating_texts:
            t.y -= config.TEXT_RISE
            t.life -= config.LIFE_DECAY
        world.floating_texts = [t for t in world.floating_texts if t.life > 0]

        for w in world.warnings:
            w.life -= config.LIFE_DECAY
        world.warnings = [w for w in world.warnings if w.life > 0]

    def snapshot(self) -> Snapshot:
        return self.world.snapshot(high_score=self.high_score)
