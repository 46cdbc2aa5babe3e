"""
Score milestones, ammo refills, round advancement and terminal checks
"""

from __future__ import annotations

import logging
from typing import Optional

from . import config
from .entities import GameMode, MatchState
from .store import EntityStore

logger = logging.getLogger(__name__)


def universe_refill(store: EntityStore) -> bool:
    """One-time refill the first tick score reaches the universe threshold"""
    if store.refilled_at_universe or store.score < config.UNIVERSE_SCORE:
        return False
    for turret in store.refill_active_turrets():
        store.emit_text(turret.x, turret.y - 40, "AMMO REFILLED!", config.TURRET_C)
    store.emit_text(store.width / 2, store.height / 2, "UNIVERSE MODE ACTIVATED!", config.CITY_C)
    store.refilled_at_universe = True
    store.pulse_shake(config.UNIVERSE_SHAKE)
    logger.info("Universe mode reached at score %d, ammo refilled", store.score)
    return True


def endless_refill(store: EntityStore) -> bool:
    """Refill on every multiple of the endless step, once per multiple"""
    if store.mode is not GameMode.ENDLESS:
        return False
    score = store.score
    if score <= 0 or score % config.ENDLESS_REFILL_STEP != 0 or score == store.last_refill_score:
        return False
    for turret in store.refill_active_turrets():
        store.emit_text(turret.x, turret.y - 40, "800PT REFILL!", config.TURRET_C)
    store.last_refill_score = score
    store.pulse_shake(config.ENDLESS_SHAKE)
    logger.info("Endless refill at score %d", score)
    return True


def advance_round(store: EntityStore) -> bool:
    """Next round once nothing is in flight and every turret is dry"""
    if store.rockets or store.interceptors:
        return False
    if any(t.ammo != 0 for t in store.turrets):
        return False
    store.refill_active_turrets()
    store.round += 1
    logger.info("Round %d begins", store.round)
    return True


def step(store: EntityStore) -> None:
    universe_refill(store)
    endless_refill(store)
    advance_round(store)


def terminal_state(store: EntityStore) -> Optional[MatchState]:
    """WON/LOST if the match just ended; a classic win beats a same-tick loss"""
    if store.mode is GameMode.CLASSIC and store.score >= config.WIN_SCORE:
        return MatchState.WON
    if all(not t.active for t in store.turrets):
        return MatchState.LOST
    return None
