"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Color = Tuple[int, int, int]


class GameMode(Enum):
    CLASSIC = "classic"
    ENDLESS = "endless"


class MatchState(Enum):
    START = "start"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"
    ROUND_OVER = "round_over"  # reserved, nothing transitions into it


@dataclass
class Point:
    x: float
    y: float

    def copy(self) -> "Point":
        return Point(self.x, self.y)


@dataclass
class Turret:
    """Launch site with finite ammo; stays in place as wreckage once destroyed"""
    x: float
    y: float
    ammo: int
    max_ammo: int
    active: bool = True

    def refill(self) -> None:
        self.ammo = self.max_ammo


@dataclass
class City:
    """Defended structure, only ever a target"""
    x: float
    y: float
    active: bool = True


@dataclass
class Rocket:
    """Incoming projectile; `end` is frozen at spawn time"""
    id: int
    start: Point
    end: Point
    current: Point
    speed: float
    color: Color


@dataclass
class Interceptor:
    """Player projectile flying from a turret to the click point"""
    id: int
    start: Point
    target: Point
    current: Point
    speed: float
    turret_index: int


@dataclass
class Explosion:
    id: int
    pos: Point
    radius: float
    max_radius: float
    growing: bool = True
    alpha: float = 1.0


@dataclass
class Particle:
    id: int
    x: float
    y: float
    vx: float
    vy: float
    life: float
    color: Color
    size: float


@dataclass
class FloatingText:
    id: int
    x: float
    y: float
    text: str
    life: float
    color: Color


@dataclass
class Warning:
    """Incoming-rocket marker at the top of the play field"""
    id: int
    x: float
    life: float
