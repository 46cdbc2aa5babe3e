"""
DefenseEnv - Gymnasium wrapper around the defense simulation
-----------------------------------------------------------
- The simulation core runs headless; Arcade is only pulled in for render()
- Gymnasium API
- 1 agent that chooses where (and whether) to click each step
- Discrete MultiDiscrete action space: [fire(2), cell_x(grid_x), cell_y(grid_y)]
- Vector observation: turret ammo/health, city health, round,
  top-K rockets closest to the ground, live explosion count

Quick test:
    python -m game.defense.defense_env
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from . import config
from .entities import GameMode, MatchState
from .simulation import DefenseSimulation
from .utils import clamp, normalize, seed_everything

class DefenseEnv(gym.Env):
    """Missile defense environment; one env step = `frame_skip` simulation ticks"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        mode: str = "classic",
        width: int = 800,
        height: int = 600,
        frame_skip: int = 4,
        max_steps: int = 3600,
        grid_x: int = 16,
        grid_y: int = 10,
        k_rockets: int = 6,
        rewards: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        assert frame_skip >= 1, "frame_skip must be at least 1"
        self.render_mode = render_mode
        self.game_mode = GameMode(mode)

        self.width = width
        self.height = height
        self.frame_skip = frame_skip
        self.max_steps = max_steps
        self.grid_x = grid_x
        self.grid_y = grid_y
        self.k_rockets = k_rockets
        self.rewards = dict(config.REWARD_WEIGHTS)
        if rewards:
            self.rewards.update({k: v for k, v in rewards.items() if k.startswith("R_")})

        self.action_space = spaces.MultiDiscrete([2, grid_x, grid_y])

        # Turrets: ammo(1) active(1) x3
        # Cities: active(1) x6
        # Round(1), explosions(1)
        # Each rocket: pos(2) dir(2)
        obs_dim = 3 * 2 + len(config.CITY_FRACTIONS) + 2 + self.k_rockets * 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.sim = DefenseSimulation(width=width, height=height)
        self._window = None
        self._step_count = 0
        self._episode: Dict[str, int] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self.sim.rng = random.Random(seed)
        self.sim.restart()
        self.sim.start_game(self.game_mode, self.width, self.height)
        self._step_count = 0
        self._episode = {"kills": 0, "impacts": 0, "shots": 0, "turrets_lost": 0, "cities_lost": 0}

        return self._get_obs(), self._get_info()

    def step(self, action):
        fire, cx, cy = int(action[0]), int(action[1]), int(action[2])
        events = {"kill": 0, "impact": 0, "shot": 0}

        turrets_before = self._active_turrets()
        cities_before = self._active_cities()

        if fire:
            x, y = self.cell_center(cx, cy)
            if self.sim.click(x, y) is not None:
                events["shot"] += 1

        world = self.sim.world
        for _ in range(self.frame_skip):
            if not self.sim.tick():
                break
            events["kill"] += world.kills
            events["impact"] += world.impacts

        events["turret_lost"] = turrets_before - self._active_turrets()
        events["city_lost"] = cities_before - self._active_cities()
        self._accumulate(events)

        reward = self._compute_reward(events)

        terminated = self.sim.state in (MatchState.WON, MatchState.LOST)
        self._step_count += 1
        truncated = self._step_count >= self.max_steps and not terminated

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def cell_center(self, cx: int, cy: int):
        """Click point at the centre of a grid cell above the ground line"""
        field_h = self.sim.world.ground_y
        cell_w = self.width / self.grid_x
        cell_h = field_h / self.grid_y
        cx = int(clamp(cx, 0, self.grid_x - 1))
        cy = int(clamp(cy, 0, self.grid_y - 1))
        return (cx + 0.5) * cell_w, (cy + 0.5) * cell_h

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _active_turrets(self) -> int:
        return sum(1 for t in self.sim.world.turrets if t.active)

    def _active_cities(self) -> int:
        return sum(1 for c in self.sim.world.cities if c.active)

    def _accumulate(self, events: Dict[str, int]):
        self._episode["kills"] += events["kill"]
        self._episode["impacts"] += events["impact"]
        self._episode["shots"] += events["shot"]
        self._episode["turrets_lost"] += events["turret_lost"]
        self._episode["cities_lost"] += events["city_lost"]

    def _get_obs(self) -> np.ndarray:
        world = self.sim.world
        obs_parts: List[float] = []

        for t in world.turrets:
            obs_parts += [t.ammo / max(1, t.max_ammo) * 2 - 1, 1.0 if t.active else -1.0]
        for c in world.cities:
            obs_parts.append(1.0 if c.active else -1.0)

        obs_parts.append(clamp(world.round / 10.0, 0, 1) * 2 - 1)
        obs_parts.append(clamp(len(world.explosions) / 10.0, 0, 1) * 2 - 1)

        # Rockets closest to landing first
        rockets = sorted(world.rockets, key=lambda r: r.end.y - r.current.y)
        for i in range(self.k_rockets):
            if i < len(rockets):
                r = rockets[i]
                dx, dy = normalize(r.end.x - r.start.x, r.end.y - r.start.y)
                obs_parts += [
                    clamp(r.current.x / self.width * 2 - 1, -1, 1),
                    clamp(r.current.y / self.height * 2 - 1, -1, 1),
                    dx,
                    dy,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events: Dict[str, int]) -> float:
        R = self.rewards
        reward = 0.0

        reward += R["R_KILL"] * events["kill"]
        reward -= R["R_IMPACT"] * events["impact"]
        reward -= R["R_TURRET_LOST"] * events["turret_lost"]
        reward -= R["R_CITY_LOST"] * events["city_lost"]
        reward -= R["R_SHOT"] * events["shot"]
        reward -= R["R_TIME"]

        if self.sim.state is MatchState.WON:
            reward += R["R_WIN"]
        elif self.sim.state is MatchState.LOST:
            reward -= R["R_LOSS"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        world = self.sim.world
        return {
            "score": world.score,
            "round": world.round,
            "state": world.state.value,
            "ammo": sum(t.ammo for t in world.turrets),
            "turrets_active": self._active_turrets(),
            "cities_active": self._active_cities(),
            "num_rockets": len(world.rockets),
            "kills": self._episode.get("kills", 0),
            "impacts": self._episode.get("impacts", 0),
            "shots": self._episode.get("shots", 0),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .render import DefenseWindow
            self._window = DefenseWindow(self.sim, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42):
    """Run a random episode for testing"""
    env = DefenseEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  "
          f"(score {info['score']}, round {info['round']}, {info['state']})")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
