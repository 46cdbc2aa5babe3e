"""Missile defense game module - simulation core and Gymnasium environment"""

from .entities import GameMode, MatchState
from .simulation import DefenseSimulation, MatchStateError
from .defense_env import DefenseEnv, run_random_episode

__all__ = ['DefenseEnv', 'DefenseSimulation', 'GameMode', 'MatchState', 'MatchStateError', 'run_random_episode']
