"""
Gameplay constants for the defense simulation

All motion and decay values are fixed per-tick deltas: one call to
``DefenseSimulation.tick`` is one frame, regardless of wall-clock time.
"""

# Scoring / progression
WIN_SCORE = 1000
ROCKET_SCORE = 20
UNIVERSE_SCORE = 500  # one-time ammo refill, also switches the background theme
ENDLESS_REFILL_STEP = 800

# Explosions
EXPLOSION_START_RADIUS = 2.0
EXPLOSION_SPEED = 1.8
EXPLOSION_SHRINK_FACTOR = 0.4
EXPLOSION_FADE = 0.02
EXPLOSION_MAX_RADIUS = 75.0
IMPACT_MAX_RADIUS = 55.0

# Projectiles
INTERCEPTOR_SPEED = 9.0
ROCKET_BASE_SPEED = 1.2
ROCKET_SPEED_PER_ROUND = 0.15

# Spawn schedule (milliseconds of simulated time)
SPAWN_BASE_INTERVAL_MS = 2000.0
SPAWN_INTERVAL_STEP_MS = 150.0
SPAWN_MIN_INTERVAL_MS = 400.0
TICK_MS = 1000.0 / 60.0

# Layout
GROUND_MARGIN = 40.0
TURRET_EDGE_OFFSET = 60.0
SIDE_TURRET_AMMO = 20
CENTER_TURRET_AMMO = 40
CITY_FRACTIONS = (0.18, 0.28, 0.38, 0.62, 0.72, 0.82)
KILL_STRIP = 25.0  # horizontal half-width of a ground impact

# Visual-only decay
LIFE_DECAY = 0.02
TEXT_RISE = 1.0
SHAKE_DECAY = 0.5
IMPACT_SHAKE = 12.0
UNIVERSE_SHAKE = 10.0
ENDLESS_SHAKE = 8.0
IMPACT_PARTICLES = 20
KILL_PARTICLES = 10

# Colors (RGB)
ROCKET_C = (208, 0, 255)
CITY_C = (255, 0, 127)
TURRET_C = (157, 0, 255)
INTERCEPTOR_C = (0, 183, 255)
WHITE_C = (255, 255, 255)

# Agent reward weights (DefenseEnv)
REWARD_WEIGHTS = {
    "R_KILL": 1.0,         # rocket destroyed
    "R_IMPACT": 0.5,       # rocket reached the ground
    "R_TURRET_LOST": 3.0,
    "R_CITY_LOST": 1.0,
    "R_SHOT": 0.05,        # interceptor launched
    "R_TIME": 0.0,         # survival is the goal
    "R_WIN": 10.0,         # classic mode victory
    "R_LOSS": 10.0,        # all turrets lost
}

# Persistence
HIGH_SCORE_KEY = "soo_nova_high_score"
