"""
Training configuration for the defense environment
"""

from game.defense.config import REWARD_WEIGHTS

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "mode": "classic",
    "width": 800,
    "height": 600,
    "frame_skip": 4,
    "max_steps": 3600,  # 4 ticks per step -> 4 minutes at 60 FPS
    "grid_x": 16,
    "grid_y": 10,
    "k_rockets": 6,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "name": "baseline",
    "description": "Kills rewarded, ground hits and lost structures penalised",
    **REWARD_WEIGHTS,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}


def make_env_kwargs(**overrides):
    """ENV_CONFIG plus reward weights, ready to pass to DefenseEnv"""
    kwargs = dict(ENV_CONFIG)
    kwargs["rewards"] = {k: v for k, v in REWARD_CONFIG.items() if k.startswith("R_")}
    kwargs.update(overrides)
    return kwargs
