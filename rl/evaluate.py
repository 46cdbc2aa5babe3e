"""
Evaluation script for trained RL agents
"""

import argparse
import numpy as np
from typing import Optional

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.defense import DefenseEnv
from rl.configs.defense_config import make_env_kwargs
from rl.train import MultiDiscreteToDiscreteWrapper


def _report(title: str, episode_rewards, episode_scores, episode_wins):
    mean_reward = float(np.mean(episode_rewards))
    std_reward = float(np.std(episode_rewards))
    mean_score = float(np.mean(episode_scores))
    win_rate = float(np.mean(episode_wins))

    print("\n" + "="*50)
    print(f"{title} ({len(episode_rewards)} episodes):")
    print(f"Mean Reward: {mean_reward:.2f} ± {std_reward:.2f}")
    print(f"Mean Score: {mean_score:.0f}")
    print(f"Win Rate: {win_rate:.0%}")
    print("="*50)

    return {
        "mean_reward": mean_reward,
        "std_reward": std_reward,
        "mean_score": mean_score,
        "win_rate": win_rate,
        "episode_rewards": list(episode_rewards),
        "episode_scores": list(episode_scores),
    }


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
    """

    if algo == "ppo":
        model = PPO.load(model_path)
    elif algo == "dqn":
        model = DQN.load(model_path)
    else:
        raise ValueError(f"Unknown algorithm: {algo}")

    render_mode = "human" if render else None
    base_env = DefenseEnv(**make_env_kwargs(render_mode=render_mode))
    env = MultiDiscreteToDiscreteWrapper(base_env) if algo == "dqn" else base_env
    env = DummyVecEnv([lambda: env])

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    episode_rewards, episode_scores, episode_wins = [], [], []

    for episode in range(n_episodes):
        if seed is not None:
            env.seed(seed + episode)
        obs = env.reset()

        total_reward = 0.0
        steps = 0
        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += float(reward[0])
            steps += 1
            if done[0]:
                break

        final = info[0]
        episode_rewards.append(total_reward)
        episode_scores.append(final.get("score", 0))
        episode_wins.append(1.0 if final.get("state") == "won" else 0.0)

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Score = {final.get('score', 0)}, "
              f"Round = {final.get('round', 1)}, Length = {steps}")

    env.close()
    return _report("Evaluation Results", episode_rewards, episode_scores, episode_wins)


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    """
    Evaluate a random policy baseline
    """
    print("Evaluating random policy baseline...")

    env = DefenseEnv(**make_env_kwargs())
    if seed is not None:
        env.action_space.seed(seed)

    episode_rewards, episode_scores, episode_wins = [], [], []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward

        episode_rewards.append(total_reward)
        episode_scores.append(info["score"])
        episode_wins.append(1.0 if info["state"] == "won" else 0.0)

    env.close()
    return _report("Random Policy Results", episode_rewards, episode_scores, episode_wins)


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained RL agent")
    parser.add_argument(
        "model_path",
        type=str,
        nargs="?",
        default=None,
        help="Path to the trained model (omit with --random)",
    )
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn"],
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument("--no-render", action="store_true", help="Disable rendering")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--vec-normalize", type=str, default=None, help="Path to VecNormalize stats")
    parser.add_argument("--random", action="store_true", help="Evaluate a random policy baseline")

    args = parser.parse_args()

    if args.random or args.model_path is None:
        compare_with_random(n_episodes=args.n_episodes, seed=args.seed)
        return

    evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )


if __name__ == "__main__":
    main()
