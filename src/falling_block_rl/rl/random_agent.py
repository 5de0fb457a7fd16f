from __future__ import annotations

import gymnasium as gym

import falling_block_rl.env  # noqa: F401  ensure registration


def run_random(steps: int = 2000) -> None:
    env = gym.make("FallingBlock-10x20-v0")
    obs, info = env.reset()
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episodes")


if __name__ == "__main__":  # pragma: no cover
    run_random()
