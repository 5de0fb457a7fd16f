from __future__ import annotations

import argparse

import pygame

from falling_block_rl.rl.train_ppo import make_env
from falling_block_rl.visualization.renderer import Renderer


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--model", type=str, required=True)
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--fps", type=int, default=20)
    return p


def main() -> None:
    args = build_parser().parse_args()
    from stable_baselines3 import PPO

    env = make_env()
    model = PPO.load(args.model, device="auto")

    game = env.unwrapped.game
    renderer = Renderer(cell_size=28)

    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Falling Block - Agent Eval")
        font = pygame.font.SysFont(None, 24)
        clock = pygame.time.Clock()

        obs, info = env.reset()
        total_reward = 0.0
        steps = 0
        while steps < args.steps:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    return

            action, _ = model.predict(obs, deterministic=True)
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += float(reward)
            steps += 1
            if terminated or truncated:
                print(f"episode finished: score {info['score']}, rows {info['rows_cleared_total']}")
                obs, info = env.reset()

            renderer.draw(screen, env.unwrapped.game.snapshot(), font)
            clock.tick(args.fps)
        print(f"total reward {total_reward:.1f} over {steps} steps")
    finally:
        pygame.quit()
        env.close()


if __name__ == "__main__":  # pragma: no cover
    main()
