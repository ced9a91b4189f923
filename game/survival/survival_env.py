"""
SurvivalEnv - Gymnasium wrapper around the survival shooter engine
------------------------------------------------------------------
- One Game session per episode, stepped at a fixed dt
- MultiDiscrete action space: [move(9), fire(2), aim(8)]
- Vector observation: player state + top-K nearest enemies
- terminated on death, truncated on session timeout / max_steps
- rgb_array frames rasterized with numpy; human mode uses the arcade window

Quick test:
    python -m game.survival.survival_env
"""

from __future__ import annotations

import math
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import ENV_CONFIG, REWARD_CONFIG, BACKGROUND_COLOR
from .engine import Game, InputSnapshot, SessionState
from .utils import clamp, seed_everything

# move: 0 stay, then 8 directions clockwise from up
_MOVES = [
    (False, False, False, False),  # stay
    (True, False, False, False),   # up
    (True, False, False, True),    # up-right
    (False, False, False, True),   # right
    (False, False, True, True),    # down-right
    (False, False, True, False),   # down
    (False, True, True, False),    # down-left
    (False, True, False, False),   # left
    (True, True, False, False),    # up-left
]


class SurvivalEnv(gym.Env):
    """Gymnasium environment driving one survival session per episode"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        width: int = ENV_CONFIG["width"],
        height: int = ENV_CONFIG["height"],
        dt: float = ENV_CONFIG["dt"],
        max_steps: int = ENV_CONFIG["max_steps"],
        k_enemies: int = ENV_CONFIG["k_enemies"],
        aim_distance: float = ENV_CONFIG["aim_distance"],
        game_config: Optional[Dict[str, Any]] = None,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' observations are implemented."
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unknown render mode: {render_mode}")
        self.render_mode = render_mode
        self.obs_mode = obs_mode

        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.aim_distance = aim_distance
        self.rewards = dict(REWARD_CONFIG)
        if reward_config:
            self.rewards.update(reward_config)

        self.game = Game(width, height, config=game_config)

        self.action_space = spaces.MultiDiscrete([len(_MOVES), 2, 8])

        # Player: pos(2) health(1) cooldown(1)
        # Each enemy: rel pos(2) tier(1)
        obs_dim = 2 + 1 + 1 + self.k_enemies * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._aim_dirs = []
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._aim_dirs.append((math.cos(ang), math.sin(ang)))

        self._window = None
        self._step_count = 0
        self._damage_taken = 0.0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._step_count = 0
        self._damage_taken = 0.0
        self.game.start()

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, fire, aim = int(action[0]), int(action[1]), int(action[2])
        snapshot = self._to_snapshot(move, fire, aim)

        prev_score = self.game.score
        prev_kills = self.game.kills
        prev_health = self.game.player.health

        self.game.update(self.dt, snapshot)
        self._step_count += 1

        damage = prev_health - self.game.player.health
        self._damage_taken += damage

        reward = self._compute_reward(
            kills=self.game.kills - prev_kills,
            score=self.game.score - prev_score,
            damage=damage,
        )

        ended = self.game.state == SessionState.GAME_OVER
        terminated = ended and self.game.end_reason == "death"
        truncated = (ended and not terminated) or self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _to_snapshot(self, move: int, fire: int, aim: int) -> InputSnapshot:
        up, left, down, right = _MOVES[move % len(_MOVES)]
        ax, ay = self._aim_dirs[aim % 8]
        p = self.game.player
        return InputSnapshot(
            up=up, left=left, down=down, right=right,
            pointer_x=p.x + ax * self.aim_distance,
            pointer_y=p.y + ay * self.aim_distance,
            fire=bool(fire),
        )

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        game = self.game
        p = game.player
        w, h = game.width, game.height

        cooldown = p.shoot_cooldown / max(1e-6, p.shoot_interval)
        obs_parts = [
            (p.x / w) * 2 - 1,
            (p.y / h) * 2 - 1,
            p.health_fraction * 2 - 1,
            clamp(cooldown * 2 - 1, -1, 1),
        ]

        enemies_sorted = sorted(
            game.enemies,
            key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - p.x) / w, -1, 1),
                    clamp((e.y - p.y) / h, -1, 1),
                    clamp(e.difficulty / 10.0, 0, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, kills: int, score: int, damage: float) -> float:
        r = self.rewards
        reward = 0.0

        reward += r["R_KILL"] * kills
        reward += r["R_SCORE"] * score
        reward -= r["R_DAMAGE"] * damage
        reward -= r["R_TIME"]

        if self.game.player.health <= 0:
            reward -= r["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.get_info()
        info["step"] = self._step_count
        info["damage_taken"] = self._damage_taken
        info["enemies_killed"] = self.game.kills
        return info

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return render_frame(self.game)

        if self._window is None:
            # Imported lazily so headless use never needs a display
            from .window import SurvivalWindow
            self._window = SurvivalWindow(self.game, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def render_frame(game: Game) -> np.ndarray:
    """Rasterize the current drawables into an (H, W, 3) uint8 frame"""
    h, w = game.height, game.width
    frame = np.empty((h, w, 3), dtype=np.uint8)
    frame[:] = BACKGROUND_COLOR

    ys, xs = np.ogrid[:h, :w]
    for d in game.drawables():
        x0 = max(0, int(d.x - d.radius))
        x1 = min(w, int(d.x + d.radius) + 1)
        y0 = max(0, int(d.y - d.radius))
        y1 = min(h, int(d.y + d.radius) + 1)
        if x0 >= x1 or y0 >= y1:
            continue

        mask = (xs[:, x0:x1] - d.x) ** 2 + (ys[y0:y1, :] - d.y) ** 2 <= d.radius ** 2
        frame[y0:y1, x0:x1][mask] = d.color

    return frame


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = False, seed: Optional[int] = 42):
    """Run a random episode for testing"""
    env = SurvivalEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("[SurvivalEnv] Running random episode...")
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"[SurvivalEnv] Episode return: {total:.2f} | score={info['score']} "
          f"kills={info['kills']} difficulty={info['difficulty']} steps={info['step']}")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=False)
