import numpy as np
import pytest

from game.survival.config import PLAYER_COLOR, BACKGROUND_COLOR, REWARD_CONFIG
from game.survival.entities import Enemy
from game.survival.survival_env import SurvivalEnv, render_frame

STAY = [0, 0, 0]


@pytest.fixture
def env():
    e = SurvivalEnv()
    yield e
    e.close()


def test_reset_returns_valid_observation(env):
    obs, info = env.reset(seed=0)
    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["step"] == 0
    assert info["health"] == 100


def test_idle_step_costs_time_penalty(env):
    env.reset(seed=0)
    obs, reward, terminated, truncated, info = env.step(STAY)
    assert reward == pytest.approx(-REWARD_CONFIG["R_TIME"])
    assert not terminated and not truncated
    assert info["step"] == 1


def test_fire_action_spawns_bullet(env):
    env.reset(seed=0)
    env.step([0, 1, 0])
    assert env.game.kills == 0
    assert len(env.game.bullets) == 1
    # aim 0 points right
    assert env.game.bullets[0].angle == pytest.approx(0.0)


def test_move_action_moves_player(env):
    env.reset(seed=0)
    x0 = env.game.player.x
    env.step([3, 0, 0])
    assert env.game.player.x == pytest.approx(x0 + 5 * env.game.scale)


def test_death_terminates_with_penalty(env):
    env.reset(seed=0)
    p = env.game.player
    p.health = 5
    env.game.enemies.append(Enemy(x=p.x + 1, y=p.y))

    _, reward, terminated, truncated, info = env.step(STAY)

    assert terminated and not truncated
    assert info["health"] == 0
    assert reward < -REWARD_CONFIG["R_DEATH"]


def test_session_timeout_truncates():
    env = SurvivalEnv(game_config={"game": {"duration": 1000}}, dt=250)
    env.reset(seed=0)
    results = [env.step(STAY) for _ in range(4)]
    assert not any(r[3] for r in results[:3])
    _, _, terminated, truncated, _ = results[3]
    assert truncated and not terminated


def test_max_steps_truncates():
    env = SurvivalEnv(max_steps=3)
    env.reset(seed=0)
    env.step(STAY)
    env.step(STAY)
    _, _, terminated, truncated, _ = env.step(STAY)
    assert truncated and not terminated


def test_rgb_array_frame():
    env = SurvivalEnv(render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()

    assert frame.shape == (env.height, env.width, 3)
    assert frame.dtype == np.uint8
    p = env.game.player
    assert tuple(frame[int(p.y), int(p.x)]) == PLAYER_COLOR
    assert tuple(frame[0, 0]) == BACKGROUND_COLOR


def test_render_frame_skips_offscreen_entities():
    env = SurvivalEnv()
    env.reset(seed=0)
    env.game.enemies.append(Enemy(x=-500, y=-500))
    frame = render_frame(env.game)
    assert frame.shape == (env.height, env.width, 3)


def test_unknown_render_mode_rejected():
    with pytest.raises(ValueError):
        SurvivalEnv(render_mode="ascii")


def test_random_actions_run(env):
    env.reset(seed=3)
    env.action_space.seed(3)
    for _ in range(200):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        if terminated or truncated:
            break
