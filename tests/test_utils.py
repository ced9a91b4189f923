import random

import pytest

from game.survival.config import GAME_CONFIG, merge_config
from game.survival.utils import (
    clamp,
    circle_collide,
    distance,
    format_timer,
    health_label,
    health_ratio,
    normalize,
    random_range,
    seed_everything,
)


def test_distance():
    assert distance(0, 0, 3, 4) == pytest.approx(5.0)
    assert distance(2, 2, 2, 2) == 0


def test_normalize_zero_vector_has_no_direction():
    assert normalize(0, 0) == (0.0, 0.0)


def test_normalize_unit_length():
    x, y = normalize(3, 4)
    assert x == pytest.approx(0.6)
    assert y == pytest.approx(0.8)


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


def test_random_range_bounds_and_seeding():
    seed_everything(7)
    first = [random_range(-3, 3) for _ in range(50)]
    assert all(-3 <= v < 3 for v in first)

    seed_everything(7)
    assert [random_range(-3, 3) for _ in range(50)] == first


def test_seed_none_leaves_state_alone():
    random.seed(3)
    expected = random.random()
    random.seed(3)
    seed_everything(None)
    assert random.random() == expected


def test_circle_collide_is_strict():
    assert circle_collide(0, 0, 5, 9, 0, 5)
    assert not circle_collide(0, 0, 5, 10, 0, 5)


@pytest.mark.parametrize("ms,text", [
    (180_000, "03:00"),
    (179_001, "02:59"),
    (59_999, "00:59"),
    (0, "00:00"),
    (-500, "00:00"),
])
def test_format_timer(ms, text):
    assert format_timer(ms) == text


def test_merge_config_does_not_touch_defaults():
    cfg = merge_config({"game": {"duration": 5000}})
    assert cfg["game"]["duration"] == 5000
    assert cfg["game"]["difficulty_increase_interval"] == 10_000
    assert GAME_CONFIG["game"]["duration"] == 180_000


def test_merge_config_rejects_unknown_section():
    with pytest.raises(ValueError):
        merge_config({"shop": {"price": 1}})


def test_health_ratio_is_clamped():
    assert health_ratio(25, 100) == pytest.approx(0.25)
    assert health_ratio(-5, 100) == 0.0
    assert health_ratio(150, 100) == 1.0


def test_health_label_rounds_up():
    assert health_label(24.2, 100) == "25 / 100"
    assert health_label(0, 100) == "0 / 100"
