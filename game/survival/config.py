"""
Configuration for the survival shooter
All sizes and speeds are given at the base resolution and scaled at use time.
"""

import copy

# Gameplay parameters
GAME_CONFIG = {
    "base_resolution": {
        "width": 1920,
        "height": 1080,
    },
    "player": {
        "speed": 5,             # px per tick, scaled
        "radius": 15,
        "max_health": 100,
        "shoot_cooldown": 200,  # ms
        "bullet_speed": 10,     # px per tick, scaled
    },
    "enemy": {
        "base_speed": 1.5,
        "base_radius": 20,
        "base_health": 10,
        "base_spawn_rate": 2000,    # ms
        "speed_increase": 0.1,      # per difficulty tier
        "spawn_rate_decrease": 50,  # ms per difficulty tier
        "min_spawn_rate": 500,
        "radius_increase": 2,
        "health_increase": 5,
        "spawn_offset": 50,
        "contact_damage": 5,
    },
    "bullet": {
        "radius": 5,
        "damage": 1,
    },
    "game": {
        "duration": 180_000,                 # 3 minutes
        "difficulty_increase_interval": 10_000,
        "separation_margin": 2,
        "contact_push_margin": 5,
        "score_per_tier": 10,
        "score_per_coin": 10,
    },
    "ui": {
        "font_size": 18,
        "title_font_size": 48,
        "button_font_size": 18,
        "grid_size": 50,
    },
}

# Enemy colors by difficulty tier (1, 2, 3, 4, 5+)
ENEMY_PALETTE = [
    (255, 68, 68),
    (255, 102, 102),
    (255, 136, 68),
    (255, 170, 68),
    (255, 204, 68),
]

PLAYER_COLOR = (78, 205, 196)
PLAYER_ACCENT_COLOR = (42, 157, 143)
BULLET_COLOR = (255, 215, 0)
BACKGROUND_COLOR = (26, 26, 46)

# Gymnasium wrapper parameters
ENV_CONFIG = {
    "width": 960,
    "height": 540,
    "dt": 1000 / 30,     # ms per step
    "max_steps": 5400,   # full 3 minute session at 30 FPS
    "k_enemies": 5,
    "aim_distance": 100.0,
}

# Reward shaping for the Gymnasium wrapper
REWARD_CONFIG = {
    "R_KILL": 1.0,
    "R_SCORE": 0.01,     # per score point
    "R_DAMAGE": 0.05,    # per health point lost
    "R_TIME": 0.001,
    "R_DEATH": 5.0,
}


def merge_config(overrides=None):
    """
    Deep-merge a partial config over GAME_CONFIG.
    Returns a new dict; the defaults are left untouched.
    """
    merged = copy.deepcopy(GAME_CONFIG)
    if not overrides:
        return merged

    for section, values in overrides.items():
        if section not in merged:
            raise ValueError(f"Unknown config section: {section}")
        if not isinstance(values, dict):
            raise ValueError(f"Config section '{section}' must be a dict")
        merged[section].update(values)

    return merged
