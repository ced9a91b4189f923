"""
Game entity dataclasses

Entities store base (unscaled) radius and speed; the current viewport scale
is passed in at use time.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .config import GAME_CONFIG, ENEMY_PALETTE
from .utils import clamp, normalize, distance, health_ratio, health_label

_PLAYER = GAME_CONFIG["player"]
_ENEMY = GAME_CONFIG["enemy"]
_BULLET = GAME_CONFIG["bullet"]


@dataclass
class Bullet:
    """Projectile fired by the player"""
    x: float
    y: float
    angle: float
    speed: float = _PLAYER["bullet_speed"]
    radius: float = _BULLET["radius"]
    scale: float = 1.0
    damage: float = _BULLET["damage"]
    active: bool = True

    def update(self, arena_w: float, arena_h: float):
        # Per-tick displacement, not time-scaled
        scaled_speed = self.speed * self.scale
        self.x += math.cos(self.angle) * scaled_speed
        self.y += math.sin(self.angle) * scaled_speed

        r = self.radius * self.scale
        if self.x < -r or self.x > arena_w + r or self.y < -r or self.y > arena_h + r:
            self.active = False

    def scaled_radius(self, scale: float) -> float:
        return self.radius * scale


@dataclass
class Player:
    """Player avatar entity"""
    x: float
    y: float
    radius: float = _PLAYER["radius"]
    speed: float = _PLAYER["speed"]
    max_health: float = _PLAYER["max_health"]
    health: Optional[float] = None
    angle: float = 0.0
    shoot_cooldown: float = 0.0  # ms left
    shoot_interval: float = _PLAYER["shoot_cooldown"]
    bullet_speed: float = _PLAYER["bullet_speed"]
    bullet_radius: float = _BULLET["radius"]
    # Movement flags, driven by key state
    up: bool = False
    left: bool = False
    down: bool = False
    right: bool = False

    def __post_init__(self):
        if self.health is None:
            self.health = self.max_health

    def direction(self) -> Tuple[float, float]:
        """Raw movement direction from the flags, diagonal normalized"""
        dx, dy = 0.0, 0.0
        if self.up:
            dy -= 1
        if self.down:
            dy += 1
        if self.left:
            dx -= 1
        if self.right:
            dx += 1

        # No diagonal speed bonus
        if dx != 0 and dy != 0:
            dx, dy = normalize(dx, dy)
        return dx, dy

    def update(self, dt, pointer_x, pointer_y, scale, arena_w, arena_h):
        dx, dy = self.direction()

        scaled_speed = self.speed * scale
        self.x += dx * scaled_speed
        self.y += dy * scaled_speed

        r = self.radius * scale
        self.x = clamp(self.x, r, arena_w - r)
        self.y = clamp(self.y, r, arena_h - r)

        self.angle = math.atan2(pointer_y - self.y, pointer_x - self.x)

        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= dt

    def shoot(self, pointer_x, pointer_y, scale) -> Optional[Bullet]:
        """Fire toward the pointer if the cooldown has elapsed"""
        if self.shoot_cooldown > 0:
            return None

        angle = math.atan2(pointer_y - self.y, pointer_x - self.x)
        r = self.radius * scale
        self.shoot_cooldown = self.shoot_interval
        return Bullet(
            x=self.x + math.cos(angle) * r,
            y=self.y + math.sin(angle) * r,
            angle=angle,
            speed=self.bullet_speed,
            radius=self.bullet_radius,
            scale=scale,
        )

    def take_damage(self, amount: float) -> bool:
        """Apply damage; True when the player has died"""
        self.health = max(0, self.health - amount)
        return self.health <= 0

    @property
    def health_fraction(self) -> float:
        return health_ratio(self.health, self.max_health)

    @property
    def health_text(self) -> str:
        return health_label(self.health, self.max_health)


@dataclass
class Enemy:
    """Enemy entity that chases the player; stats derive from its tier"""
    x: float
    y: float
    difficulty: int = 1
    base_radius: float = _ENEMY["base_radius"]
    base_speed: float = _ENEMY["base_speed"]
    base_health: float = _ENEMY["base_health"]
    radius_increase: float = _ENEMY["radius_increase"]
    speed_increase: float = _ENEMY["speed_increase"]
    health_increase: float = _ENEMY["health_increase"]
    active: bool = True
    radius: float = field(init=False)
    speed: float = field(init=False)
    max_health: float = field(init=False)
    health: float = field(init=False)
    color: Tuple[int, int, int] = field(init=False)

    def __post_init__(self):
        tier = self.difficulty - 1
        self.radius = self.base_radius + tier * self.radius_increase
        self.speed = self.base_speed + tier * self.speed_increase
        self.max_health = self.base_health + tier * self.health_increase
        self.health = self.max_health
        self.color = ENEMY_PALETTE[min(tier, len(ENEMY_PALETTE) - 1)]

    def update(self, player_x, player_y, scale):
        dist = distance(self.x, self.y, player_x, player_y)
        if dist > 0:
            nx, ny = normalize(player_x - self.x, player_y - self.y)
            scaled_speed = self.speed * scale
            self.x += nx * scaled_speed
            self.y += ny * scaled_speed

    def take_damage(self, amount: float) -> bool:
        """Apply damage; True when this hit killed the enemy"""
        self.health -= amount
        if self.health <= 0:
            self.active = False
            return True
        return False

    def scaled_radius(self, scale: float) -> float:
        return self.radius * scale

    @property
    def health_fraction(self) -> float:
        return health_ratio(self.health, self.max_health)
