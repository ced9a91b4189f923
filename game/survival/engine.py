"""
Game - the survival shooter simulation engine
---------------------------------------------
- Owns the player, bullets and enemies of one session
- Per-tick update: difficulty -> spawn -> player -> bullets -> enemies
  -> enemy separation -> collisions -> session end
- Everything size/speed related is multiplied by the viewport scale, so the
  game plays the same at any resolution
- Rendering and input live outside: the shell passes an InputSnapshot into
  update() and reads drawables() / hud() back

Movement is a fixed displacement per tick (not multiplied by dt); only the
fire cooldown and the session clocks are time based.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Dict, Any

from .config import merge_config, PLAYER_COLOR, BULLET_COLOR
from .entities import Player, Bullet, Enemy
from .utils import (
    clamp, normalize, distance, circle_collide, random_range, format_timer, health_ratio, health_label,
)
from .viewport import Viewport


class SessionState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "gameOver"


@dataclass
class InputSnapshot:
    """Input state captured once per tick by the shell"""
    up: bool = False
    left: bool = False
    down: bool = False
    right: bool = False
    pointer_x: float = 0.0
    pointer_y: float = 0.0
    fire: bool = False


@dataclass
class HudState:
    """Read-only projection of the session for the HUD"""
    health: float
    max_health: float
    remaining_ms: float
    score: int
    kills: int
    difficulty: int

    @property
    def health_fraction(self) -> float:
        return health_ratio(self.health, self.max_health)

    @property
    def health_text(self) -> str:
        return health_label(self.health, self.max_health)

    @property
    def timer_text(self) -> str:
        return format_timer(self.remaining_ms)


@dataclass
class GameOverSummary:
    score: int
    kills: int
    survival_seconds: int
    coins: int
    reason: str


@dataclass
class Drawable:
    """Render-ready entity: position in pixels, radius already scaled"""
    kind: str
    x: float
    y: float
    radius: float
    color: Tuple[int, int, int]
    angle: float = 0.0
    health_fraction: float = 1.0


class Game:
    """Simulation engine for one survival session at a time"""

    def __init__(self, width: int, height: int, config: Optional[Dict[str, Any]] = None, verbose: int = 0):
        self.config = merge_config(config)
        self.verbose = verbose

        base = self.config["base_resolution"]
        self.viewport = Viewport(width, height, base["width"], base["height"])

        self.state = SessionState.MENU

        # World state
        self.player: Optional[Player] = None
        self.bullets: List[Bullet] = []
        self.enemies: List[Enemy] = []

        # Session counters
        self.score = 0
        self.kills = 0
        self.current_time = 0.0
        self.difficulty = 1
        self.spawn_interval = self.config["enemy"]["base_spawn_rate"]
        self.last_enemy_spawn = 0.0
        self.last_difficulty_increase = 0.0
        self.end_reason: Optional[str] = None
        self.summary: Optional[GameOverSummary] = None

    # ----------------------------
    # Viewport
    # ----------------------------

    @property
    def scale(self) -> float:
        return self.viewport.scale

    @property
    def width(self) -> int:
        return self.viewport.width

    @property
    def height(self) -> int:
        return self.viewport.height

    def resize(self, width: int, height: int):
        """Apply a new surface size; live entities keep their relative layout"""
        old_w, old_h = self.viewport.resize(width, height)

        if self.state != SessionState.PLAYING:
            return
        if old_w == width and old_h == height:
            return

        vp = self.viewport
        if self.player is not None:
            self.player.x, self.player.y = vp.remap(self.player.x, self.player.y, old_w, old_h)
        for b in self.bullets:
            b.x, b.y = vp.remap(b.x, b.y, old_w, old_h)
            b.scale = vp.scale
        for e in self.enemies:
            e.x, e.y = vp.remap(e.x, e.y, old_w, old_h)

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def show_menu(self):
        self.state = SessionState.MENU

    def start(self):
        """Reset every counter and collection and begin a new session"""
        cfg_p = self.config["player"]
        cfg_b = self.config["bullet"]

        self.state = SessionState.PLAYING
        self.score = 0
        self.kills = 0
        self.current_time = 0.0
        self.last_enemy_spawn = 0.0
        self.spawn_interval = self.config["enemy"]["base_spawn_rate"]
        self.difficulty = 1
        self.last_difficulty_increase = 0.0
        self.end_reason = None
        self.summary = None

        self.player = Player(
            x=self.width / 2,
            y=self.height / 2,
            radius=cfg_p["radius"],
            speed=cfg_p["speed"],
            max_health=cfg_p["max_health"],
            shoot_interval=cfg_p["shoot_cooldown"],
            bullet_speed=cfg_p["bullet_speed"],
            bullet_radius=cfg_b["radius"],
        )
        self.bullets = []
        self.enemies = []

        if self.verbose > 0:
            print(f"[Game] Session started on {self.viewport}")

    def game_over(self, reason: str):
        """Freeze the simulation and keep the final values for display"""
        self.state = SessionState.GAME_OVER
        self.end_reason = reason
        self.summary = GameOverSummary(
            score=self.score,
            kills=self.kills,
            survival_seconds=int(self.current_time // 1000),
            coins=self.score // self.config["game"]["score_per_coin"],
            reason=reason,
        )

        if self.verbose > 0:
            print(f"[Game] Game over ({reason}): score={self.score} kills={self.kills} "
                  f"time={self.summary.survival_seconds}s coins={self.summary.coins}")

    @property
    def remaining_time(self) -> float:
        return max(0.0, self.config["game"]["duration"] - self.current_time)

    # ----------------------------
    # Per-tick update
    # ----------------------------

    def update(self, dt: float, inputs: Optional[InputSnapshot] = None) -> Optional[HudState]:
        if self.state != SessionState.PLAYING:
            return None
        if inputs is None:
            inputs = InputSnapshot()

        self.current_time += dt

        self._update_difficulty()

        if self.current_time - self.last_enemy_spawn >= self.spawn_interval:
            self.spawn_enemy()
            self.last_enemy_spawn = self.current_time

        self._update_player(dt, inputs)

        for b in self.bullets:
            b.update(self.width, self.height)
        self.bullets = [b for b in self.bullets if b.active]

        for e in self.enemies:
            if e.active:
                e.update(self.player.x, self.player.y, self.scale)

        self._resolve_enemy_collisions()
        self.enemies = [e for e in self.enemies if e.active]

        self._handle_collisions()
        if self.state != SessionState.PLAYING:
            return self.hud()

        if self.current_time >= self.config["game"]["duration"]:
            self.game_over("timeout")

        return self.hud()

    def _update_difficulty(self):
        cfg_e = self.config["enemy"]
        interval = self.config["game"]["difficulty_increase_interval"]

        if self.current_time - self.last_difficulty_increase >= interval:
            self.difficulty += 1
            self.spawn_interval = max(
                cfg_e["min_spawn_rate"],
                cfg_e["base_spawn_rate"] - (self.difficulty - 1) * cfg_e["spawn_rate_decrease"],
            )
            self.last_difficulty_increase = self.current_time

    def _update_player(self, dt: float, inputs: InputSnapshot):
        p = self.player
        p.up, p.left, p.down, p.right = inputs.up, inputs.left, inputs.down, inputs.right
        p.update(dt, inputs.pointer_x, inputs.pointer_y, self.scale, self.width, self.height)

        if inputs.fire:
            bullet = p.shoot(inputs.pointer_x, inputs.pointer_y, self.scale)
            if bullet is not None:
                self.bullets.append(bullet)

    def spawn_enemy(self) -> Enemy:
        """Spawn one enemy just outside a random edge, tagged with the current tier"""
        cfg_e = self.config["enemy"]
        offset = cfg_e["spawn_offset"] * self.scale
        side = random.randrange(4)

        if side == 0:  # top
            x = random_range(0, self.width)
            y = -offset
        elif side == 1:  # right
            x = self.width + offset
            y = random_range(0, self.height)
        elif side == 2:  # bottom
            x = random_range(0, self.width)
            y = self.height + offset
        else:  # left
            x = -offset
            y = random_range(0, self.height)

        enemy = Enemy(
            x=x,
            y=y,
            difficulty=self.difficulty,
            base_radius=cfg_e["base_radius"],
            base_speed=cfg_e["base_speed"],
            base_health=cfg_e["base_health"],
            radius_increase=cfg_e["radius_increase"],
            speed_increase=cfg_e["speed_increase"],
            health_increase=cfg_e["health_increase"],
        )
        self.enemies.append(enemy)
        return enemy

    def _resolve_enemy_collisions(self):
        # Pairwise push-apart; a single pass, not a full constraint solve
        margin = self.config["game"]["separation_margin"] * self.scale
        enemies = self.enemies

        for i in range(len(enemies)):
            e1 = enemies[i]
            if not e1.active:
                continue

            for j in range(i + 1, len(enemies)):
                e2 = enemies[j]
                if not e2.active:
                    continue

                dist = distance(e1.x, e1.y, e2.x, e2.y)
                r1 = e1.scaled_radius(self.scale)
                r2 = e2.scaled_radius(self.scale)
                min_dist = r1 + r2 + margin

                if 0 < dist < min_dist:
                    push = (min_dist - dist) * 0.5
                    nx, ny = normalize(e2.x - e1.x, e2.y - e1.y)

                    e1.x -= nx * push
                    e1.y -= ny * push
                    e2.x += nx * push
                    e2.y += ny * push

                    e1.x = clamp(e1.x, r1, self.width - r1)
                    e1.y = clamp(e1.y, r1, self.height - r1)
                    e2.x = clamp(e2.x, r2, self.width - r2)
                    e2.y = clamp(e2.y, r2, self.height - r2)

    def _handle_collisions(self):
        cfg_g = self.config["game"]

        # Bullets vs enemies: first hit in list order, single target
        for b in self.bullets:
            if not b.active:
                continue
            br = b.scaled_radius(self.scale)

            for e in self.enemies:
                if not e.active:
                    continue
                er = e.scaled_radius(self.scale)
                if circle_collide(b.x, b.y, br, e.x, e.y, er):
                    b.active = False
                    if e.take_damage(b.damage):
                        self.kills += 1
                        self.score += e.difficulty * cfg_g["score_per_tier"]
                    break

        # Killed enemies leave the collection before the contact pass
        self.enemies = [e for e in self.enemies if e.active]

        # Player vs enemies (contact damage + push out)
        p = self.player
        pr = p.radius * self.scale
        contact_damage = self.config["enemy"]["contact_damage"]
        push_margin = cfg_g["contact_push_margin"] * self.scale

        for e in self.enemies:
            er = e.scaled_radius(self.scale)
            if circle_collide(p.x, p.y, pr, e.x, e.y, er):
                if p.take_damage(contact_damage):
                    self.game_over("death")
                    return

                nx, ny = normalize(e.x - p.x, e.y - p.y)
                push_dist = pr + er + push_margin
                e.x = p.x + nx * push_dist
                e.y = p.y + ny * push_dist

    # ----------------------------
    # Read-only projections
    # ----------------------------

    def hud(self) -> Optional[HudState]:
        if self.player is None:
            return None
        return HudState(
            health=self.player.health,
            max_health=self.player.max_health,
            remaining_ms=self.remaining_time,
            score=self.score,
            kills=self.kills,
            difficulty=self.difficulty,
        )

    def drawables(self) -> List[Drawable]:
        """Active bullets, enemies and the player, in draw order"""
        if self.state != SessionState.PLAYING or self.player is None:
            return []

        s = self.scale
        out = [
            Drawable("bullet", b.x, b.y, b.scaled_radius(s), BULLET_COLOR, b.angle)
            for b in self.bullets if b.active
        ]
        out += [
            Drawable("enemy", e.x, e.y, e.scaled_radius(s), e.color, 0.0, e.health_fraction)
            for e in self.enemies if e.active
        ]
        p = self.player
        out.append(Drawable("player", p.x, p.y, p.radius * s, PLAYER_COLOR, p.angle, p.health_fraction))
        return out

    def get_info(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "health": self.player.health if self.player else 0,
            "score": self.score,
            "kills": self.kills,
            "difficulty": self.difficulty,
            "spawn_interval": self.spawn_interval,
            "num_enemies": len(self.enemies),
            "num_bullets": len(self.bullets),
            "time_ms": self.current_time,
        }
