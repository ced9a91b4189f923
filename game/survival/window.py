"""
Arcade presentation shell for the survival shooter

Menu -> playing -> game over, with keyboard/mouse input captured into an
InputSnapshot once per frame. Game logic runs in y-down canvas space; all
drawing flips y for arcade.

Run:
    python -m game.survival.window --width 1280 --height 720
"""

import argparse
import math
from dataclasses import replace
from typing import Optional

import arcade

from .config import (
    PLAYER_ACCENT_COLOR,
    BACKGROUND_COLOR,
    PLAYER_COLOR,
)
from .engine import Game, InputSnapshot, SessionState
from .utils import seed_everything

GRID_COLOR = (78, 205, 196, 25)
TEXT_COLOR = (230, 230, 230)
OUTLINE_COLOR = (255, 255, 255)
BAR_BG = (51, 51, 51)
BAR_FG = (0, 255, 0)

_MOVE_KEYS = {
    arcade.key.W: "up",
    arcade.key.A: "left",
    arcade.key.S: "down",
    arcade.key.D: "right",
}


class SurvivalWindow(arcade.Window):
    """Arcade window hosting one Game"""

    def __init__(self, game: Game, interactive: bool = True, title: str = "Arena Survival"):
        super().__init__(game.width, game.height, title, resizable=interactive)
        self.game = game
        self.interactive = interactive
        self.input = InputSnapshot()
        self.background_color = BACKGROUND_COLOR
        self.message: Optional[str] = None

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, key, modifiers):
        if key in _MOVE_KEYS:
            setattr(self.input, _MOVE_KEYS[key], True)
            return
        if not self.interactive:
            return

        state = self.game.state
        if state == SessionState.MENU:
            if key in (arcade.key.ENTER, arcade.key.SPACE):
                self.start_game()
            elif key == arcade.key.C:
                self._stub_screen("Collection")
            elif key == arcade.key.B:
                self._stub_screen("Shop")
            elif key == arcade.key.I:
                self._stub_screen("Info")
        elif state == SessionState.GAME_OVER:
            if key == arcade.key.R:
                self.start_game()
            elif key == arcade.key.M:
                self.game.show_menu()
        if key == arcade.key.ESCAPE:
            self.close()

    def on_key_release(self, key, modifiers):
        if key in _MOVE_KEYS:
            setattr(self.input, _MOVE_KEYS[key], False)

    def on_mouse_motion(self, x, y, dx, dy):
        self.input.pointer_x = x
        self.input.pointer_y = self.height - y

    def on_mouse_press(self, x, y, button, modifiers):
        self.input.fire = True

    def on_mouse_release(self, x, y, button, modifiers):
        self.input.fire = False

    def on_resize(self, width, height):
        super().on_resize(width, height)
        # Minimized windows report zero size
        if width > 0 and height > 0:
            self.game.resize(width, height)

    def _stub_screen(self, name: str):
        self.message = f"{name}: coming soon"
        print(f"[SurvivalWindow] {name} screen")

    def start_game(self):
        self.message = None
        self.input.fire = False
        self.game.start()

    # ----------------------------
    # Loop
    # ----------------------------

    def on_update(self, delta_time):
        if self.interactive:
            # One snapshot per tick; the shell keeps mutating self.input
            snapshot = replace(self.input)
            self.game.update(delta_time * 1000.0, snapshot)

    def on_draw(self):
        self.clear()

        state = self.game.state
        if state == SessionState.PLAYING:
            self._draw_grid()
            self._draw_entities()
            self._draw_hud()
        elif state == SessionState.MENU:
            self._draw_menu()
        else:
            self._draw_game_over()

    # ----------------------------
    # Drawing
    # ----------------------------

    def _flip(self, y: float) -> float:
        return self.height - y

    def _font(self, key: str) -> float:
        return max(8, self.game.config["ui"][key] * self.game.scale * 1.5)

    def _draw_grid(self):
        s = self.game.scale
        step = self.game.config["ui"]["grid_size"] * s
        if step <= 0:
            return
        x = 0.0
        while x < self.width:
            arcade.draw_line(x, 0, x, self.height, GRID_COLOR, max(1.0, s))
            x += step
        y = 0.0
        while y < self.height:
            arcade.draw_line(0, y, self.width, y, GRID_COLOR, max(1.0, s))
            y += step

    def _draw_entities(self):
        s = self.game.scale
        line_w = max(1.0, 2 * s)

        for d in self.game.drawables():
            cx, cy = d.x, self._flip(d.y)

            if d.kind == "bullet":
                arcade.draw_circle_filled(cx, cy, d.radius, d.color)
                arcade.draw_circle_filled(cx, cy, d.radius * 0.5, OUTLINE_COLOR)

            elif d.kind == "enemy":
                arcade.draw_circle_filled(cx, cy, d.radius, d.color)
                arcade.draw_circle_outline(cx, cy, d.radius, OUTLINE_COLOR, line_w)
                if d.health_fraction < 1.0:
                    bar_w = d.radius * 2
                    bar_h = 4 * s
                    top = cy + d.radius + 10 * s
                    left = cx - bar_w / 2
                    arcade.draw_lrbt_rectangle_filled(left, left + bar_w, top - bar_h, top, BAR_BG)
                    if d.health_fraction > 0:
                        arcade.draw_lrbt_rectangle_filled(
                            left, left + bar_w * d.health_fraction, top - bar_h, top, BAR_FG
                        )

            else:
                arcade.draw_circle_filled(cx, cy, d.radius, d.color)
                # Facing marker; angle is in y-down space
                self._draw_facing(cx, cy, d.radius, d.angle)
                arcade.draw_circle_outline(cx, cy, d.radius, OUTLINE_COLOR, line_w)

    def _draw_facing(self, cx, cy, r, angle):
        cos_a, sin_a = math.cos(angle), math.sin(angle)

        def point(fx, fy):
            # rotate in y-down space, then flip
            return cx + fx * cos_a - fy * sin_a, cy - (fx * sin_a + fy * cos_a)

        arcade.draw_polygon_filled(
            [point(r, 0), point(r * 0.6, -r * 0.4), point(r * 0.6, r * 0.4)],
            PLAYER_ACCENT_COLOR,
        )

    def _draw_hud(self):
        hud = self.game.hud()
        if hud is None:
            return
        s = self.game.scale
        font = self._font("font_size")

        bar_w, bar_h = 300 * s, 20 * s
        x0, top = 20 * s, self.height - 20 * s
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, top - bar_h, top, BAR_BG)
        fill = bar_w * hud.health_fraction
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, top - bar_h, top, PLAYER_COLOR)
        arcade.draw_text(hud.health_text, x0 + bar_w + 10 * s, top - bar_h, TEXT_COLOR, font)

        arcade.draw_text(hud.timer_text, self.width / 2, top - bar_h, TEXT_COLOR, font,
                         anchor_x="center")
        arcade.draw_text(f"Score: {hud.score} (Kills: {hud.kills})",
                         self.width - 20 * s, top - bar_h, TEXT_COLOR, font, anchor_x="right")

    def _draw_menu(self):
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text("ARENA SURVIVAL", cx, cy + 80, PLAYER_COLOR,
                         self._font("title_font_size"), anchor_x="center")
        lines = [
            "ENTER - Start",
            "C - Collection   B - Shop   I - Info",
            "ESC - Quit",
        ]
        font = self._font("button_font_size")
        for i, line in enumerate(lines):
            arcade.draw_text(line, cx, cy - i * font * 2, TEXT_COLOR, font, anchor_x="center")
        if self.message:
            arcade.draw_text(self.message, cx, cy - len(lines) * font * 2 - 20, PLAYER_COLOR,
                             font, anchor_x="center")

    def _draw_game_over(self):
        summary = self.game.summary
        cx, cy = self.width / 2, self.height / 2
        font = self._font("font_size")
        arcade.draw_text("GAME OVER", cx, cy + 80, PLAYER_COLOR,
                         self._font("title_font_size"), anchor_x="center")
        if summary is not None:
            lines = [
                f"Final score: {summary.score}",
                f"Survival time: {summary.survival_seconds}s",
                f"Coins earned: {summary.coins}",
            ]
            for i, line in enumerate(lines):
                arcade.draw_text(line, cx, cy - i * font * 2, TEXT_COLOR, font, anchor_x="center")
        arcade.draw_text("R - Restart   M - Main menu", cx, cy - 8 * font, TEXT_COLOR,
                         font, anchor_x="center")


def main():
    parser = argparse.ArgumentParser(description="Play the arena survival shooter")
    parser.add_argument("--width", type=int, default=1280, help="Window width (default: 1280)")
    parser.add_argument("--height", type=int, default=720, help="Window height (default: 720)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--duration",
        type=int,
        default=None,
        help="Session length in seconds (default: 180)",
    )
    parser.add_argument("--verbose", type=int, default=1, help="Print session events (default: 1)")

    args = parser.parse_args()

    seed_everything(args.seed)
    config = None
    if args.duration is not None:
        config = {"game": {"duration": args.duration * 1000}}

    game = Game(args.width, args.height, config=config, verbose=args.verbose)
    SurvivalWindow(game)
    arcade.run()


if __name__ == "__main__":
    main()
