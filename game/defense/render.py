"""
Arcade window that draws simulation snapshots and forwards clicks

The simulation works in canvas coordinates (y grows downward); Arcade's
origin is bottom-left, so every y is flipped on the way in and out.
"""

from __future__ import annotations

import math

import arcade

from . import config
from .entities import GameMode, MatchState
from .simulation import DefenseSimulation
from .store import Snapshot


class DefenseWindow(arcade.Window):
    """Arcade window for rendering (and optionally playing) the defense simulation"""

    def __init__(self, sim: DefenseSimulation, interactive: bool = True, title: str = "Soo Nova Defense"):
        super().__init__(int(sim.world.width), int(sim.world.height), title,
                         update_rate=1 / 60)
        self.sim = sim
        self.interactive = interactive
        self.pending_mode = GameMode.CLASSIC

        # Colors
        self.BG = (255, 228, 241)
        self.SPACE_BG = (26, 5, 20)
        self.GROUND_C = (255, 182, 193)
        self.WRECK_C = (34, 34, 34)
        self.HUD_C = (220, 220, 220)

    def sy(self, y: float) -> float:
        return self.height - y

    # ----------------------------
    # Input / update
    # ----------------------------

    def on_update(self, delta_time: float):
        if self.interactive:
            self.sim.tick()

    def on_mouse_press(self, x, y, button, modifiers):
        if self.interactive:
            self.sim.click(x, self.height - y)

    def on_key_press(self, symbol, modifiers):
        if not self.interactive:
            return
        state = self.sim.state
        if symbol == arcade.key.R and state is not MatchState.START:
            self.sim.restart()
        elif state is not MatchState.PLAYING and symbol in (arcade.key.S, arcade.key.E, arcade.key.SPACE):
            if symbol == arcade.key.E:
                self.pending_mode = GameMode.ENDLESS
            elif symbol == arcade.key.S:
                self.pending_mode = GameMode.CLASSIC
            self.sim.start_game(self.pending_mode, self.width, self.height)

    def on_resize(self, width, height):
        super().on_resize(width, height)
        self.sim.resize(width, height)

    # ----------------------------
    # Drawing
    # ----------------------------

    def on_draw(self):
        snap = self.sim.snapshot()
        self.clear()

        self._draw_background(snap)
        self._draw_ground(snap)
        self._draw_warnings(snap)
        self._draw_cities(snap)
        self._draw_turrets(snap)
        self._draw_rockets(snap)
        self._draw_interceptors(snap)
        self._draw_particles(snap)
        self._draw_explosions(snap)
        self._draw_texts(snap)
        self._draw_hud(snap)

    def _draw_background(self, snap: Snapshot):
        bg = self.SPACE_BG if snap.universe_mode else self.BG
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, bg)
        if snap.universe_mode:
            # fixed pseudo-random star field
            for i in range(150):
                x = (math.sin(i * 123.45) * 0.5 + 0.5) * self.width
                y = (math.cos(i * 678.90) * 0.5 + 0.5) * self.height
                arcade.draw_point(x, y, (255, 255, 255, 180), 2)

    def _draw_ground(self, snap: Snapshot):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, config.GROUND_MARGIN, self.GROUND_C)

    def _draw_warnings(self, snap: Snapshot):
        for w in snap.warnings:
            alpha = int(255 * max(0.0, w.life))
            arcade.draw_text("!", w.x, self.sy(30), (255, 0, 255, alpha), 24,
                             anchor_x="center", bold=True)
            arcade.draw_line(w.x, self.sy(40), w.x, 0, (255, 0, 255, int(alpha * 0.3)), 1)

    def _draw_cities(self, snap: Snapshot):
        for c in snap.cities:
            y = self.sy(c.y)
            if c.active:
                arcade.draw_lrbt_rectangle_filled(c.x - 12, c.x + 12, y, y + 18, config.CITY_C)
            else:
                arcade.draw_lrbt_rectangle_filled(c.x - 12, c.x + 12, y, y + 4, self.WRECK_C)

    def _draw_turrets(self, snap: Snapshot):
        for t in snap.turrets:
            y = self.sy(t.y)
            if t.active:
                arcade.draw_arc_filled(t.x, y, 36, 36, config.TURRET_C, 0, 180)
                arcade.draw_line(t.x, y + 8, t.x, y + 25, config.TURRET_C, 5)
                # Ammo pips, ten per row below the turret
                for i in range(t.ammo):
                    row, col = divmod(i, 10)
                    px = t.x - 15 + col * 5
                    py = y - 10 - row * 5
                    arcade.draw_lrbt_rectangle_filled(px, px + 3, py - 3, py, config.TURRET_C)
            else:
                arcade.draw_arc_filled(t.x, y, 24, 24, self.WRECK_C, 0, 180)

    def _draw_rockets(self, snap: Snapshot):
        for r in snap.rockets:
            arcade.draw_line(r.start.x, self.sy(r.start.y), r.current.x, self.sy(r.current.y),
                             (255, 0, 255, 128), 2)
            arcade.draw_circle_filled(r.current.x, self.sy(r.current.y), 7, r.color)

    def _draw_interceptors(self, snap: Snapshot):
        s = 6
        for i in snap.interceptors:
            arcade.draw_line(i.start.x, self.sy(i.start.y), i.current.x, self.sy(i.current.y),
                             config.INTERCEPTOR_C, 2)
            tx, ty = i.target.x, self.sy(i.target.y)
            arcade.draw_line(tx - s, ty - s, tx + s, ty + s, config.WHITE_C, 1.5)
            arcade.draw_line(tx + s, ty - s, tx - s, ty + s, config.WHITE_C, 1.5)

    def _draw_particles(self, snap: Snapshot):
        for p in snap.particles:
            alpha = int(255 * max(0.0, p.life))
            y = self.sy(p.y)
            arcade.draw_lrbt_rectangle_filled(p.x, p.x + p.size, y - p.size, y, (*p.color, alpha))

    def _draw_explosions(self, snap: Snapshot):
        for e in snap.explosions:
            if e.radius <= 0:
                continue
            a = max(0.0, e.alpha)
            x, y = e.pos.x, self.sy(e.pos.y)
            arcade.draw_circle_filled(x, y, e.radius, (157, 0, 255, int(150 * a)))
            arcade.draw_circle_filled(x, y, e.radius * 0.7, (255, 0, 255, int(255 * a)))
            arcade.draw_circle_filled(x, y, e.radius * 0.3, (255, 255, 255, int(255 * a)))

    def _draw_texts(self, snap: Snapshot):
        for t in snap.floating_texts:
            alpha = int(255 * max(0.0, t.life))
            arcade.draw_text(t.text, t.x, self.sy(t.y), (*t.color, alpha), 16,
                             anchor_x="center", bold=True)

    def _draw_hud(self, snap: Snapshot):
        hud_c = self.HUD_C if snap.universe_mode else (90, 20, 60)
        goal = (f"Target {snap.score}/{config.WIN_SCORE}" if snap.mode is GameMode.CLASSIC
                else f"High Score {snap.high_score}")
        txt = (f"Score: {snap.score}  "
               f"Wave: {snap.round}  "
               f"Ammo: {snap.total_ammo}  "
               f"{goal}")
        arcade.draw_text(txt, 12, self.height - 24, hud_c, 14)

        banner = {
            MatchState.START: "S: classic   E: endless",
            MatchState.WON: "Mission Accomplished!   R: menu",
            MatchState.LOST: f"Defeat: All Turrets Destroyed (high score {snap.high_score})   R: menu",
        }.get(snap.state)
        if banner and self.interactive:
            arcade.draw_text(banner, self.width / 2, self.height / 2, hud_c, 20, anchor_x="center")
