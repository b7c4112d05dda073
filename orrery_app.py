#!/usr/bin/env python3
"""
Orrery application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Shares one SceneAssembler between them; the assembler guards its own state with a
  re-entrant lock, so both threads call it directly.
- Draws the composed scene top-down, resolves texture identities to surface colours,
  and shows the picked planet's details in the viewport and in the controls window.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the viewport),
  ticking the scene, and drawing. Texture files are decoded here, outside the scene lock.
- The UI class runs in the main thread via Dear PyGui. It polls the current selection on a
  periodic frame callback and changes presets, time scale and audio as requested.

Units and conventions
- Scene units read as AU, body sizes as Earth radii, orbital periods as Earth years.
- Colors are RGB tuples in 0..255.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python orrery_app.py --preset "Solar System"`
3) Optional: put 2k_*.jpg textures under <assets>/textures and a theme track at
   <assets>/audio/theme.mp3.
"""

import argparse
import logging
import os
import random
import threading
import time
from typing import Dict, Optional, Tuple

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from orrery.audio import ThemePlayer
from orrery.camera import TopDownCamera
from orrery.clock import OrbitalClock
from orrery.constants import (
    BACKGROUND_COLOR,
    HUD_TEXT_COLOR,
    MAX_BODY_PIXELS,
    MAX_FRAME_DELTA,
    MIN_BODY_PIXELS,
    SAFE_COORD_LIMIT,
    SELECTION_COLOR,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from orrery.data_models import NODE_BODY, NODE_GUIDE_PATH, NODE_RING, NODE_STAR, RenderNode, SceneFrame
from orrery.presets_loader import BUILTIN_PRESET_NAME, list_templates, load_preset
from orrery.scene import SceneAssembler
from orrery.selection import format_summary
from orrery.starfield import generate_starfield, star_color
from orrery.vector_utils import clamp, rotate2d

logger = logging.getLogger("orrery")

DEFAULT_ASSETS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets")

# ============================================================
# Texture resolution
# ============================================================

class TextureCache:
    """
    Resolves texture identities ("/textures/2k_earth.jpg") against an assets
    directory. Each texture is decoded once and reduced to its average colour; a
    missing or unreadable file resolves to the node's fallback colour.
    """
    def __init__(self, assets_dir: str):
        self.assets_dir = assets_dir
        self._colors: Dict[str, Optional[Tuple[int, int, int]]] = {}

    def path_for(self, texture_ref: str) -> str:
        return os.path.join(self.assets_dir, texture_ref.lstrip("/\\"))

    def resolve(self, texture_ref: Optional[str], fallback: Tuple[int, int, int]) -> Tuple[int, int, int]:
        if not texture_ref:
            return fallback
        if texture_ref not in self._colors:
            self._colors[texture_ref] = self._load(texture_ref)
        color = self._colors[texture_ref]
        return color if color is not None else fallback

    def _load(self, texture_ref: str) -> Optional[Tuple[int, int, int]]:
        path = self.path_for(texture_ref)
        if not os.path.isfile(path):
            logger.warning("texture not found, using fallback colour: %s", path)
            return None
        try:
            surface = pygame.image.load(path)
        except pygame.error as exc:
            logger.warning("could not decode texture %s: %s", path, exc)
            return None
        r, g, b = pygame.transform.average_color(surface)[:3]
        return (int(r), int(g), int(b))

    def preload(self, nodes) -> None:
        for node in nodes:
            if node.texture_ref:
                self.resolve(node.texture_ref, (0, 0, 0))

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    Pygame loop: ticks the scene, draws stars, guide paths, bodies, rings and overlay.
    Handles picking, camera panning and zoom.
    """
    def __init__(self, scene: SceneAssembler, textures: TextureCache, seed: Optional[int] = None):
        super().__init__(daemon=True)
        self.scene = scene
        self.textures = textures
        self.camera = TopDownCamera()
        self.stars = generate_starfield(random.Random(seed))
        self.surface = None
        self.clock = None
        self.font = None
        self._star_layer = None
        self.dragging_background = False
        self.drag_start_screen = (0, 0)
        self.pan_speed_keys = 600  # pixels per second
        self.selected_body_id: Optional[int] = None
        self.running = True

    def auto_frame_camera(self):
        """Fit the outermost orbit into view with margin."""
        self.camera.fit_radius(self.scene.max_orbit_radius())

    def run(self):
        pygame.init()
        pygame.display.set_caption("Orrery - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.font = _load_font(16)
        self.auto_frame_camera()
        self.textures.preload(self.scene.last_frame.nodes)

        last_time = time.perf_counter()
        while self.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events(real_dt)
            frame = self.scene.frame(now)
            self.draw(frame)

            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def handle_events(self, real_dt):
        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            self.camera.drag(self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_RIGHT]:
            self.camera.drag(-self.pan_speed_keys * real_dt, 0)
        if keys[pygame.K_UP]:
            self.camera.drag(0, self.pan_speed_keys * real_dt)
        if keys[pygame.K_DOWN]:
            self.camera.drag(0, -self.pan_speed_keys * real_dt)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)
                self._star_layer = None

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                with self.scene.lock:
                    self.scene.set_playing(not self.scene.playing)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    self.pick_at_screen(event.pos)
                elif event.button in (2, 3):
                    self.dragging_background = True
                    self.drag_start_screen = event.pos

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button in (2, 3):
                    self.dragging_background = False

            elif event.type == pygame.MOUSEMOTION and self.dragging_background:
                mouse = event.pos
                dx = mouse[0] - self.drag_start_screen[0]
                dy = mouse[1] - self.drag_start_screen[1]
                self.camera.drag(dx, dy)
                self.drag_start_screen = mouse

    def pick_at_screen(self, screen_pos):
        wx, _, wz = self.camera.unproject(screen_pos)
        # Ten pixels of slack so distant, tiny bodies stay clickable
        with self.scene.lock:
            body_id = self.scene.hit_test(wx, wz, pick_radius=self.camera.upp * 10)
            if body_id is not None:
                self.scene.pick(body_id)
                self.selected_body_id = body_id

    def _draw_star_layer(self, surf):
        w, h = surf.get_size()
        if self._star_layer is None or self._star_layer.get_size() != (w, h):
            layer = pygame.Surface((w, h))
            layer.fill(BACKGROUND_COLOR)
            for star in self.stars:
                layer.set_at((int(star.u * w), int(star.v * h)), star_color(star))
            self._star_layer = layer
        surf.blit(self._star_layer, (0, 0))

    def draw_node(self, surf, node: RenderNode):
        geo = node.geometry
        if node.kind == NODE_GUIDE_PATH:
            pts = []
            for p in geo["points"]:
                sp = _safe_point(self.camera.project(p))
                if sp:
                    pts.append(sp)
            if len(pts) > 1:
                pygame.draw.aalines(surf, _dim(geo["color"], geo["opacity"]), False, pts)
            return

        center = _safe_point(self.camera.project(node.position))
        if center is None:
            return

        if node.kind in (NODE_STAR, NODE_BODY):
            color = self.textures.resolve(node.texture_ref, geo["color"])
            r = int(clamp(self.camera.length_to_pixels(geo["radius"]), MIN_BODY_PIXELS, MAX_BODY_PIXELS))
            gfxdraw.filled_circle(surf, center[0], center[1], r, color)
            gfxdraw.aacircle(surf, center[0], center[1], r, color)
            if node.kind == NODE_BODY and r > 4:
                # Meridian line so the self-rotation is visible
                mx, my = rotate2d((r, 0.0), geo["rotation"])
                pygame.draw.line(surf, _dim(color, 0.5), center, (int(center[0] + mx), int(center[1] + my)), 1)

        elif node.kind == NODE_RING:
            outer = int(self.camera.length_to_pixels(geo["outer_radius"]))
            inner = int(self.camera.length_to_pixels(geo["inner_radius"]))
            if outer > 0:
                pygame.draw.circle(surf, _dim(geo["color"], geo["opacity"]), center, outer, max(1, outer - inner))

    def draw_selection_marker(self, surf, frame: SceneFrame):
        if frame.selection is None or self.selected_body_id is None:
            return
        for node in frame.nodes:
            if node.kind == NODE_BODY and node.body_id == self.selected_body_id:
                c = _safe_point(self.camera.project(node.position))
                if c:
                    r = int(clamp(self.camera.length_to_pixels(node.geometry["radius"]), MIN_BODY_PIXELS, MAX_BODY_PIXELS))
                    gfxdraw.aacircle(surf, c[0], c[1], r + 4, SELECTION_COLOR)
                return

    def draw_details(self, surf, frame: SceneFrame):
        if frame.selection is None:
            return
        lines = format_summary(frame.selection)
        imgs = [self.font.render(line, True, HUD_TEXT_COLOR) for line in lines]
        width = max(img.get_width() for img in imgs) + 20
        height = sum(img.get_height() + 4 for img in imgs) + 10
        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        panel.fill((26, 26, 26, 230))
        surf.blit(panel, (20, 80))
        y = 85
        for img in imgs:
            surf.blit(img, (30, y))
            y += img.get_height() + 4

    def draw(self, frame: SceneFrame):
        surf = self.surface
        self._draw_star_layer(surf)

        for node in frame.nodes:
            self.draw_node(surf, node)
        self.draw_selection_marker(surf, frame)
        self.draw_details(surf, frame)

        draw_text(surf, self.font, "Click: select planet | Right/Middle-drag: pan | Wheel: zoom | Arrows: pan | Space: Pause/Play", 10, 10, HUD_TEXT_COLOR)
        with self.scene.lock:
            ts = self.scene.time_scale
            playing = self.scene.playing
        draw_text(surf, self.font, f"Speed: {ts:g}x  [{'Playing' if playing else 'Paused'}]", 10, 30, HUD_TEXT_COLOR)

        pygame.display.flip()


def _load_font(size):
    if not pygame.font.get_init():
        pygame.font.init()
    try:
        return pygame.font.SysFont("consolas", size)
    except (pygame.error, OSError):
        return pygame.font.Font(None, size)


def draw_text(surface, font, text, x, y, color):
    img = font.render(text, True, color)
    surface.blit(img, (x, y))


def _dim(color, factor):
    # Blend toward the black background; stands in for alpha on opaque surfaces
    return tuple(int(c * factor) for c in color[:3])


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: presets, simulation controls, theme song and planet details.
    """
    def __init__(self, scene: SceneAssembler, renderer: PygameRenderer, theme: ThemePlayer,
                 initial_preset: str):
        self.scene = scene
        self.renderer = renderer
        self.theme = theme
        self.initial_preset = initial_preset

        self.status_msg_id = None
        self.play_button_id = None
        self.theme_button_id = None
        self.speed_slider_id = None
        self.detail_line_ids = []
        self.no_selection_id = None

        self._last_selection = None

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        current = dpg.get_frame_count()
        dpg.set_frame_callback(current + 6, self._sync_ui_with_scene)

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Orrery - Controls', width=440, height=440)

        with dpg.window(label="Controls", width=420, height=420, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Preset:")
                self._template_map = {display: fn for fn, display in list_templates()}
                preset_items = list(self._template_map.keys()) or [BUILTIN_PRESET_NAME]
                default_item = self.initial_preset if self.initial_preset in preset_items else preset_items[0]
                dpg.add_combo(preset_items, default_value=default_item, width=180, tag="preset_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_preset(dpg.get_value("preset_combo")))
                dpg.add_button(label="Auto-fit", callback=self.renderer.auto_frame_camera)

            dpg.add_separator()

            with dpg.group(horizontal=True):
                self.play_button_id = dpg.add_button(label="Pause", width=80, callback=self._toggle_play)
                self.speed_slider_id = dpg.add_slider_float(
                    label="Time scale", default_value=self.scene.time_scale,
                    min_value=0.0, max_value=10.0, width=200,
                    callback=lambda s, a, u: self._set_time_scale(a), tag="speed_slider")

            self.theme_button_id = dpg.add_button(label="Play Theme Song", callback=self._toggle_theme)

            dpg.add_separator()

            dpg.add_text("Planet Details")
            self.no_selection_id = dpg.add_text("Click a planet in the viewport.", color=(150, 150, 150))
            for _ in range(4):
                self.detail_line_ids.append(dpg.add_text("", show=False))
            dpg.add_button(label="Clear Selection", callback=self._clear_selection)

            dpg.add_separator()
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _toggle_play(self):
        with self.scene.lock:
            self.scene.set_playing(not self.scene.playing)
            playing = self.scene.playing
        dpg.configure_item(self.play_button_id, label="Pause" if playing else "Play")
        self._set_status(f"Simulation {'playing' if playing else 'paused'}.")

    def _set_time_scale(self, val):
        try:
            self.scene.set_time_scale(val)
        except ValueError as exc:
            self._set_error(str(exc))

    def _toggle_theme(self):
        playing = self.theme.toggle()
        dpg.configure_item(self.theme_button_id, label="Pause Theme Song" if playing else "Play Theme Song")
        if not playing and self.theme.path and not os.path.isfile(self.theme.path):
            self._set_error(f"Theme track not found: {self.theme.path}")

    def _clear_selection(self):
        self.scene.clear_selection()
        self.renderer.selected_body_id = None

    def load_preset(self, name: str):
        bodies, central, time_scale, display_name = load_preset(self._template_map.get(name, name))
        self.scene.replace_descriptors(bodies, central=central, time_scale=time_scale)
        self.renderer.selected_body_id = None
        dpg.set_value(self.speed_slider_id, self.scene.time_scale)
        self.renderer.auto_frame_camera()
        self._set_status(f"Loaded preset: {display_name}")

    def _sync_ui_with_scene(self):
        """Periodic UI update mirroring the current selection into the details panel."""
        with self.scene.lock:
            playing = self.scene.playing
        # Space in the viewport toggles play without going through this window
        dpg.configure_item(self.play_button_id, label="Pause" if playing else "Play")

        summary = self.scene.current_selection()
        if summary != self._last_selection:
            self._last_selection = summary
            if summary is None:
                dpg.configure_item(self.no_selection_id, show=True)
                for item in self.detail_line_ids:
                    dpg.configure_item(item, show=False)
            else:
                dpg.configure_item(self.no_selection_id, show=False)
                for item, line in zip(self.detail_line_ids, format_summary(summary)):
                    dpg.set_value(item, line)
                    dpg.configure_item(item, show=True)
        if not self.renderer.is_alive():
            dpg.stop_dearpygui()
            return
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Interactive scaled model of a star system")
    parser.add_argument("--preset", default=BUILTIN_PRESET_NAME,
                        help="Preset display name or file name in templates/.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for initial orbital phases and the star field.")
    parser.add_argument("--assets", default=DEFAULT_ASSETS_DIR,
                        help="Directory holding textures/ and audio/.")
    parser.add_argument("--theme", default=None,
                        help="Theme track to loop (default: <assets>/audio/theme.mp3).")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def build_scene(preset: str, seed: Optional[int]) -> Tuple[SceneAssembler, str]:
    bodies, central, time_scale, display_name = load_preset(preset)
    scene = SceneAssembler(bodies, central=central, seed=seed,
                           clock=OrbitalClock(max_delta=MAX_FRAME_DELTA))
    if time_scale is not None:
        scene.set_time_scale(time_scale)
    return scene, display_name


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s  %(levelname)-7s  %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    scene, display_name = build_scene(args.preset, args.seed)
    logger.info("loaded preset %r with %d bodies", display_name, len(scene.descriptors))

    textures = TextureCache(args.assets)
    theme = ThemePlayer(args.theme or os.path.join(args.assets, "audio", "theme.mp3"))
    renderer = PygameRenderer(scene, textures, seed=args.seed)

    # Start Pygame renderer thread
    renderer.start()

    ui = UI(scene, renderer, theme, display_name)

    # Keyboard shortcut in UI window to toggle play/pause (Space)
    with dpg.handler_registry():
        def key_press(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_press)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        renderer.running = False
        renderer.join(timeout=2.0)
        theme.stop()
        dpg.destroy_context()

if __name__ == "__main__":
    main()
