#!/usr/bin/env python3
"""
Scene assembly for the Orrery.

SceneAssembler owns everything with state: the descriptor table, one BodyState per
descriptor, the frame clock and the current selection. Each frame it ticks the
clock, advances every body once, recomposes the whole node list and hands it to
the caller (pull model; the renderer does any diffing it wants).

Threading model
- The viewport thread calls frame() and pick_at(); the controls thread reads the
  selection and changes presets/time scale. All of it goes through one re-entrant
  lock so a pick can never observe a half-composed frame.

Lifecycle
- "Idle" until the first frame, then "Running" for as long as frames arrive.
"""
import logging
import math
import random
import threading
from typing import List, Optional, Sequence

from .clock import OrbitalClock
from .composer import compose, compose_central_body
from .constants import DEFAULT_TIME_SCALE
from .data_models import (
    BodyDescriptor,
    BodyState,
    CentralBodyDescriptor,
    ComposedBody,
    RenderNode,
    SceneFrame,
    SelectionSummary,
)
from .orbits import OrbitPathBuilder, advance, initial_state, orbital_position
from .selection import SelectionBridge

logger = logging.getLogger(__name__)

SCENE_IDLE = "Idle"
SCENE_RUNNING = "Running"


class SceneAssembler:
    """
    Per-frame orchestration of the orbital scene.

    Args:
        descriptors: Orbiting bodies in registration (draw) order
        central: The star at the origin; a default star is used when omitted
        rng: Random source for initial phases; overrides seed
        seed: Seed for a private random.Random when rng is not given
        clock: Frame clock; a fresh OrbitalClock when omitted
        path_builder: Guide path sampler, shareable between scenes
    """

    def __init__(
        self,
        descriptors: Sequence[BodyDescriptor],
        central: Optional[CentralBodyDescriptor] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        clock: Optional[OrbitalClock] = None,
        path_builder: Optional[OrbitPathBuilder] = None,
    ):
        self.lock = threading.RLock()
        self.rng = rng if rng is not None else random.Random(seed)
        self.clock = clock if clock is not None else OrbitalClock()
        self.path_builder = path_builder if path_builder is not None else OrbitPathBuilder()
        self.selection = SelectionBridge()
        self.central = central if central is not None else CentralBodyDescriptor()
        self.status = SCENE_IDLE
        self.playing = True
        self.time_scale = DEFAULT_TIME_SCALE

        self.descriptors: List[BodyDescriptor] = []
        self.states: List[BodyState] = []
        self._central_node: RenderNode = compose_central_body(self.central)
        self._composed: List[ComposedBody] = []
        self.last_frame: Optional[SceneFrame] = None
        self._load(descriptors)

    def _load(self, descriptors: Sequence[BodyDescriptor]) -> None:
        self.descriptors = list(descriptors)
        self.states = [initial_state(self.rng) for _ in self.descriptors]
        self._compose_all()
        self.last_frame = SceneFrame(
            nodes=self._collect_nodes(),
            selection=self.selection.get_current(),
            delta=0.0,
            timestamp=None,
        )

    def _compose_all(self) -> None:
        self._composed = [
            compose(i, d, s, self.path_builder, self._select_descriptor)
            for i, (d, s) in enumerate(zip(self.descriptors, self.states))
        ]

    def _collect_nodes(self) -> tuple:
        nodes = [self._central_node]
        for composed in self._composed:
            nodes.extend(composed.nodes())
        return tuple(nodes)

    def _select_descriptor(self, descriptor: BodyDescriptor) -> SelectionSummary:
        with self.lock:
            return self.selection.select(descriptor)

    # -----------------------
    # Per-frame protocol
    # -----------------------

    def frame(self, now: float) -> SceneFrame:
        """
        Advance the scene to timestamp `now` (seconds) and compose it.

        The clock ticks even while paused so resuming does not jump.
        """
        with self.lock:
            delta = self.clock.tick(now)
            if self.status == SCENE_IDLE:
                self.status = SCENE_RUNNING
                logger.debug("scene running with %d bodies", len(self.descriptors))
            scaled = delta * self.time_scale if self.playing else 0.0
            self.states = [advance(s, d, scaled) for d, s in zip(self.descriptors, self.states)]
            self._compose_all()
            self.last_frame = SceneFrame(
                nodes=self._collect_nodes(),
                selection=self.selection.get_current(),
                delta=scaled,
                timestamp=float(now),
            )
            return self.last_frame

    # -----------------------
    # Selection
    # -----------------------

    def pick(self, body_id: int) -> Optional[SelectionSummary]:
        """Select a body by id; unknown ids leave the selection unchanged."""
        with self.lock:
            if not 0 <= body_id < len(self._composed):
                logger.debug("pick for unknown body id %r ignored", body_id)
                return None
            return self._composed[body_id].on_pick()

    def hit_test(self, x: float, z: float, pick_radius: float) -> Optional[int]:
        """
        Id of the body nearest to scene point (x, z), or None.

        A body is hit within the larger of twice its mesh radius and pick_radius.
        """
        with self.lock:
            idx = None
            min_d = float("inf")
            for i, (d, s) in enumerate(zip(self.descriptors, self.states)):
                bx, _, bz = orbital_position(d, s)
                dist = math.hypot(bx - x, bz - z)
                pr = max(d.mesh_radius * 2, pick_radius)
                if dist < pr and dist < min_d:
                    min_d = dist
                    idx = i
            return idx

    def pick_at(self, x: float, z: float, pick_radius: float) -> Optional[SelectionSummary]:
        """Select the body under scene point (x, z); a miss leaves the selection unchanged."""
        with self.lock:
            idx = self.hit_test(x, z, pick_radius)
            if idx is None:
                return None
            return self.pick(idx)

    def current_selection(self) -> Optional[SelectionSummary]:
        with self.lock:
            return self.selection.get_current()

    def clear_selection(self) -> None:
        with self.lock:
            self.selection.clear()

    # -----------------------
    # Controls
    # -----------------------

    def set_playing(self, playing: bool) -> None:
        with self.lock:
            self.playing = bool(playing)

    def set_time_scale(self, scale: float) -> None:
        with self.lock:
            scale = float(scale)
            if not math.isfinite(scale) or scale < 0:
                raise ValueError("time scale must be a finite number >= 0")
            self.time_scale = scale

    def replace_descriptors(
        self,
        descriptors: Sequence[BodyDescriptor],
        central: Optional[CentralBodyDescriptor] = None,
        rng: Optional[random.Random] = None,
        time_scale: Optional[float] = None,
    ) -> None:
        """
        Swap in another body table; states are rebuilt and the selection cleared.

        The time scale is set to `time_scale`, or back to DEFAULT_TIME_SCALE when the
        new table does not carry one.
        """
        with self.lock:
            self.set_time_scale(DEFAULT_TIME_SCALE if time_scale is None else time_scale)
            if rng is not None:
                self.rng = rng
            if central is not None:
                self.central = central
                self._central_node = compose_central_body(central)
            self.selection.clear()
            self._load(descriptors)
            logger.info("scene reloaded with %d bodies", len(self.descriptors))

    def max_orbit_radius(self) -> float:
        with self.lock:
            radii = [d.distance_from_center for d in self.descriptors]
            return max(radii) if radii else self.central.mesh_radius
