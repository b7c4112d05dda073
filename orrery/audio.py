#!/usr/bin/env python3
"""
Looping theme music for the Orrery, played through pygame.mixer.music.

Audio is optional: a missing file or a machine without an audio device only logs
a warning, and the player stays stopped.
"""
import logging
import os
from typing import Optional

import pygame

from .constants import THEME_VOLUME

logger = logging.getLogger(__name__)


class ThemePlayer:
    """Play/pause toggle over a single looping track."""

    def __init__(self, path: Optional[str], volume: float = THEME_VOLUME):
        self.path = path
        self.volume = max(0.0, min(1.0, float(volume)))
        self.playing = False
        self._loaded = False
        self._started = False

    def _ensure_loaded(self) -> bool:
        if self._loaded:
            return True
        if not self.path or not os.path.isfile(self.path):
            logger.warning("theme track not found: %s", self.path)
            return False
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            pygame.mixer.music.load(self.path)
        except pygame.error as exc:
            logger.warning("audio unavailable: %s", exc)
            return False
        pygame.mixer.music.set_volume(self.volume)
        self._loaded = True
        return True

    def play(self) -> bool:
        if self.playing:
            return True
        if not self._ensure_loaded():
            return False
        if self._started:
            pygame.mixer.music.unpause()
        else:
            pygame.mixer.music.play(loops=-1)
            self._started = True
        self.playing = True
        logger.info("theme playing")
        return True

    def pause(self) -> None:
        if not self.playing:
            return
        pygame.mixer.music.pause()
        self.playing = False
        logger.info("theme paused")

    def toggle(self) -> bool:
        """Flip playback; returns whether the theme is now playing."""
        if self.playing:
            self.pause()
        else:
            self.play()
        return self.playing

    def stop(self) -> None:
        if self._loaded and pygame.mixer.get_init():
            pygame.mixer.music.stop()
        self.playing = False
        self._started = False
