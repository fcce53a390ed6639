from __future__ import annotations
import time
from dataclasses import dataclass

import numpy as np


@dataclass
class BouncingLogo:
    """Position d'un logo qui rebondit sur les bords d'un écran width x height."""
    width: int
    height: int
    logo_w: int
    logo_h: int
    x: int = 100
    y: int = 100
    dx: int = 3
    dy: int = 4

    def __post_init__(self) -> None:
        if self.logo_w > self.width or self.logo_h > self.height:
            raise ValueError("logo larger than the screen")
        # point de départ ramené dans l'écran
        self.x = min(max(0, self.x), self.width - self.logo_w)
        self.y = min(max(0, self.y), self.height - self.logo_h)

    def step(self) -> tuple[int, int]:
        """Avance d'un pas ; au contact d'un bord la direction s'inverse et la position ne bouge pas."""
        nx, ny = self.x + self.dx, self.y + self.dy
        if ny < 0 or ny + self.logo_h > self.height:
            self.dy = -self.dy
            ny = self.y
        if nx < 0 or nx + self.logo_w > self.width:
            self.dx = -self.dx
            nx = self.x
        self.x, self.y = nx, ny
        return self.x, self.y

    def render(self, logo: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
        """Écran transparent [H,W,4] avec le logo RGBA à la position courante."""
        if out is None:
            out = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        else:
            out[...] = 0
        out[self.y:self.y + self.logo_h, self.x:self.x + self.logo_w] = logo
        return out


class FramePacer:
    """Cadence fixe : `wait()` dort jusqu'à la fin de l'intervalle courant."""

    def __init__(self, fps: float, clock=time.monotonic, sleep=time.sleep) -> None:
        if fps <= 0:
            raise ValueError("fps must be > 0")
        self.interval = 1.0 / float(fps)
        self._clock, self._sleep = clock, sleep
        self._start = clock()

    def wait(self) -> None:
        left = self.interval - (self._clock() - self._start)
        if left > 0:
            self._sleep(left)
        self._start = self._clock()
