from __future__ import annotations
import logging
from pathlib import Path

import numpy as np

from oifcodec import Header, uncompress

log = logging.getLogger(__name__)


class FrameSink:
    """
    Destination des frames reçues : une ou deux pages de width*height pixels.

    - `path` donné → np.memmap sur ce fichier (framebuffer mappé, fichier de
      test, ...) ; sinon un tableau en mémoire.
    - `double_buffer=True` → 2 pages : chaque frame est décodée dans la page
      cachée puis devient la page visible.
    """

    def __init__(self, width: int, height: int, path: str | Path | None = None,
                 double_buffer: bool = False) -> None:
        self.width, self.height = int(width), int(height)
        self.n_pages = 2 if double_buffer else 1
        shape = (self.n_pages, self.height, self.width)
        if path is None:
            self.pages = np.zeros(shape, dtype=np.uint32)
        else:
            p = Path(path)
            need = int(np.prod(shape)) * 4
            mode = "r+" if p.exists() and p.stat().st_size >= need else "w+"
            self.pages = np.memmap(p, dtype=np.uint32, mode=mode, shape=shape)
            log.debug("sink %s mapped (%s, %d bytes)", p, mode, need)
        self.visible = 0
        self.frames = 0

    @property
    def back(self) -> int:
        return (self.visible + 1) % self.n_pages

    def matches(self, header: Header) -> bool:
        return header.width == self.width and header.height == self.height

    def present(self, header: Header, payload: bytes) -> None:
        """Décode dans la page cachée puis l'affiche. Lève ValueError / OifDecodeError."""
        if not self.matches(header):
            raise ValueError(
                f"frame {header.width}x{header.height} does not match sink {self.width}x{self.height}"
            )
        page = self.back
        uncompress(header, payload, self.pages[page])
        self.visible = page
        self.frames += 1
        if isinstance(self.pages, np.memmap):
            self.pages.flush()

    def visible_frame(self) -> np.ndarray:
        return self.pages[self.visible]

    def close(self) -> None:
        if isinstance(self.pages, np.memmap):
            self.pages.flush()
