# packages/oifcodec/src/oifcodec/bitstream/cursor.py
# -----------------------------------------------------------------------------
# Curseurs bornés sur les deux buffers d'un appel de décodage.
#
# - WordReader : lecture de mots 32 bits (<u4) dans le flux compressé, borné par
#   payload_size.
# - PixelWriter : écriture dans le tableau de pixels uint32 de destination.
#
# Toute avance passe par une méthode qui vérifie la borne AVANT de bouger
# l'index ; les compteurs des records viennent du flux et ne sont pas fiables.
# -----------------------------------------------------------------------------
from __future__ import annotations

import numpy as np

from ..errors import DstOverrunError, SrcOverrunError

__all__ = ["WordReader", "PixelWriter", "WORD"]

WORD = 4
_LE_U32 = np.dtype("<u4")


class WordReader:
    """Curseur de lecture sur les `limit` premiers octets de `buf`."""

    __slots__ = ("_mv", "_limit", "pos")

    def __init__(self, buf, limit: int | None = None) -> None:
        mv = memoryview(buf).cast("B")
        n = len(mv) if limit is None else min(int(limit), len(mv))
        self._mv = mv
        self._limit = max(0, n)
        self.pos = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def remaining(self) -> int:
        return self._limit - self.pos

    def _require(self, nbytes: int, what: str) -> None:
        if self.pos + nbytes > self._limit:
            raise SrcOverrunError(
                f"{what}: need {nbytes} bytes at offset {self.pos}, only {self.remaining} left",
                offset=self.pos,
            )

    def take_word(self) -> int:
        self._require(WORD, "control word")
        (w,) = np.frombuffer(self._mv, dtype=_LE_U32, count=1, offset=self.pos)
        self.pos += WORD
        return int(w)

    def take_pixels(self, count: int) -> np.ndarray:
        """Vue (sans copie) sur `count` pixels little-endian."""
        nbytes = WORD * int(count)
        self._require(nbytes, "pixel data")
        if nbytes == 0:
            return np.empty(0, dtype=_LE_U32)
        out = np.frombuffer(self._mv, dtype=_LE_U32, count=int(count), offset=self.pos)
        self.pos += nbytes
        return out


class PixelWriter:
    """Curseur d'écriture sur un tableau uint32 contigu (vue 1-D)."""

    __slots__ = ("_px", "pos")

    def __init__(self, pixels: np.ndarray) -> None:
        self._px = pixels.reshape(-1)
        if not np.may_share_memory(self._px, pixels):
            raise ValueError("PixelWriter: destination must be a contiguous buffer")
        self.pos = 0

    @property
    def size(self) -> int:
        return int(self._px.size)

    def seek(self, index: int) -> None:
        # Pas de vérif ici : l'écriture suivante contrôle pos + count.
        self.pos = int(index)

    def require(self, count: int) -> None:
        if self.pos + int(count) > self._px.size:
            raise DstOverrunError(
                f"{count} pixels at index {self.pos} exceed destination of {self._px.size}",
                offset=self.pos,
            )

    def put(self, values: np.ndarray) -> None:
        n = int(values.size)
        self.require(n)
        self._px[self.pos:self.pos + n] = values
        self.pos += n

    def fill(self, value: int, count: int) -> None:
        self.require(count)
        self._px[self.pos:self.pos + int(count)] = value
        self.pos += int(count)
