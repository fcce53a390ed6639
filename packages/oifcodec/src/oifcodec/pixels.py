# packages/oifcodec/src/oifcodec/pixels.py
from __future__ import annotations

import numpy as np

__all__ = ["rgba_to_pixels", "pixels_to_rgba", "as_pixel_buffer", "new_pixel_buffer"]

# Un pixel OIF = 4 octets RGBA lus comme un entier 32 bits little-endian
# (R dans l'octet de poids faible).
PIXEL_DTYPE = np.dtype("<u4")


def rgba_to_pixels(rgba: np.ndarray) -> np.ndarray:
    """[H,W,4] uint8 → [H,W] uint32 (copie contiguë)."""
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"expected [H,W,4] RGBA array, got shape {rgba.shape}")
    if rgba.dtype != np.uint8:
        raise ValueError(f"expected uint8 RGBA array, got {rgba.dtype}")
    a = np.ascontiguousarray(rgba)
    return a.view(PIXEL_DTYPE)[..., 0].astype(np.uint32)


def pixels_to_rgba(pixels: np.ndarray, width: int | None = None, height: int | None = None) -> np.ndarray:
    """[H,W] (ou plat + width/height) uint32 → [H,W,4] uint8."""
    px = np.asarray(pixels)
    if px.ndim == 1:
        if width is None or height is None:
            raise ValueError("flat pixel buffer needs width and height")
        px = px.reshape(int(height), int(width))
    le = np.ascontiguousarray(px, dtype=PIXEL_DTYPE)
    return le.view(np.uint8).reshape(px.shape[0], px.shape[1], 4).copy()


def as_pixel_buffer(pixels: np.ndarray, count: int) -> np.ndarray:
    """Vue 1-D uint32 de `count` pixels ; lève ValueError sur taille/type invalides."""
    px = np.asarray(pixels)
    if px.dtype.kind != "u" or px.dtype.itemsize != 4:
        raise ValueError(f"pixel buffer must be uint32, got {px.dtype}")
    if px.size != int(count):
        raise ValueError(f"pixel buffer has {px.size} pixels, expected {count}")
    return px.reshape(-1)


def new_pixel_buffer(width: int, height: int) -> np.ndarray:
    return np.zeros((int(height), int(width)), dtype=np.uint32)
