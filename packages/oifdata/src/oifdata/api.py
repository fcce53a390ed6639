from __future__ import annotations
from pathlib import Path
from typing import Tuple
import numpy as np
from PIL import Image

RGB = Tuple[int, int, int]


def scan_images(root: str | Path) -> list[Path]:
    root = Path(root)
    exts = {".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff"}
    return sorted(p for p in root.rglob("*") if p.suffix.lower() in exts)


def parse_background(s: str) -> RGB:
    """'r,g,b' → (r, g, b), chaque composante dans [0..255]."""
    parts = [p.strip() for p in s.split(",")]
    if len(parts) != 3:
        raise ValueError(f"background must have the form <red>,<green>,<blue>, got {s!r}")
    try:
        rgb = tuple(int(p) for p in parts)
    except ValueError as e:
        raise ValueError(f"invalid background value {s!r}") from e
    if any(not (0 <= c <= 255) for c in rgb):
        raise ValueError(f"background components must be in [0..255], got {s!r}")
    return rgb  # type: ignore[return-value]


def key_alpha(rgba: np.ndarray, background: RGB) -> np.ndarray:
    """Alpha = 0 là où RGB == background, 255 ailleurs (en place)."""
    bg = np.asarray(background, dtype=np.uint8)
    mask = np.all(rgba[..., :3] == bg, axis=-1)
    rgba[..., 3] = np.where(mask, 0, 255).astype(np.uint8)
    return rgba


def load_rgba(path: str | Path, background: RGB | None = None) -> np.ndarray:
    """Lit une image → [H,W,4] uint8 RGBA.

    Une image sans alpha reçoit alpha=255 ; si `background` est donné, cette
    couleur devient transparente.
    """
    with Image.open(path) as img:
        rgba = np.array(img.convert("RGBA"), dtype=np.uint8)
    if background is not None:
        key_alpha(rgba, background)
    return rgba


def save_rgba(path: str | Path, rgba: np.ndarray) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8)).save(path)
