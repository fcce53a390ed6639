from __future__ import annotations

from .api import scan_images, parse_background, key_alpha, load_rgba, save_rgba

__all__ = ["scan_images", "parse_background", "key_alpha", "load_rgba", "save_rgba"]
