# packages/oifwf/src/oifwf/__init__.py
from __future__ import annotations

from .api import oif_name, frame_stats, append_jsonl
from .net import recv_exact, send_frame, recv_frame
from .sink import FrameSink
from .anim import BouncingLogo, FramePacer

__all__ = [
    "oif_name",
    "frame_stats",
    "append_jsonl",
    "recv_exact", "send_frame", "recv_frame",
    "FrameSink",
    "BouncingLogo", "FramePacer",
    # on n’importe PAS le sous-module cli ici (argparse/socket au top-level inutiles)
]

__version__ = "1.0.0"
