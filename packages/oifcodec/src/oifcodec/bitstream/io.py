# packages/oifcodec/src/oifcodec/bitstream/io.py
# Fichiers .oif : header || payload, écrits atomiquement (tmp + fsync + replace).
from __future__ import annotations
import os
from pathlib import Path
from typing import Tuple

from .header import Header
from .stream import read_stream, write_stream


def read_bitstream(path: str | Path) -> bytes:
    return Path(path).read_bytes()


def write_bitstream(data: bytes, path: str | Path) -> None:
    """Écrit `data` dans `path` sans jamais laisser de fichier partiel."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(p.suffix + ".tmp")
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, p)


def read_oif(path: str | Path, *, strict_version: bool = False) -> Tuple[Header, bytes]:
    return read_stream(read_bitstream(path), strict_version=strict_version)


def write_oif(path: str | Path, header: Header, payload: bytes) -> None:
    write_bitstream(write_stream(header, payload), path)
