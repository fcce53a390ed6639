from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict

from oifcodec import Header


def oif_name(src: Path | str, out_dir: Path | str | None = None, suffix: str = ".oif") -> Path:
    """image.png → [out_dir/]image.oif (même dossier que la source par défaut)."""
    src = Path(src)
    return (Path(out_dir) if out_dir else src.parent) / (src.stem + suffix)


def frame_stats(header: Header) -> Dict[str, Any]:
    raw = header.raw_size
    return {
        "width": header.width,
        "height": header.height,
        "id": header.id,
        "uncompressed_size": raw,
        "compressed_size": header.payload_size,
        "ratio": (header.payload_size / raw) if raw else 0.0,
    }


def append_jsonl(path: Path | str, row: Dict[str, Any]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(row, ensure_ascii=False) + "\n")
