from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum

__all__ = [
    "Kind", "Record",
    "KIND_MASK", "LINE_MASK", "COUNT_MASK", "MAX_LINE",
    "make_code", "split_code",
]

KIND_MASK = 0xF0000000
LINE_MASK = 0x0FFF0000
COUNT_MASK = 0x0000FFFF
MAX_LINE = 0x0FFF


class Kind(IntEnum):
    """Type de record (bits 31-28 du mot de contrôle)."""
    UNCOMPR = 0x1       # count pixels bruts
    UNCOMPR_WSL = 0x2   # idem, à partir de la ligne `line`
    RLE = 0x3           # 1 pixel répété count fois
    RLE_WSL = 0x4       # idem, à partir de la ligne `line`
    EOI = 0xF           # fin d'image

    @property
    def with_start_line(self) -> bool:
        return self in (Kind.UNCOMPR_WSL, Kind.RLE_WSL)

    @property
    def is_run(self) -> bool:
        return self in (Kind.RLE, Kind.RLE_WSL)


def make_code(kind: int, count: int = 0, line: int = 0) -> int:
    if not (0 <= count <= COUNT_MASK):
        raise ValueError(f"count out of range [0,{COUNT_MASK}]: {count}")
    if not (0 <= line <= MAX_LINE):
        raise ValueError(f"start line out of range [0,{MAX_LINE}]: {line}")
    return ((int(kind) & 0xF) << 28) | (line << 16) | count


def split_code(code: int) -> tuple[int, int, int]:
    """(kind, line, count) ; kind est laissé brut (int) pour détecter les codes inconnus."""
    return (code & KIND_MASK) >> 28, (code & LINE_MASK) >> 16, code & COUNT_MASK


@dataclass(frozen=True)
class Record:
    """Vue d'un record déjà parsé (inspection / tests, pas de décodage)."""
    offset: int
    kind: Kind
    count: int = 0
    line: int | None = None
    value: int | None = None    # pixel répété (RLE) ; None pour UNCOMPR/EOI

    @property
    def size(self) -> int:
        """Octets occupés dans le flux (mot de contrôle inclus)."""
        if self.kind == Kind.EOI:
            return 4
        return 8 if self.kind.is_run else 4 + 4 * self.count
