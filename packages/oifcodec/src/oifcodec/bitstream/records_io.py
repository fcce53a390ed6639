# sérialisation binaire des records OIF (mots de contrôle + pixels)
from __future__ import annotations
import struct
from typing import Iterator, List

import numpy as np

from .records import COUNT_MASK, Kind, Record, make_code, split_code
from .cursor import WordReader
from ..errors import UnknownCodeError

__all__ = ["RecordWriter", "iter_records", "list_records"]

_LE = "<"  # little-endian
_U32 = struct.Struct(_LE + "I")
_U32x2 = struct.Struct(_LE + "II")


class RecordWriter:
    """Accumule des records dans un bytearray.

    Le premier record émis peut porter une ligne de départ (`start_line`) :
    il est alors écrit en variante WSL, les suivants en variante simple.
    """

    def __init__(self, start_line: int | None = None) -> None:
        self.buf = bytearray()
        self.records = 0
        self._start_line = start_line

    def _kind(self, plain: Kind, wsl: Kind) -> tuple[Kind, int]:
        if self._start_line is None:
            return plain, 0
        line, self._start_line = self._start_line, None
        return wsl, line

    def literal(self, pixels: np.ndarray) -> None:
        """Un record UNCOMPR ; `pixels` doit tenir dans le champ count."""
        n = int(pixels.size)
        if n == 0:
            return
        if n > COUNT_MASK:
            raise ValueError(f"literal segment too long ({n} > {COUNT_MASK})")
        kind, line = self._kind(Kind.UNCOMPR, Kind.UNCOMPR_WSL)
        self.buf += _U32.pack(make_code(kind, n, line))
        self.buf += pixels.astype("<u4", copy=False).tobytes()
        self.records += 1

    def run(self, value: int, count: int) -> None:
        kind, line = self._kind(Kind.RLE, Kind.RLE_WSL)
        self.buf += _U32x2.pack(make_code(kind, count, line), int(value))
        self.records += 1

    def end(self) -> None:
        self.buf += _U32.pack(make_code(Kind.EOI))
        self.records += 1

    def __len__(self) -> int:
        return len(self.buf)


def iter_records(payload: bytes, limit: int | None = None) -> Iterator[Record]:
    """Parcourt les records sans décoder l'image (aucune borne destination).

    S'arrête après le record EOI. Lève SrcOverrunError si le flux est tronqué,
    UnknownCodeError sur un type inconnu.
    """
    src = WordReader(payload, limit)
    while True:
        off = src.pos
        kind, line, count = split_code(src.take_word())
        if kind == Kind.EOI:
            yield Record(off, Kind.EOI)
            return
        if kind not in (Kind.UNCOMPR, Kind.UNCOMPR_WSL, Kind.RLE, Kind.RLE_WSL):
            raise UnknownCodeError(f"unknown record type 0x{kind:X} at offset {off}", offset=off)
        k = Kind(kind)
        ln = line if k.with_start_line else None
        if k.is_run:
            yield Record(off, k, count, ln, src.take_word())
        else:
            src.take_pixels(count)
            yield Record(off, k, count, ln)


def list_records(payload: bytes, limit: int | None = None) -> List[Record]:
    return list(iter_records(payload, limit))
