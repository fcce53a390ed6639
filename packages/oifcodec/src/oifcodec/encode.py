# packages/oifcodec/src/oifcodec/encode.py
# -----------------------------------------------------------------------------
# Encodeur OIF : segments non compressés (UNCOMPR) entrelacés avec des runs (RLE)
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from typing import Iterator, Tuple

import numpy as np

from .config import CodecConfig
from .pixels import as_pixel_buffer
from .bitstream.header import Header
from .bitstream.records import MAX_LINE
from .bitstream.records_io import RecordWriter

__all__ = ["compress", "compress_into", "compress_lines", "max_payload_size", "plan_segments"]

log = logging.getLogger(__name__)

_DEFAULT_CFG = CodecConfig()


def plan_segments(flat: np.ndarray, cfg: CodecConfig = _DEFAULT_CFG) -> Iterator[Tuple[bool, int, int]]:
    """
    Découpe glouton de `flat` en segments `(is_run, start, stop)`.

    Équivalent au balayage pixel par pixel :
      - depuis i, on étend j tant que flat[j] == flat[i], avec j - i <= max_count ;
      - si j - i >= min_run → segment RLE [i, j), et i = j ;
      - sinon i += 1 et le pixel rejoint le segment non compressé en attente.
    On travaille sur les suites maximales de pixels égaux (numpy) : seules les
    suites de longueur >= min_run sont parcourues en Python.

    Les segments non compressés sont découpés par tranches de max_count pixels.
    """
    n = int(flat.size)
    if n == 0:
        return
    step = int(cfg.max_count)
    min_run = int(cfg.min_run)

    starts = np.concatenate(([0], np.flatnonzero(flat[1:] != flat[:-1]) + 1))
    lengths = np.diff(np.append(starts, n))
    k = 0  # début du segment non compressé en attente

    if step >= min_run:
        for r in np.flatnonzero(lengths >= min_run):
            s, L = int(starts[r]), int(lengths[r])
            # tranches pleines de max_count, puis un reste
            full, rest = divmod(L, step)
            stop = s + full * step
            if rest >= min_run:
                stop += rest
            if k < s:
                yield from _literal_chunks(k, s, step)
            for a in range(s, stop, step):
                yield True, a, min(a + step, stop)
            # un reste < min_run reste en attente (non compressé)
            k = stop

    if k < n:
        yield from _literal_chunks(k, n, step)


def _literal_chunks(start: int, stop: int, step: int) -> Iterator[Tuple[bool, int, int]]:
    for a in range(start, stop, step):
        yield False, a, min(a + step, stop)


def _encode(flat: np.ndarray, cfg: CodecConfig, start_line: int | None = None) -> RecordWriter:
    w = RecordWriter(start_line=start_line)
    for is_run, a, b in plan_segments(flat, cfg):
        if is_run:
            w.run(int(flat[a]), b - a)
        else:
            w.literal(flat[a:b])
    w.end()
    return w


def compress(header: Header, pixels: np.ndarray, cfg: CodecConfig | None = None) -> bytes:
    """
    Compresse une image complète et renseigne `header.payload_size`.

    Paramètres
    ----------
    header : Header
        Doit porter width/height (cf. `init_header`).
    pixels : np.ndarray
        Exactement width*height pixels uint32 (forme [H,W] ou plate).
    cfg : CodecConfig | None
        Réglages de l'encodeur (défaut : min_run=3, max_count=65535).

    Retour
    ------
    bytes : flux de records terminé par EOI.
    """
    cfg = cfg or _DEFAULT_CFG
    flat = as_pixel_buffer(pixels, header.pixel_count)
    w = _encode(flat, cfg)
    header.payload_size = len(w)
    log.debug("compress %dx%d: %d records, %d -> %d bytes",
              header.width, header.height, w.records, header.raw_size, len(w))
    return bytes(w.buf)


def compress_into(header: Header, pixels: np.ndarray, out, cfg: CodecConfig | None = None) -> int:
    """Variante écrivant dans un buffer fourni (bytearray/memoryview) ; retourne le nombre d'octets."""
    blob = compress(header, pixels, cfg)
    dst = memoryview(out).cast("B")
    if len(blob) > len(dst):
        raise ValueError(f"compress_into: output buffer too small ({len(dst)} < {len(blob)} bytes)")
    dst[:len(blob)] = blob
    return len(blob)


def compress_lines(header: Header, band: np.ndarray, first_line: int,
                   cfg: CodecConfig | None = None) -> bytes:
    """
    Encodage partiel : ne transmet que les lignes [first_line, first_line + n).

    `band` contient n lignes complètes (n*width pixels). Le premier record est
    une variante WSL qui positionne le décodeur sur `first_line` ; la suite du
    flux est identique à un encodage complet. Les pixels hors bande ne sont
    pas touchés au décodage.
    """
    cfg = cfg or _DEFAULT_CFG
    width = int(header.width)
    px = np.asarray(band)
    if width <= 0 or px.size % width:
        raise ValueError(f"compress_lines: band of {px.size} pixels is not a whole number of {width}-pixel lines")
    n_lines = px.size // width
    if not (0 <= first_line <= MAX_LINE):
        raise ValueError(f"compress_lines: first_line must be in [0,{MAX_LINE}], got {first_line}")
    if first_line + n_lines > header.height:
        raise ValueError(
            f"compress_lines: lines [{first_line},{first_line + n_lines}) exceed image height {header.height}"
        )
    flat = as_pixel_buffer(px, n_lines * width)
    w = _encode(flat, cfg, start_line=first_line)
    header.payload_size = len(w)
    log.debug("compress_lines %d+%d: %d records, %d bytes", first_line, n_lines, w.records, len(w))
    return bytes(w.buf)


def max_payload_size(width: int, height: int, cfg: CodecConfig | None = None) -> int:
    """Pire cas : tout non compressé + un mot de contrôle par tranche + EOI.

    Avec min_run >= 3, un record RLE couvre >= 3 pixels pour 8 octets, ce qui
    paie le mot de contrôle du segment non compressé qui le précède. Avec
    min_run == 2 ce n'est plus vrai : on compte un mot de plus par run possible.
    """
    cfg = cfg or _DEFAULT_CFG
    n = int(width) * int(height)
    extra = 0 if cfg.min_run >= 3 else 4 * (n // 2)
    return 4 * n + 4 * (n // int(cfg.max_count) + 2) + 4 + extra
