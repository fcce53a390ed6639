from __future__ import annotations
import numpy as np
import pytest

from oifcodec import compress, compress_lines, uncompress, init_header
from oifcodec.bitstream import Kind, list_records

def _frame(w=12, h=8):
    px = np.zeros((h, w), dtype=np.uint32)
    px[:, w // 2:] = 0xFF00FF00
    return px

def test_band_update_only_touches_its_lines():
    prev = _frame()
    h = init_header(12, 8)
    base = uncompress(h, compress(h, prev))

    new = prev.copy()
    new[3:5, 2:9] = np.arange(14, dtype=np.uint32).reshape(2, 7) + 1

    hb = init_header(12, 8, id=3)
    payload = compress_lines(hb, new[3:5], first_line=3)
    assert hb.payload_size == len(payload)

    recs = list_records(payload)
    assert recs[0].kind in (Kind.UNCOMPR_WSL, Kind.RLE_WSL)
    assert recs[0].line == 3
    assert all(not r.kind.with_start_line for r in recs[1:])
    assert recs[-1].kind == Kind.EOI

    out = uncompress(hb, payload, base)
    np.testing.assert_array_equal(out, new)

def test_band_starting_with_run_uses_rle_wsl():
    band = np.full((2, 12), 7, dtype=np.uint32)
    h = init_header(12, 8)
    recs = list_records(compress_lines(h, band, first_line=6))
    assert (recs[0].kind, recs[0].line, recs[0].count) == (Kind.RLE_WSL, 6, 24)

def test_band_validation():
    h = init_header(12, 8)
    with pytest.raises(ValueError):
        compress_lines(h, np.zeros(13, dtype=np.uint32), first_line=0)   # pas un nombre entier de lignes
    with pytest.raises(ValueError):
        compress_lines(h, np.zeros((2, 12), dtype=np.uint32), first_line=7)
    big = init_header(4, 5000)
    with pytest.raises(ValueError):
        compress_lines(big, np.zeros((1, 4), dtype=np.uint32), first_line=4096)

def test_several_bands_rebuild_full_frame():
    rng = np.random.default_rng(5)
    frame = np.repeat(rng.integers(0, 5, size=(10, 4), dtype=np.uint32), 4, axis=1)
    out = np.zeros_like(frame)
    for first in range(0, 10, 3):
        h = init_header(16, 10)
        band = frame[first:first + 3]
        uncompress(h, compress_lines(h, band, first_line=first), out)
    np.testing.assert_array_equal(out, frame)
