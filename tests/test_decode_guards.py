from __future__ import annotations
import struct
import numpy as np
import pytest

from oifcodec import (
    compress, uncompress, uncompress_status, init_header,
    DstOverrunError, SrcOverrunError, UnknownCodeError, OifDecodeError,
    ERR_OK, ERR_UNKNOWN_CODE, ERR_SRC_OVERRUN, ERR_DST_OVERRUN,
)
from oifcodec.bitstream import Kind, make_code

SENTINEL = 0xDEADBEEF

def _words(*ws) -> bytes:
    return struct.pack("<%dI" % len(ws), *ws)

def _guarded(n: int, guard: int = 64):
    """Destination de n pixels suivie d'une zone de garde remplie de SENTINEL."""
    big = np.full(n + guard, SENTINEL, dtype=np.uint32)
    return big, big[:n]

def _header(w, h, payload):
    hd = init_header(w, h)
    hd.payload_size = len(payload)
    return hd

def test_run_count_beyond_destination():
    payload = _words(make_code(Kind.RLE, 8 * 4 + 5), 0x11223344, make_code(Kind.EOI))
    big, out = _guarded(8 * 4)
    with pytest.raises(DstOverrunError) as ei:
        uncompress(_header(8, 4, payload), payload, out)
    assert ei.value.code == ERR_DST_OVERRUN
    # rien n'a été écrit, ni dans la destination ni au-delà
    assert (big == SENTINEL).all()

def test_literal_count_beyond_destination():
    n = 6
    payload = _words(make_code(Kind.UNCOMPR, n + 1), *range(n + 1), make_code(Kind.EOI))
    big, out = _guarded(n)
    with pytest.raises(DstOverrunError):
        uncompress(_header(n, 1, payload), payload, out)
    assert (big == SENTINEL).all()

def test_overrun_after_valid_records():
    payload = _words(make_code(Kind.RLE, 10), 7, make_code(Kind.RLE, 7), 9, make_code(Kind.EOI))
    big, out = _guarded(16)
    with pytest.raises(DstOverrunError):
        uncompress(_header(4, 4, payload), payload, out)
    assert (out[:10] == 7).all()
    assert (big[10:] == SENTINEL).all()

def test_start_line_outside_image():
    payload = _words(make_code(Kind.RLE_WSL, 1, line=4), 5, make_code(Kind.EOI))
    big, out = _guarded(4 * 4)
    with pytest.raises(DstOverrunError):
        uncompress(_header(4, 4, payload), payload, out)
    assert (big == SENTINEL).all()

def test_truncated_eoi_is_source_overrun():
    px = np.repeat(np.arange(6, dtype=np.uint32), [1, 4, 2, 5, 1, 3]).reshape(1, -1)
    h = init_header(16, 1)
    payload = compress(h, px)
    h.payload_size -= 4
    with pytest.raises(SrcOverrunError) as ei:
        uncompress(h, payload[:-4])
    assert ei.value.code == ERR_SRC_OVERRUN

def test_truncated_literal_is_source_overrun():
    n = 50
    h = init_header(n, 1)
    payload = compress(h, np.arange(n, dtype=np.uint32))
    cut = 4 + 4 * (n - 2)
    h.payload_size = cut
    big, out = _guarded(n)
    with pytest.raises(SrcOverrunError):
        uncompress(h, payload[:cut], out)
    assert (big == SENTINEL).all()

def test_truncated_run_value_is_source_overrun():
    payload = _words(make_code(Kind.RLE, 3))
    with pytest.raises(SrcOverrunError):
        uncompress(_header(3, 1, payload), payload)

def test_payload_size_bounds_reads_even_if_more_bytes_present():
    h = init_header(8, 1)
    payload = compress(h, np.arange(8, dtype=np.uint32))
    h.payload_size = len(payload) - 4     # EOI physiquement présent mais hors borne
    with pytest.raises(SrcOverrunError):
        uncompress(h, payload)

def test_payload_shorter_than_declared_size():
    h = init_header(8, 1)
    payload = compress(h, np.arange(8, dtype=np.uint32))
    h.payload_size += 100
    with pytest.raises(SrcOverrunError):
        uncompress(h, payload[:-4])

def test_empty_payload():
    with pytest.raises(SrcOverrunError):
        uncompress(_header(2, 2, b""), b"")

def test_unknown_code():
    payload = _words(0x5 << 28 | 3, make_code(Kind.EOI))
    with pytest.raises(UnknownCodeError) as ei:
        uncompress(_header(4, 1, payload), payload)
    assert ei.value.code == ERR_UNKNOWN_CODE
    assert isinstance(ei.value, OifDecodeError) and isinstance(ei.value, ValueError)

def test_uncompress_status_codes():
    out = np.zeros(4, dtype=np.uint32)
    ok = _words(make_code(Kind.RLE, 4), 1, make_code(Kind.EOI))
    assert uncompress_status(_header(4, 1, ok), ok, out) == ERR_OK
    assert (out == 1).all()
    bad = _words(0x0 << 28 | 1, make_code(Kind.EOI))
    assert uncompress_status(_header(4, 1, bad), bad, out) == ERR_UNKNOWN_CODE
    src = _words(make_code(Kind.UNCOMPR, 2), 1)
    assert uncompress_status(_header(4, 1, src), src, out) == ERR_SRC_OVERRUN
    dst = _words(make_code(Kind.RLE, 5), 1, make_code(Kind.EOI))
    assert uncompress_status(_header(4, 1, dst), dst, out) == ERR_DST_OVERRUN

def test_destination_size_checked():
    payload = _words(make_code(Kind.EOI))
    with pytest.raises(ValueError):
        uncompress(_header(4, 4, payload), payload, np.zeros(15, dtype=np.uint32))
    with pytest.raises(ValueError):
        uncompress(_header(4, 4, payload), payload, np.zeros(16, dtype=np.int64))

def test_eoi_only_leaves_destination_untouched():
    payload = _words(make_code(Kind.EOI))
    out = np.full((2, 3), 42, dtype=np.uint32)
    res = uncompress(_header(3, 2, payload), payload, out)
    assert res is out and (out == 42).all()

def test_strided_destination_rejected():
    px = np.arange(16, dtype=np.uint32).reshape(4, 4)
    h = init_header(4, 4)
    payload = compress(h, px)
    frame = np.zeros((4, 8), dtype=np.uint32)
    with pytest.raises(ValueError, match="contiguous"):
        uncompress(h, payload, frame[:, :4])
    assert (frame == 0).all()
    # une vue contiguë (bloc de lignes) est décodée en place
    rows = np.zeros((8, 4), dtype=np.uint32)
    uncompress(h, payload, rows[2:6])
    np.testing.assert_array_equal(rows[2:6], px)
    assert (rows[:2] == 0).all() and (rows[6:] == 0).all()
