from __future__ import annotations
import pytest

from oifcodec.bitstream import (
    HEADER_SIZE, MAGIC, VERSION, SUB_VERSION,
    init_header, pack_header, unpack_header, check_header,
)
from oifcodec import BadMagicError, VersionError

def test_init_header_defaults():
    h = init_header(1280, 720)
    assert (h.magic, h.version, h.sub_version) == (MAGIC, VERSION, SUB_VERSION)
    assert (h.width, h.height) == (1280, 720)
    assert h.id == 0 and h.uncompressed == 0
    assert h.reserved == [0] * 8
    assert h.payload_size == 0
    assert h.pixel_count == 1280 * 720
    assert h.raw_size == 1280 * 720 * 4

def test_header_pack_layout_and_roundtrip():
    h = init_header(64, 32, id=-7)
    h.payload_size = 1234
    b = pack_header(h)
    assert len(b) == HEADER_SIZE == 60
    # magic "OIF " en little-endian
    assert b[:4] == b" FIO"
    assert unpack_header(b) == h

def test_unpack_header_truncated():
    with pytest.raises(ValueError):
        unpack_header(b"\x00" * (HEADER_SIZE - 1))

def test_check_header_magic_and_versions():
    h = init_header(4, 4)
    check_header(h)
    h.sub_version = 9          # toléré
    check_header(h, strict_version=True)
    h.version = 2
    check_header(h)            # ignoré par défaut
    with pytest.raises(VersionError):
        check_header(h, strict_version=True)
    h.magic = 0x12345678
    with pytest.raises(BadMagicError):
        check_header(h)
