# packages/oifcodec/src/oifcodec/bitstream/stream.py
from __future__ import annotations
from typing import Tuple

from .header import HEADER_SIZE, Header, check_header, pack_header, unpack_header


def write_stream(header: Header, payload: bytes) -> bytes:
    """
    Concatène header OIF (pack_header) + payload compressé.
    `header.payload_size` doit correspondre exactement à la payload.
    """
    if len(payload) != header.payload_size:
        raise ValueError(
            f"write_stream: payload is {len(payload)} bytes, header says {header.payload_size}"
        )
    return pack_header(header) + bytes(payload)


def read_stream(buf: bytes, *, strict_version: bool = False) -> Tuple[Header, bytes]:
    """
    Sépare header + payload depuis un flux binaire unique.

    - magic invalide → BadMagicError (avant tout décodage)
    - moins de `payload_size` octets après le header → ValueError (tronqué)
    - octets en trop après la payload : ignorés
    """
    if len(buf) < HEADER_SIZE:
        raise ValueError(f"read_stream: truncated buffer (need >= {HEADER_SIZE} bytes for header)")
    header = unpack_header(buf)
    check_header(header, strict_version=strict_version)
    end = HEADER_SIZE + int(header.payload_size)
    if len(buf) < end:
        raise ValueError(
            f"read_stream: truncated payload ({len(buf) - HEADER_SIZE} of {header.payload_size} bytes)"
        )
    return header, bytes(buf[HEADER_SIZE:end])
