from __future__ import annotations
import struct
from dataclasses import dataclass, field
from typing import List

from ..errors import BadMagicError, VersionError

MAGIC = 0x4F494620  # "OIF "
VERSION = 1
SUB_VERSION = 0
N_RESERVED = 8

# Header schema: magic|version|sub_version|width|height|id|uncompressed|reserved[8]|payload_size
# Little-endian, no padding -> 60 bytes.
_HDR = struct.Struct("<IHHIIii8II")
HEADER_SIZE = _HDR.size


@dataclass
class Header:
    """Descripteur fixe d'une image OIF (un par frame)."""
    width: int
    height: int
    magic: int = MAGIC
    version: int = VERSION
    sub_version: int = SUB_VERSION
    id: int = 0
    uncompressed: int = 0
    reserved: List[int] = field(default_factory=lambda: [0] * N_RESERVED)
    payload_size: int = 0

    @property
    def pixel_count(self) -> int:
        return int(self.width) * int(self.height)

    @property
    def raw_size(self) -> int:
        """Taille en octets de l'image non compressée (4 octets/pixel)."""
        return self.pixel_count * 4


def init_header(width: int, height: int, id: int = 0) -> Header:
    """New header with current magic/version, zeroed reserved words and no payload yet."""
    return Header(width=int(width), height=int(height), id=int(id))


def pack_header(h: Header) -> bytes:
    if len(h.reserved) != N_RESERVED:
        raise ValueError(f"header: reserved must hold {N_RESERVED} words")
    return _HDR.pack(
        h.magic, h.version, h.sub_version, h.width, h.height,
        h.id, h.uncompressed, *h.reserved, h.payload_size,
    )


def unpack_header(b: bytes) -> Header:
    """Parse the first HEADER_SIZE bytes. Magic is NOT checked here (see check_header)."""
    if len(b) < HEADER_SIZE:
        raise ValueError(f"header: truncated ({len(b)} < {HEADER_SIZE} bytes)")
    f = _HDR.unpack_from(b, 0)
    return Header(
        magic=f[0], version=f[1], sub_version=f[2], width=f[3], height=f[4],
        id=f[5], uncompressed=f[6], reserved=list(f[7:7 + N_RESERVED]),
        payload_size=f[7 + N_RESERVED],
    )


def check_header(h: Header, *, strict_version: bool = False) -> None:
    if h.magic != MAGIC:
        raise BadMagicError(f"bad magic 0x{h.magic:08X} (expected 0x{MAGIC:08X})")
    # sub_version est toujours toléré ; la version majeure seulement en strict
    if strict_version and h.version != VERSION:
        raise VersionError(f"unsupported OIF version {h.version}.{h.sub_version}")
