# packages/oifcodec/src/oifcodec/__init__.py
from __future__ import annotations

"""OIF - overlay image format codec (public surface).

Codec RLE pour images overlay 32 bits (RGB + alpha) : header fixe de 60 octets
suivi d'un flux de records (UNCOMPR / RLE / variantes WSL) terminé par EOI.
"""

__version__ = "1.0.0"

# API publique (stable)
from .config import CodecConfig
from .errors import (
    ERR_OK, ERR_UNKNOWN_CODE, ERR_SRC_OVERRUN, ERR_DST_OVERRUN,
    OifError, BadMagicError, VersionError, FrameTooLargeError,
    OifDecodeError, UnknownCodeError, SrcOverrunError, DstOverrunError,
)
from .bitstream import (
    MAGIC, VERSION, SUB_VERSION, HEADER_SIZE,
    Header, init_header, pack_header, unpack_header, check_header,
    Kind, read_oif, write_oif, read_stream, write_stream,
)
from .encode import compress, compress_into, compress_lines, max_payload_size
from .decode import uncompress, uncompress_status
from .pixels import rgba_to_pixels, pixels_to_rgba

__all__ = [
    "__version__",
    "CodecConfig",
    "ERR_OK", "ERR_UNKNOWN_CODE", "ERR_SRC_OVERRUN", "ERR_DST_OVERRUN",
    "OifError", "BadMagicError", "VersionError", "FrameTooLargeError",
    "OifDecodeError", "UnknownCodeError", "SrcOverrunError", "DstOverrunError",
    "MAGIC", "VERSION", "SUB_VERSION", "HEADER_SIZE",
    "Header", "init_header", "pack_header", "unpack_header", "check_header",
    "Kind", "read_oif", "write_oif", "read_stream", "write_stream",
    "compress", "compress_into", "compress_lines", "max_payload_size",
    "uncompress", "uncompress_status",
    "rgba_to_pixels", "pixels_to_rgba",
]
