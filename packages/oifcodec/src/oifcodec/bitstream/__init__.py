# packages/oifcodec/src/oifcodec/bitstream/__init__.py
from __future__ import annotations

# I/O bruts du bitstream
from .io import read_bitstream, write_bitstream, read_oif, write_oif

# Header OIF (60 octets, little-endian)
from .header import (
    MAGIC, VERSION, SUB_VERSION, HEADER_SIZE,
    Header, init_header, pack_header, unpack_header, check_header,
)

# Records (mots de contrôle)
from .records import Kind, Record, make_code, split_code
from .records_io import RecordWriter, iter_records, list_records

# Curseurs bornés
from .cursor import WordReader, PixelWriter

# Framing complet header+payload
from .stream import write_stream, read_stream

__all__ = [
    "read_bitstream", "write_bitstream", "read_oif", "write_oif",
    "MAGIC", "VERSION", "SUB_VERSION", "HEADER_SIZE",
    "Header", "init_header", "pack_header", "unpack_header", "check_header",
    "Kind", "Record", "make_code", "split_code",
    "RecordWriter", "iter_records", "list_records",
    "WordReader", "PixelWriter",
    "write_stream", "read_stream",
]
