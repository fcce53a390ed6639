# packages/oifwf/src/oifwf/net.py
"""Transport TCP des frames OIF.

Wire format (une frame) :
    [header OIF, 60 octets][payload, header.payload_size octets]

Pas de longueur supplémentaire : le header porte déjà la taille de la payload.
"""
from __future__ import annotations

import logging
import os
from typing import Tuple

from oifcodec import HEADER_SIZE, FrameTooLargeError, Header, check_header, pack_header, unpack_header

__all__ = ["DEFAULT_PORT", "default_port", "recv_exact", "send_frame", "recv_frame"]

log = logging.getLogger(__name__)

DEFAULT_PORT = 5018


def default_port() -> int:
    """Port TCP (ENV `OIF_PORT`, défaut 5018)."""
    v = os.getenv("OIF_PORT", "").strip()
    return int(v) if v else DEFAULT_PORT


def recv_exact(sock, n: int) -> bytes:
    """Read exactly n bytes from a socket.

    Raises:
        ConnectionError: If the connection is closed before n bytes are read.
    """
    buf = bytearray()
    while len(buf) < n:
        chunk = sock.recv(min(n - len(buf), 1 << 20))
        if not chunk:
            raise ConnectionError(f"connection closed after {len(buf)} of {n} bytes")
        buf += chunk
    return bytes(buf)


def send_frame(sock, header: Header, payload: bytes) -> None:
    if len(payload) != header.payload_size:
        raise ValueError(
            f"send_frame: payload is {len(payload)} bytes, header says {header.payload_size}"
        )
    # sendall garantit l'envoi complet ou lève OSError
    sock.sendall(pack_header(header))
    sock.sendall(payload)


def recv_frame(sock, max_payload: int) -> Tuple[Header, bytes]:
    """Reçoit une frame ; vérifie le magic et la taille annoncée avant de lire la payload."""
    header = unpack_header(recv_exact(sock, HEADER_SIZE))
    check_header(header)
    if header.payload_size > max_payload:
        raise FrameTooLargeError(
            f"payload_size {header.payload_size} exceeds receive limit {max_payload}"
        )
    payload = recv_exact(sock, header.payload_size)
    log.debug("frame id=%d %dx%d, %d bytes", header.id, header.width, header.height, len(payload))
    return header, payload
