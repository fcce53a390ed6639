# packages/oifcodec/src/oifcodec/decode.py
# -----------------------------------------------------------------------------
# Décodeur OIF — le flux peut venir d'un pair réseau : chaque count est
# vérifié contre la destination (width*height) et la source (payload_size)
# AVANT lecture/écriture, via les curseurs bornés de bitstream.cursor.
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging

import numpy as np

from .errors import ERR_OK, OifDecodeError, UnknownCodeError
from .pixels import as_pixel_buffer, new_pixel_buffer
from .bitstream.header import Header
from .bitstream.records import Kind, split_code
from .bitstream.cursor import PixelWriter, WordReader

__all__ = ["uncompress", "uncompress_status"]

log = logging.getLogger(__name__)


def uncompress(header: Header, payload: bytes, out: np.ndarray | None = None) -> np.ndarray:
    """
    Décode `payload` dans `out` (ou dans un nouveau buffer [H,W] à zéro).

    Paramètres
    ----------
    header : Header
        width/height définissent la destination ; payload_size borne la lecture.
    payload : bytes-like
        Au moins payload_size octets ; seuls les payload_size premiers sont lus.
    out : np.ndarray | None
        Buffer uint32 de width*height pixels, modifié en place. Les pixels non
        couverts par les records (encodage partiel) sont laissés intacts.

    Retour
    ------
    np.ndarray : le buffer destination, de forme [height, width].

    Exceptions
    ----------
    UnknownCodeError (-1), SrcOverrunError (-2), DstOverrunError (-3) : à la
    première violation, sans tentative de resynchronisation.
    ValueError si `out` n'a pas la bonne taille / le bon type, ou s'il
    n'est pas C-contigu (une vue à pas, ex. frame[:, :4], est refusée).
    """
    width, height = int(header.width), int(header.height)
    if out is None:
        out = new_pixel_buffer(width, height)
    flat = as_pixel_buffer(out, width * height)
    if not np.may_share_memory(flat, out):
        # out non contigu : reshape(-1) a copié, on écrirait dans la copie
        raise ValueError("uncompress: destination must be a C-contiguous array")

    src = WordReader(payload, header.payload_size)
    dst = PixelWriter(flat)
    records = 0

    while True:
        off = src.pos
        kind, line, count = split_code(src.take_word())
        if kind == Kind.EOI:
            break

        if kind == Kind.UNCOMPR_WSL or kind == Kind.RLE_WSL:
            dst.seek(line * width)

        if kind == Kind.UNCOMPR or kind == Kind.UNCOMPR_WSL:
            dst.require(count)
            dst.put(src.take_pixels(count))
        elif kind == Kind.RLE or kind == Kind.RLE_WSL:
            dst.require(count)
            value = src.take_word()
            dst.fill(value, count)
        else:
            raise UnknownCodeError(f"unknown record type 0x{kind:X} at offset {off}", offset=off)
        records += 1

    log.debug("uncompress %dx%d: %d records, %d/%d payload bytes",
              width, height, records, src.pos, src.limit)
    return out.reshape(height, width) if out.ndim == 1 else out


def uncompress_status(header: Header, payload: bytes, out: np.ndarray) -> int:
    """Comme `uncompress`, mais retourne 0 ou le code d'erreur négatif."""
    try:
        uncompress(header, payload, out)
    except OifDecodeError as e:
        log.debug("uncompress failed (%d): %s", e.code, e)
        return e.code
    return ERR_OK
