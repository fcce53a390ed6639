# packages/oifcodec/src/oifcodec/errors.py
from __future__ import annotations

__all__ = [
    "ERR_OK", "ERR_UNKNOWN_CODE", "ERR_SRC_OVERRUN", "ERR_DST_OVERRUN",
    "OifError", "BadMagicError", "VersionError", "FrameTooLargeError",
    "OifDecodeError", "UnknownCodeError", "SrcOverrunError", "DstOverrunError",
]

# Codes de statut (compatibles avec les valeurs historiques du format)
ERR_OK = 0
ERR_UNKNOWN_CODE = -1
ERR_SRC_OVERRUN = -2
ERR_DST_OVERRUN = -3


class OifError(Exception):
    """Base de toutes les erreurs OIF."""


class BadMagicError(OifError, ValueError):
    """Le flux ne commence pas par le magic OIF."""


class VersionError(OifError, ValueError):
    """Version majeure non supportée (uniquement en mode strict)."""


class FrameTooLargeError(OifError, ValueError):
    """payload_size annoncé au-delà de la limite du récepteur."""


class OifDecodeError(OifError, ValueError):
    """Échec de décodage ; `code` porte le statut numérique négatif."""

    code: int = ERR_UNKNOWN_CODE

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class UnknownCodeError(OifDecodeError):
    code = ERR_UNKNOWN_CODE


class SrcOverrunError(OifDecodeError):
    code = ERR_SRC_OVERRUN


class DstOverrunError(OifDecodeError):
    code = ERR_DST_OVERRUN
