# packages/oifcodec/src/oifcodec/config.py
from __future__ import annotations
import os
from dataclasses import dataclass

__all__ = ["CodecConfig", "MIN_RUN", "MAX_COUNT"]

#: Longueur minimale d'une suite de pixels égaux pour émettre un record RLE
MIN_RUN = 3
#: Capacité du champ count (16 bits) d'un mot de contrôle
MAX_COUNT = 0xFFFF


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """
    Configuration de l'encodeur OIF.

    Champs
    ------
    min_run : int, default=3
        Nombre minimal de pixels identiques pour déclencher un record RLE.
        En dessous, les pixels restent dans le segment non compressé : un
        record RLE coûte 8 octets (mot de contrôle + valeur), donc une suite
        de 2 pixels ne rapporte rien. Doit être >= 2.
    max_count : int, default=0xFFFF
        Plafond du nombre de pixels par record. Doit tenir dans le champ
        count de 16 bits (1..65535).

    Notes
    -----
    - Le décodeur n'a pas de configuration : il accepte tout flux bien formé,
      quels que soient les réglages de l'encodeur qui l'a produit.
    - `from_env()` lit `OIF_MIN_RUN` / `OIF_MAX_COUNT` (valeurs invalides → ValueError).
    """

    min_run: int = MIN_RUN
    max_count: int = MAX_COUNT

    def __post_init__(self) -> None:
        if int(self.min_run) < 2:
            raise ValueError("CodecConfig.min_run must be >= 2")
        if not (1 <= int(self.max_count) <= MAX_COUNT):
            raise ValueError("CodecConfig.max_count must be in [1..65535] (u16 count field)")

    @staticmethod
    def from_env() -> "CodecConfig":
        return CodecConfig(
            min_run=_int_env("OIF_MIN_RUN", MIN_RUN),
            max_count=_int_env("OIF_MAX_COUNT", MAX_COUNT),
        )


def _int_env(name: str, default: int) -> int:
    v = os.getenv(name, "").strip()
    if not v:
        return default
    try:
        return int(v, 0)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {v!r}") from e
