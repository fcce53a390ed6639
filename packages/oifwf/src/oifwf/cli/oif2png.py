from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging, add_logging_args, ensure_dir
from ..api import oif_name

from oifdata import save_rgba
from oifcodec import read_oif, uncompress, pixels_to_rgba

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="OIF — Décode .oif -> PNG (RGBA)")
    p.add_argument("bitstreams", nargs="+", help="Fichiers .oif")
    p.add_argument("--out", default=None, help="Dossier de sortie (défaut : à côté de la source)")
    add_logging_args(p)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)

    if args.out:
        ensure_dir(Path(args.out))
    ok = 0
    for i, p in enumerate(args.bitstreams, 1):
        p = Path(p)
        try:
            logging.info("[%d/%d] decode: %s", i, len(args.bitstreams), p)
            header, payload = read_oif(p)
            pixels = uncompress(header, payload)
            dst = oif_name(p, args.out, suffix=".png")
            save_rgba(dst, pixels_to_rgba(pixels))
            logging.info("→ OK %s", dst)
            ok += 1
        except Exception as e:
            logging.exception("Échec decode %s: %s", p, e)
    return 0 if ok == len(args.bitstreams) else 1

if __name__ == "__main__":
    sys.exit(main())
