from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging, add_logging_args, ensure_dir, looks_like_oif
from ..api import oif_name, frame_stats, append_jsonl

from oifdata import scan_images, parse_background, load_rgba
from oifcodec import CodecConfig, init_header, compress, write_oif, rgba_to_pixels

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="OIF — Convertit des images (PNG...) en .oif")
    p.add_argument("images", nargs="+", help="Fichiers image ou dossiers")
    p.add_argument("--out", default=None, help="Dossier de sortie (défaut : à côté de la source)")
    p.add_argument("-bg", "--background", default=None, metavar="R,G,B",
                   help="Couleur rendue transparente (alpha=0), ex: 0,0,0")
    p.add_argument("--id", type=int, default=0, help="Identifiant d'overlay écrit dans le header")
    p.add_argument("--stats-jsonl", default=None, help="(Optionnel) JSONL stats par image")
    p.add_argument("--resume", action="store_true", help="Skip si sortie existe et valide")
    add_logging_args(p)
    return p.parse_args(argv)

def _inputs(items) -> list[Path]:
    out: list[Path] = []
    for s in items:
        p = Path(s)
        out.extend(scan_images(p) if p.is_dir() else [p])
    return out

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)

    try:
        bg = parse_background(args.background) if args.background else None
    except ValueError as e:
        logging.error("%s", e); return 2
    cfg = CodecConfig.from_env()

    imgs = _inputs(args.images)
    if not imgs:
        logging.error("Aucune image trouvée"); return 2
    if args.out:
        ensure_dir(Path(args.out))

    ok = 0
    for i, path in enumerate(imgs, 1):
        dst = oif_name(path, args.out)
        if args.resume and dst.exists() and looks_like_oif(dst):
            logging.info("[%d/%d] skip: %s", i, len(imgs), dst)
            ok += 1; continue
        try:
            logging.info("[%d/%d] encode: %s", i, len(imgs), path)
            rgba = load_rgba(path, background=bg)
            h, w = rgba.shape[:2]
            header = init_header(w, h, id=args.id)
            payload = compress(header, rgba_to_pixels(rgba), cfg)
            write_oif(dst, header, payload)
            st = frame_stats(header)
            logging.info("Uncompressed size: %d", st["uncompressed_size"])
            logging.info("Compressed size: %d", st["compressed_size"])
            logging.info("Compression ratio: %.4f", st["ratio"])
            if args.stats_jsonl:
                append_jsonl(args.stats_jsonl, {"event": "encode_done", "src": str(path), "path": str(dst), **st})
            logging.info("→ OK %s", dst)
            ok += 1
        except Exception as e:
            logging.exception("Échec encodage %s: %s", path, e)

    logging.info("Terminé: %d/%d encodées", ok, len(imgs))
    return 0 if ok == len(imgs) else 1

if __name__ == "__main__":
    sys.exit(main())
