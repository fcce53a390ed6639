from __future__ import annotations
import argparse, logging, socket, sys
from pathlib import Path
from typing import Optional

import numpy as np

from .common import setup_logging, add_logging_args
from ..anim import BouncingLogo, FramePacer
from ..api import frame_stats
from ..net import default_port, send_frame

from oifdata import load_rgba
from oifcodec import CodecConfig, init_header, compress, rgba_to_pixels

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="OIF — Client : envoie un logo animé comme overlay")
    p.add_argument("host", help="Adresse IP du serveur")
    p.add_argument("port", nargs="?", type=int, default=None, help="Port TCP (défaut: $OIF_PORT ou 5018)")
    p.add_argument("--logo", default=None, help="Image du logo (défaut: motif généré)")
    p.add_argument("--width", type=int, default=1600)
    p.add_argument("--height", type=int, default=720)
    p.add_argument("--fps", type=float, default=30.0)
    p.add_argument("--frames", type=int, default=None, help="Nombre de frames (défaut: infini)")
    p.add_argument("--id", type=int, default=1)
    add_logging_args(p)
    return p.parse_args(argv)

def default_logo(w: int = 160, h: int = 90) -> np.ndarray:
    """Logo opaque de test : bandeau à deux couleurs avec bord blanc."""
    logo = np.zeros((h, w, 4), dtype=np.uint8)
    logo[..., 3] = 255
    logo[:, : w // 2, :3] = (220, 40, 40)
    logo[:, w // 2 :, :3] = (40, 80, 220)
    logo[:4, :, :3] = logo[-4:, :, :3] = 255
    logo[:, :4, :3] = logo[:, -4:, :3] = 255
    return logo

def stream_frames(sock, anim: BouncingLogo, logo: np.ndarray, *, header_id: int = 1,
                  frames: Optional[int] = None, pacer: Optional[FramePacer] = None,
                  cfg: Optional[CodecConfig] = None) -> int:
    """Encode et envoie des frames ; retourne le nombre de frames envoyées."""
    screen = np.zeros((anim.height, anim.width, 4), dtype=np.uint8)
    sent = 0
    while frames is None or sent < frames:
        anim.render(logo, out=screen)
        header = init_header(anim.width, anim.height, id=header_id)
        payload = compress(header, rgba_to_pixels(screen), cfg)
        st = frame_stats(header)
        logging.debug("frame %d: %d -> %d bytes (ratio %.4f)",
                      sent, st["uncompressed_size"], st["compressed_size"], st["ratio"])
        if pacer is not None:
            pacer.wait()
        send_frame(sock, header, payload)
        sent += 1
        anim.step()
    return sent

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    port = args.port if args.port is not None else default_port()

    try:
        logo = load_rgba(args.logo) if args.logo else default_logo()
        anim = BouncingLogo(args.width, args.height, logo.shape[1], logo.shape[0])
    except (OSError, ValueError) as e:
        logging.error("Logo invalide: %s", e); return 1

    logging.info("OIF client → %s:%d", args.host, port)
    try:
        with socket.create_connection((args.host, port)) as sock:
            n = stream_frames(sock, anim, logo, header_id=args.id, frames=args.frames,
                              pacer=FramePacer(args.fps), cfg=CodecConfig.from_env())
    except KeyboardInterrupt:
        logging.info("Interrompu"); return 0
    except OSError as e:
        logging.error("Connexion/envoi impossible: %s", e); return 1
    logging.info("Terminé: %d frames envoyées", n)
    return 0

if __name__ == "__main__":
    sys.exit(main())
