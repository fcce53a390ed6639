from __future__ import annotations
import argparse, logging, socket, sys
from pathlib import Path
from typing import Optional

from .common import setup_logging, add_logging_args
from ..net import default_port, recv_frame
from ..sink import FrameSink

from oifcodec import BadMagicError, CodecConfig, FrameTooLargeError, OifDecodeError, max_payload_size

class OverlayServer:
    """Reçoit des frames OIF sur une connexion TCP et les présente dans un FrameSink.

    Politique d'erreur par connexion :
      - déconnexion / header invalide / taille hors limites → fin de connexion
      - erreur de décodage → frame ignorée, la connexion continue
        (la payload a été lue en entier, le flux reste synchronisé)
    """

    def __init__(self, sink: FrameSink, max_frames: Optional[int] = None) -> None:
        self.sink = sink
        # borne du pire encodeur valide (min_run=2) : le client choisit sa config
        self.max_payload = max_payload_size(sink.width, sink.height, CodecConfig(min_run=2))
        self.max_frames = max_frames
        self.dropped = 0

    @property
    def done(self) -> bool:
        return self.max_frames is not None and self.sink.frames >= self.max_frames

    def handle_connection(self, conn) -> int:
        n = 0
        while not self.done:
            try:
                header, payload = recv_frame(conn, self.max_payload)
            except ConnectionError:
                logging.info("Disconnected.")
                break
            except (BadMagicError, FrameTooLargeError) as e:
                logging.warning("Frame rejetée, fermeture de la connexion: %s", e)
                break
            if not self.sink.matches(header):
                logging.warning("Frame %dx%d incompatible avec l'écran %dx%d, fermeture",
                                header.width, header.height, self.sink.width, self.sink.height)
                break
            try:
                self.sink.present(header, payload)
                n += 1
            except OifDecodeError as e:
                self.dropped += 1
                logging.warning("Frame id=%d ignorée (code %d): %s", header.id, e.code, e)
        return n

    def serve(self, listener, max_connections: Optional[int] = None) -> None:
        served = 0
        while not self.done and (max_connections is None or served < max_connections):
            conn, addr = listener.accept()
            served += 1
            logging.info("Connected: %s", addr)
            with conn:
                n = self.handle_connection(conn)
            logging.info("%d frames reçues (%d ignorées au total)", n, self.dropped)

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="OIF — Serveur : reçoit des overlays et les écrit dans un framebuffer")
    p.add_argument("--host", default="0.0.0.0")
    p.add_argument("--port", type=int, default=None, help="Port TCP (défaut: $OIF_PORT ou 5018)")
    p.add_argument("--width", type=int, default=1600)
    p.add_argument("--height", type=int, default=720)
    p.add_argument("--sink", default=None, help="Fichier/périphérique mappé (ex: /dev/fb0) ; mémoire sinon")
    p.add_argument("--double-buffer", action="store_true", help="Alterne entre deux pages")
    p.add_argument("--max-frames", type=int, default=None)
    p.add_argument("--once", action="store_true", help="Une seule connexion puis sortie")
    add_logging_args(p)
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    port = args.port if args.port is not None else default_port()

    sink = FrameSink(args.width, args.height, path=args.sink, double_buffer=args.double_buffer)
    server = OverlayServer(sink, max_frames=args.max_frames)
    logging.info("OIF server on %s:%d (%dx%d)", args.host, port, args.width, args.height)
    try:
        with socket.create_server((args.host, port)) as listener:
            server.serve(listener, max_connections=1 if args.once else None)
    except KeyboardInterrupt:
        logging.info("Interrompu")
    finally:
        sink.close()
    return 0

if __name__ == "__main__":
    sys.exit(main())
