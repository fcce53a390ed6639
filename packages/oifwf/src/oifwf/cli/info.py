from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path

from .common import setup_logging, add_logging_args
from ..api import frame_stats

from oifcodec import read_oif
from oifcodec.bitstream import iter_records

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="OIF — Affiche le header (et les records) d'un .oif")
    p.add_argument("bitstream", help="Fichier .oif")
    p.add_argument("--records", action="store_true", help="Liste les records du flux")
    p.add_argument("--json", action="store_true", help="Sortie JSON")
    add_logging_args(p)
    return p.parse_args(argv)

def describe(path: Path, with_records: bool = False) -> dict:
    header, payload = read_oif(path)
    info = {
        "path": str(path),
        "magic": f"0x{header.magic:08X}",
        "version": f"{header.version}.{header.sub_version}",
        "uncompressed": header.uncompressed,
        **frame_stats(header),
    }
    if with_records:
        info["records"] = [
            {"offset": r.offset, "kind": r.kind.name, "count": r.count, "line": r.line,
             "value": None if r.value is None else f"0x{r.value:08X}"}
            for r in iter_records(payload)
        ]
    return info

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    try:
        info = describe(Path(args.bitstream), with_records=args.records)
    except Exception as e:
        logging.exception("Lecture impossible %s: %s", args.bitstream, e)
        return 1
    if args.json:
        print(json.dumps(info, indent=2))
        return 0
    for k, v in info.items():
        if k != "records":
            print(f"{k:>18}: {v}")
    for r in info.get("records", []):
        line = "" if r["line"] is None else f" line={r['line']}"
        value = "" if r["value"] is None else f" value={r['value']}"
        print(f"  @{r['offset']:>8} {r['kind']:<11} count={r['count']}{line}{value}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
