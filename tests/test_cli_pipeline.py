from __future__ import annotations
import json
import numpy as np
from PIL import Image

from oifcodec import read_oif
from oifdata import load_rgba, parse_background
from oifwf.cli.png2oif import main as png2oif_main
from oifwf.cli.oif2png import main as oif2png_main
from oifwf.cli.info import main as info_main, describe

def _make_png(path, size=(40, 24)):
    img = Image.new("RGB", size, color=(0, 0, 0))
    arr = np.array(img)
    arr[5:15, 8:30] = (250, 10, 10)
    arr[7, 8:30:3] = (255, 255, 255)
    Image.fromarray(arr).save(path)
    return arr

def test_png_oif_png_roundtrip(tmp_path):
    src = tmp_path / "imgs"; src.mkdir()
    _make_png(src / "logo.png")
    out = tmp_path / "out"

    rc = png2oif_main([str(src), "--out", str(out), "--background", "0,0,0",
                       "--id", "4", "--stats-jsonl", str(tmp_path / "stats.jsonl")])
    assert rc == 0
    oif = out / "logo.oif"
    header, payload = read_oif(oif)
    assert (header.width, header.height, header.id) == (40, 24, 4)
    assert header.payload_size < header.raw_size

    row = json.loads((tmp_path / "stats.jsonl").read_text(encoding="utf-8").splitlines()[0])
    assert row["compressed_size"] == header.payload_size

    rc = oif2png_main([str(oif), "--out", str(out)])
    assert rc == 0
    got = load_rgba(out / "logo.png")
    want = load_rgba(src / "logo.png", background=(0, 0, 0))
    np.testing.assert_array_equal(got, want)
    assert (got[0, 0] == [0, 0, 0, 0]).all()
    assert got[6, 10, 3] == 255

def test_png2oif_resume_and_bad_background(tmp_path):
    _make_png(tmp_path / "a.png")
    assert png2oif_main([str(tmp_path / "a.png")]) == 0
    assert (tmp_path / "a.oif").exists()
    mtime = (tmp_path / "a.oif").stat().st_mtime_ns
    assert png2oif_main([str(tmp_path / "a.png"), "--resume"]) == 0
    assert (tmp_path / "a.oif").stat().st_mtime_ns == mtime
    assert png2oif_main([str(tmp_path / "a.png"), "-bg", "1,2"]) == 2

def test_oif2png_reports_invalid_files(tmp_path):
    bad = tmp_path / "bad.oif"
    bad.write_bytes(b"\x00" * 80)
    assert oif2png_main([str(bad)]) == 1
    assert not (tmp_path / "bad.png").exists()

def test_info(tmp_path, capsys):
    _make_png(tmp_path / "a.png")
    png2oif_main([str(tmp_path / "a.png")])
    info = describe(tmp_path / "a.oif", with_records=True)
    assert info["magic"] == "0x4F494620"
    assert info["records"][-1]["kind"] == "EOI"
    assert sum(r["count"] for r in info["records"]) == 40 * 24

    capsys.readouterr()
    assert info_main([str(tmp_path / "a.oif"), "--json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["width"] == 40 and "records" not in out

def test_parse_background():
    assert parse_background("1, 2,3") == (1, 2, 3)
    for s in ("1,2", "a,b,c", "0,0,256"):
        try:
            parse_background(s)
        except ValueError:
            continue
        raise AssertionError(f"{s!r} should be rejected")
