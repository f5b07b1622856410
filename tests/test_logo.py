import struct
import zlib
from pathlib import Path

import pytest
from PIL import Image

from reframe.imaging.logo import logo_box, prepare_logo
from reframe.models.settings import ExportSettings


def _logo(tmp_path: Path, size=(100, 50)) -> Path:
    p = tmp_path / "logo.png"
    Image.new("RGBA", size, (0, 200, 0, 255)).save(p)
    return p


def test_logo_box_keeps_aspect_and_square_fallback():
    assert logo_box(1600, 100, 50, 0.16) == (256, 128)
    assert logo_box(1600, 0, 0, 0.16) == (256, 256)
    assert logo_box(3, 100, 50, 0.05) == (1, 1)


@pytest.mark.parametrize("canvas_w", [1600, 1200, 1080, 333])
def test_logo_width_follows_clamped_fraction(tmp_path: Path, canvas_w):
    settings = ExportSettings(logo_path=_logo(tmp_path), logo_max_width_pct=0.9)
    logo = prepare_logo(canvas_w, settings)
    assert logo is not None
    assert abs(logo.width - round(canvas_w * 0.4)) <= 1
    assert logo.image.size == (logo.width, logo.height)
    assert logo.image.mode == "RGBA"


def test_logo_fits_inside_box(tmp_path: Path):
    settings = ExportSettings(logo_path=_logo(tmp_path, (40, 400)), logo_max_width_pct=0.16)
    logo = prepare_logo(1600, settings)
    assert logo is not None
    assert logo.width <= 256
    assert logo.height <= 2560


def test_missing_logo_is_absent(tmp_path: Path):
    settings = ExportSettings(logo_path=tmp_path / "nope.png")
    assert prepare_logo(1600, settings) is None


def test_undecodable_logo_is_absent(tmp_path: Path):
    bad = tmp_path / "logo.png"
    bad.write_bytes(b"definitely not a png")
    assert prepare_logo(1600, ExportSettings(logo_path=bad)) is None


def _chunk(cid: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", len(payload)) + cid + payload + struct.pack(">I", zlib.crc32(cid + payload))


def test_corrupt_chunk_after_first_idat_is_absent(tmp_path: Path):
    good = tmp_path / "good.png"
    Image.linear_gradient("L").resize((64, 32)).convert("RGBA").save(good)
    data = good.read_bytes()

    # split the image data over two IDAT chunks, then break the second header;
    # Pillow only meets it inside load()
    start = data.index(b"IDAT") - 4
    length = struct.unpack(">I", data[start:start + 4])[0]
    idat = data[start + 8:start + 8 + length]
    half = len(idat) // 2
    second = bytearray(_chunk(b"IDAT", idat[half:]))
    second[4:8] = b"@k\x80\x0e"
    broken = data[:start] + _chunk(b"IDAT", idat[:half]) + bytes(second) + data[start + 12 + length:]

    bad = tmp_path / "broken.png"
    bad.write_bytes(broken)
    assert prepare_logo(1600, ExportSettings(logo_path=bad)) is None
