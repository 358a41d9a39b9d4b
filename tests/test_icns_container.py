from io import BytesIO

import numpy as np
import pytest

from icns_container import (PNG_SIGNATURE, PNG_TYPES, build_icns, read_element,
                            read_icns, write_element)
from packbits import encode

LEGACY_RLE_TYPES = {"is32", "il32", "ih32", "it32", "s8mk", "l8mk", "h8mk", "t8mk"}

def apple_rle_decode(data: bytes) -> bytes:
    """Run-length rule macOS applies to is32/il32/ih32/it32 planes."""
    out = bytearray()
    i = 0
    while i < len(data):
        b = data[i]
        if b & 0x80:
            out += data[i + 1:i + 2] * (b - 125)
            i += 2
        else:
            out += data[i + 1:i + 2 + b]
            i += b + 2
    return bytes(out)

def test_packbits_planes_do_not_survive_apple_rle():
    plane = np.tile(np.array([1, 1, 2, 3], dtype=np.uint8), 64).tobytes()
    assert apple_rle_decode(encode(plane)) != plane

def test_element_round_trip():
    buf = BytesIO()
    write_element(buf, "icp4", b"abc")
    assert buf.getvalue()[:8] == b"icp4\x00\x00\x00\x0b"
    buf.seek(0)
    assert read_element(buf) == ("icp4", b"abc")
    with pytest.raises(ValueError):
        write_element(BytesIO(), "ic7", b"")

def test_build_and_read(tmp_path, make_images):
    images = make_images([16, 32, 64, 128, 256, 512, 1024])
    path = tmp_path / "app.icns"
    blob = build_icns(images)
    path.write_bytes(blob)
    assert blob[:4] == b"icns"
    assert int.from_bytes(blob[4:8], "big") == len(blob)

    elements = read_icns(str(path))
    assert set(elements) == {t for t, _ in PNG_TYPES}
    assert not LEGACY_RLE_TYPES & set(elements)
    by_size = {img.size: open(img.path, "rb").read() for img in images}
    for t, size in PNG_TYPES:
        assert elements[t].startswith(PNG_SIGNATURE)
        assert elements[t] == by_size[size]

def test_small_sizes_are_png(tmp_path, make_images):
    path = tmp_path / "small.icns"
    path.write_bytes(build_icns(make_images([16, 32])))
    elements = read_icns(str(path))
    assert set(elements) == {"icp4", "icp5", "ic11"}
    assert all(data.startswith(PNG_SIGNATURE) for data in elements.values())

def test_rejects_non_png(tmp_path, make_images):
    images = make_images([16])
    with open(images[0].path, "wb") as f:
        f.write(b"not a png")
    with pytest.raises(ValueError, match="PNG"):
        build_icns(images)

def test_malformed(tmp_path, make_images):
    blob = build_icns(make_images([16]))
    bad = tmp_path / "bad.icns"
    bad.write_bytes(b"icnx" + blob[4:])
    with pytest.raises(ValueError, match="magic"):
        read_icns(str(bad))
    bad.write_bytes(blob[:-3])
    with pytest.raises(ValueError, match="Malformed ICNS"):
        read_icns(str(bad))
