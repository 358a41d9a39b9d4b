import struct
from io import BytesIO
from typing import Dict, List, Tuple

from images import ImageInfo, find_image, read_file

MAGIC = b"icns"

# File header and element header share the layout (big-endian):
# type(4s) length(u32), length counts the 8 header bytes
HDR_FMT = ">4sI"
HDR_SIZE = struct.calcsize(HDR_FMT)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# Elements holding a PNG stream as-is. The legacy is32/il32/ih32/it32 elements hold
# Apple's run-length variant (control 0x80+n repeats the next byte n+3 times),
# not PackBits, so small sizes go out as icp4..icp6 instead.
PNG_TYPES: List[Tuple[str, int]] = [
    ("icp4", 16),
    ("icp5", 32),
    ("icp6", 64),
    ("ic07", 128),
    ("ic08", 256),
    ("ic09", 512),
    ("ic10", 1024),  # 512@2x
    ("ic11", 32),    # 16@2x
    ("ic12", 64),    # 32@2x
    ("ic13", 256),   # 128@2x
    ("ic14", 512),   # 256@2x
]

def write_header(f, total_len: int):
    f.write(struct.pack(HDR_FMT, MAGIC, total_len))

def read_header(f) -> int:
    data = f.read(HDR_SIZE)
    if len(data) != HDR_SIZE:
        raise ValueError("Malformed ICNS: header too short")
    magic, total_len = struct.unpack(HDR_FMT, data)
    if magic != MAGIC:
        raise ValueError("Bad magic (not icns)")
    return total_len

def write_element(f, ostype: str, data: bytes):
    tag = ostype.encode("ascii")
    if len(tag) != 4:
        raise ValueError(f"OSType must be 4 characters: {ostype!r}")
    f.write(struct.pack(HDR_FMT, tag, HDR_SIZE + len(data)))
    f.write(data)

def read_element(f):
    data = f.read(HDR_SIZE)
    if len(data) != HDR_SIZE:
        raise ValueError("Malformed ICNS: element header truncated")
    tag, length = struct.unpack(HDR_FMT, data)
    if length < HDR_SIZE:
        raise ValueError(f"Malformed ICNS: element {tag!r} length {length}")
    payload = f.read(length - HDR_SIZE)
    if len(payload) != length - HDR_SIZE:
        raise ValueError(f"Malformed ICNS: element {tag!r} truncated")
    return tag.decode("ascii"), payload

def build_elements(images: List[ImageInfo]) -> List[Tuple[str, bytes]]:
    elements = []
    for ostype, size in PNG_TYPES:
        img = find_image(images, size)
        if img is None:
            continue
        data = read_file(img.path)
        if not data.startswith(PNG_SIGNATURE):
            raise ValueError(f"{img.path}: {ostype} needs a PNG stream")
        elements.append((ostype, data))
    return elements

def build_icns(images: List[ImageInfo]) -> bytes:
    elements = build_elements(images)
    total = HDR_SIZE + sum(HDR_SIZE + len(data) for _, data in elements)
    buf = BytesIO()
    write_header(buf, total)
    for ostype, data in elements:
        write_element(buf, ostype, data)
    return buf.getvalue()

def read_icns(path: str) -> Dict[str, bytes]:
    with open(path, "rb") as f:
        blob = f.read()
    f = BytesIO(blob)
    total = read_header(f)
    if total != len(blob):
        raise ValueError(f"Malformed ICNS: header says {total} bytes, file has {len(blob)}")
    out = {}
    while f.tell() < total:
        ostype, data = read_element(f)
        out[ostype] = data
    return out
