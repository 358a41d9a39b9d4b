import struct
from io import BytesIO
from typing import List

from dib import rgba_to_dib
from images import ImageInfo, load_rgba, read_file

ICO_TYPE = 1

# ICONDIR (little-endian): reserved(u16) type(u16) count(u16)
DIR_FMT = "<HHH"
DIR_SIZE = struct.calcsize(DIR_FMT)

# ICONDIRENTRY:
# width(u8) height(u8) colors(u8) reserved(u8) planes(u16) bpp(u16) bytes(u32) offset(u32)
# width/height 0 means 256
ENTRY_FMT = "<BBBBHHII"
ENTRY_SIZE = struct.calcsize(ENTRY_FMT)

MAX_SIZE = 256
PNG_MIN_SIZE = 256   # entries this large are stored as PNG, smaller as DIB
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

def write_header(f, count: int):
    f.write(struct.pack(DIR_FMT, 0, ICO_TYPE, count))

def read_header(f) -> int:
    data = f.read(DIR_SIZE)
    if len(data) != DIR_SIZE:
        raise ValueError("Malformed ICO: header too short")
    reserved, typ, count = struct.unpack(DIR_FMT, data)
    if reserved != 0 or typ != ICO_TYPE:
        raise ValueError(f"Malformed ICO: reserved={reserved} type={typ}")
    return count

def write_entry(f, *, width, height, nbytes, offset, bpp=32):
    if not (1 <= width <= MAX_SIZE and 1 <= height <= MAX_SIZE):
        raise ValueError(f"ICO entries must be 1..{MAX_SIZE} px, got {width}x{height}")
    f.write(struct.pack(
        ENTRY_FMT,
        width % MAX_SIZE, height % MAX_SIZE, 0, 0,
        1, bpp, nbytes, offset
    ))

def read_entries(f, count: int):
    out = []
    for _ in range(count):
        data = f.read(ENTRY_SIZE)
        if len(data) != ENTRY_SIZE:
            raise ValueError("Malformed ICO: directory truncated")
        w, h, colors, _, planes, bpp, nbytes, offset = struct.unpack(ENTRY_FMT, data)
        out.append(dict(
            width=w or MAX_SIZE, height=h or MAX_SIZE, colors=colors,
            planes=planes, bpp=bpp, nbytes=nbytes, offset=offset
        ))
    return out

def entry_payload(image: ImageInfo) -> bytes:
    if image.size >= PNG_MIN_SIZE:
        return read_file(image.path)
    rgba = load_rgba(image.path)
    if rgba.shape[:2] != (image.size, image.size):
        raise ValueError(f"{image.path}: expected {image.size}px square, got {rgba.shape[1]}x{rgba.shape[0]}")
    return rgba_to_dib(rgba)

def build_ico(images: List[ImageInfo]) -> bytes:
    """
    Assemble an ICO file: directory first, payloads in the same order after it.
    """
    images = sorted(images, key=lambda img: img.size)
    payloads = [entry_payload(img) for img in images]

    buf = BytesIO()
    write_header(buf, len(images))
    offset = DIR_SIZE + ENTRY_SIZE * len(images)
    for img, data in zip(images, payloads):
        write_entry(buf, width=img.size, height=img.size, nbytes=len(data), offset=offset)
        offset += len(data)
    for data in payloads:
        buf.write(data)
    return buf.getvalue()

def read_ico(path: str):
    """
    Returns list of dict: width, height, bpp, data, is_png
    """
    with open(path, "rb") as f:
        blob = f.read()
    f = BytesIO(blob)
    count = read_header(f)
    entries = read_entries(f, count)
    for e in entries:
        data = blob[e["offset"]:e["offset"] + e["nbytes"]]
        if len(data) != e["nbytes"]:
            raise ValueError("Malformed ICO: image data truncated")
        e["data"] = data
        e["is_png"] = data.startswith(PNG_SIGNATURE)
    return entries
