import struct

import numpy as np

# BITMAPINFOHEADER (little-endian):
# size(u32) width(i32) height(i32) planes(u16) bitcount(u16)
# compression(u32) size_image(u32) xppm(i32) yppm(i32) clr_used(u32) clr_important(u32)
BIH_FMT = "<IiiHHIIiiII"
BIH_SIZE = struct.calcsize(BIH_FMT)
BI_RGB = 0

def pack_bits_u8(bits01: np.ndarray) -> bytes:
    """
    Pack a flat uint8 array of 0/1 into bytes (MSB-first).
    """
    b = bits01.astype(np.uint8).ravel()
    out = bytearray()
    cur = 0
    cnt = 0
    for v in b:
        cur = (cur << 1) | int(v)
        cnt += 1
        if cnt == 8:
            out.append(cur)
            cur = 0
            cnt = 0
    if cnt > 0:
        out.append(cur << (8 - cnt))
    return bytes(out)

def unpack_bits_u8(data: bytes, nbits: int) -> np.ndarray:
    """
    Unpack bytes -> uint8 0/1 array length nbits (MSB-first).
    """
    out = np.zeros(nbits, dtype=np.uint8)
    k = 0
    for byte in data:
        for i in range(7, -1, -1):
            if k >= nbits:
                return out
            out[k] = (byte >> i) & 1
            k += 1
    return out

def mask_stride(width: int) -> int:
    # AND mask rows are padded to 32 bits
    return ((width + 31) // 32) * 4

def and_mask(rgba: np.ndarray) -> bytes:
    """1-bpp transparency mask, bottom-up rows; bit set where alpha == 0."""
    h, w = rgba.shape[:2]
    stride = mask_stride(w)
    out = bytearray()
    for row in rgba[::-1, :, 3]:
        out += pack_bits_u8(row == 0).ljust(stride, b"\x00")
    return bytes(out)

def rgba_to_dib(rgba: np.ndarray) -> bytes:
    """
    32-bpp DIB as stored in an ICO entry:
    header (height doubled for the AND mask) + BGRA rows bottom-up + AND mask.
    """
    if rgba.ndim != 3 or rgba.shape[2] != 4 or rgba.dtype != np.uint8:
        raise ValueError(f"Expected (H, W, 4) uint8 RGBA, got {rgba.shape} {rgba.dtype}")
    h, w = rgba.shape[:2]
    xor = np.ascontiguousarray(rgba[::-1, :, [2, 1, 0, 3]]).tobytes()
    mask = and_mask(rgba)
    header = struct.pack(
        BIH_FMT,
        BIH_SIZE, w, h * 2, 1, 32,
        BI_RGB, len(xor) + len(mask), 0, 0, 0, 0
    )
    return header + xor + mask

def read_dib_header(data: bytes):
    if len(data) < BIH_SIZE:
        raise ValueError("Malformed DIB: header too short")
    (size, width, height2, planes, bitcount,
     compression, size_image, _, _, _, _) = struct.unpack_from(BIH_FMT, data)
    if size != BIH_SIZE:
        raise ValueError(f"Malformed DIB: unexpected header size {size}")
    return dict(
        width=width, height=height2 // 2, planes=planes, bitcount=bitcount,
        compression=compression, size_image=size_image
    )

def dib_to_rgba(data: bytes) -> np.ndarray:
    h = read_dib_header(data)
    if h["bitcount"] != 32 or h["compression"] != BI_RGB:
        raise ValueError(f"Unsupported DIB: bitcount={h['bitcount']} compression={h['compression']}")
    w, ht = h["width"], h["height"]
    n = w * ht * 4
    px = data[BIH_SIZE:BIH_SIZE + n]
    if len(px) != n:
        raise ValueError("Malformed DIB: pixel data truncated")
    bgra = np.frombuffer(px, dtype=np.uint8).reshape(ht, w, 4)[::-1]
    return bgra[:, :, [2, 1, 0, 3]].copy()

def dib_mask(data: bytes) -> np.ndarray:
    """(H, W) uint8 0/1 AND mask, top-down."""
    h = read_dib_header(data)
    w, ht = h["width"], h["height"]
    start = BIH_SIZE + w * ht * 4
    stride = mask_stride(w)
    raw = data[start:start + stride * ht]
    if len(raw) != stride * ht:
        raise ValueError("Malformed DIB: AND mask truncated")
    rows = [unpack_bits_u8(raw[r * stride:(r + 1) * stride], w) for r in range(ht)]
    return np.stack(rows[::-1], axis=0)
