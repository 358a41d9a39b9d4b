from typing import Optional

import numpy as np

# Longest literal chunk flushed mid-scan; the trailing byte of the input may
# still be appended to a full buffer, giving at most 128 literal bytes.
MAX_LITERAL_LENGTH = 127

# Control byte that decodes to nothing (never produced by encode)
NOP = -128

class CorruptDataError(ValueError):
    """Encoded stream is truncated or decodes to an unexpected length."""

def to_uint8(v: int) -> int:
    return int(v) & 0xFF

def to_int8(v: int) -> int:
    """Two's-complement view of the low 8 bits: 0..255 -> -128..127."""
    v = int(v) & 0xFF
    return v - 0x100 if v & 0x80 else v

def _as_bytes(data) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, np.ndarray):
        return (data.astype(np.int64).ravel() & 0xFF).astype(np.uint8).tobytes()
    return bytes(to_uint8(v) for v in data)

def _flush_literals(out: bytearray, literals: bytearray):
    if literals:
        out.append(to_uint8(len(literals) - 1))
        out += literals
        literals.clear()

def encode(raw) -> bytes:
    """
    PackBits encoder.
    Input: bytes-like or iterable of ints (masked to 8 bits)
    Output: control byte + data chunks, runs of 2..128 and literals of 1..128
    """
    src = _as_bytes(raw)
    n = len(src)
    out = bytearray()
    literals = bytearray()

    pos = 0
    while pos < n:
        cur = src[pos]
        if pos + 1 >= n:
            literals.append(cur)
            _flush_literals(out, literals)
            pos += 1
        elif cur != src[pos + 1]:
            literals.append(cur)
            if len(literals) == MAX_LITERAL_LENGTH:
                _flush_literals(out, literals)
            pos += 1
        else:
            # a repeat run starts here; it always wins over the literal buffer
            _flush_literals(out, literals)
            lookahead = min(MAX_LITERAL_LENGTH, n - pos - 1)
            run = 2
            while run <= lookahead and src[pos + run] == cur:
                run += 1
            out.append(to_uint8(-(run - 1)))
            out.append(cur)
            pos += run
    return bytes(out)

def decode(encoded, size: Optional[int] = None) -> bytes:
    """
    PackBits decoder.
    Input: encoded stream; optional expected decoded length
    Output: raw bytes
    Raises CorruptDataError when a run points past the end of the stream,
    or when 'size' is given and the decoded length differs.
    """
    src = _as_bytes(encoded)
    n = len(src)
    out = bytearray()

    pos = 0
    while pos < n:
        count = to_int8(src[pos])
        pos += 1
        if count == NOP:
            continue
        if count >= 0:
            total = count + 1
            if pos + total > n:
                raise CorruptDataError(
                    f"Truncated literal run at offset {pos - 1}: "
                    f"need {total} bytes, {n - pos} left")
            out += src[pos:pos + total]
            pos += total
        else:
            if pos >= n:
                raise CorruptDataError(f"Truncated repeat run at offset {pos - 1}: data byte missing")
            out += src[pos:pos + 1] * (1 - count)
            pos += 1

    if size is not None and len(out) != size:
        raise CorruptDataError(f"Expected {size} bytes but decoded {len(out)}")
    return bytes(out)
