def compression_ratio(raw_len: int, encoded_len: int) -> float:
    """raw / encoded; an empty encoding of empty input counts as 1.0."""
    if encoded_len == 0:
        return 1.0 if raw_len == 0 else float("inf")
    return float(raw_len) / float(encoded_len)

def space_savings(raw_len: int, encoded_len: int) -> float:
    # negative when the encoding grew (e.g. noise-like data)
    if raw_len == 0:
        return 0.0
    return 1.0 - float(encoded_len) / float(raw_len)

def summary(raw_len: int, encoded_len: int) -> str:
    return (f"raw={raw_len}B encoded={encoded_len}B "
            f"ratio={compression_ratio(raw_len, encoded_len):.3f} "
            f"savings={space_savings(raw_len, encoded_len) * 100:.1f}%")
