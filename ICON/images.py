import os
from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np
from PIL import Image

@dataclass
class ImageInfo:
    size: int   # square edge in pixels
    path: str   # PNG file

def load_rgba(path: str) -> np.ndarray:
    """(H, W, 4) uint8 RGBA pixels of an image file."""
    with Image.open(path) as img:
        return np.array(img.convert("RGBA"), dtype=np.uint8)

def resize_to_png(src: str, size: int, dst: str) -> str:
    with Image.open(src) as img:
        img = img.convert("RGBA")
        img.resize((size, size), Image.Resampling.LANCZOS).save(dst, format="PNG")
    return dst

def prepare_images(src: str, sizes: Iterable[int], work_dir: str) -> List[ImageInfo]:
    """
    Resize 'src' once per unique size into work_dir.
    Returns ImageInfo list sorted by size.
    """
    if not os.path.isfile(src):
        raise FileNotFoundError(f"Source image not found: {src}")
    os.makedirs(work_dir, exist_ok=True)
    out = []
    for size in sorted(set(sizes)):
        if size <= 0:
            raise ValueError(f"Invalid icon size: {size}")
        dst = os.path.join(work_dir, f"{size}.png")
        out.append(ImageInfo(size=size, path=resize_to_png(src, size, dst)))
    return out

def filter_images_by_sizes(images: List[ImageInfo], sizes: Iterable[int]) -> List[ImageInfo]:
    wanted = set(sizes)
    return [img for img in images if img.size in wanted]

def find_image(images: List[ImageInfo], size: int) -> Optional[ImageInfo]:
    for img in images:
        if img.size == size:
            return img
    return None

def read_file(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()
