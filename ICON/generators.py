import os
from typing import List, Optional, Sequence

from icns_container import build_icns
from ico_container import build_ico
from images import ImageInfo, filter_images_by_sizes
from logger import Logger

REQUIRED_ICO_SIZES = (16, 24, 32, 48, 64, 128, 256)
REQUIRED_ICNS_SIZES = (16, 32, 64, 128, 256, 512, 1024)

def select_images(images: List[ImageInfo], sizes: Sequence[int], kind: str, logger: Logger) -> List[ImageInfo]:
    picked = filter_images_by_sizes(images, sizes)
    have = {img.size for img in picked}
    for size in sizes:
        if size not in have:
            logger.log(f"{kind}: no {size}px image, skipped")
    if not picked:
        raise ValueError(f"No images for {kind}: need one of {list(sizes)}")
    return picked

def _write(path: str, data: bytes, logger: Logger) -> str:
    with open(path, "wb") as f:
        f.write(data)
    logger.log(f"  Create: {path}")
    return path

def generate_ico(images: List[ImageInfo], out_dir: str, name: str = "app",
                 logger: Optional[Logger] = None, sizes: Sequence[int] = REQUIRED_ICO_SIZES) -> str:
    logger = logger or Logger("ico")
    logger.log("ICO:")
    picked = select_images(images, sizes, "ICO", logger)
    os.makedirs(out_dir, exist_ok=True)
    return _write(os.path.join(out_dir, name + ".ico"), build_ico(picked), logger)

def generate_icns(images: List[ImageInfo], out_dir: str, name: str = "app",
                  logger: Optional[Logger] = None, sizes: Sequence[int] = REQUIRED_ICNS_SIZES) -> str:
    logger = logger or Logger("icns")
    logger.log("ICNS:")
    picked = select_images(images, sizes, "ICNS", logger)
    os.makedirs(out_dir, exist_ok=True)
    return _write(os.path.join(out_dir, name + ".icns"), build_icns(picked), logger)
