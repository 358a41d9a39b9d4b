import os
import shutil
from typing import List, Optional

from generators import generate_ico
from images import ImageInfo, filter_images_by_sizes
from logger import Logger

REQUIRED_PNG_SIZES = [32, 57, 72, 96, 120, 128, 144, 152, 195, 228]
REQUIRED_FAVICON_ICO_SIZES = (16, 24, 32, 48, 64)

ICO_FILE_NAME = "favicon"

# see https://github.com/audreyr/favicon-cheat-sheet
PNG_FILE_INFOS = [
    ("favicon-32.png", 32),    # old Chrome versions that mishandle ico
    ("favicon-57.png", 57),    # iOS home screen, first generation to 3G
    ("favicon-72.png", 72),    # iPad home screen
    ("favicon-96.png", 96),    # GoogleTV
    ("favicon-120.png", 120),  # iPhone retina touch icon
    ("favicon-128.png", 128),  # Chrome Web Store
    ("favicon-144.png", 144),  # IE10 Metro tile
    ("favicon-152.png", 152),  # iPad retina touch icon
    ("favicon-195.png", 195),  # Opera Speed Dial
    ("favicon-228.png", 228),  # Opera Coast
]

def required_favicon_sizes() -> List[int]:
    return sorted(set(REQUIRED_PNG_SIZES) | set(REQUIRED_FAVICON_ICO_SIZES))

def file_name_from_size(size: int) -> Optional[str]:
    for name, s in PNG_FILE_INFOS:
        if s == size:
            return name
    return None

def copy_image(image: ImageInfo, out_dir: str, logger: Logger) -> str:
    """Copy under its favicon name; sizes without one are ignored ("")."""
    name = file_name_from_size(image.size)
    if not name:
        return ""
    dst = os.path.join(out_dir, name)
    shutil.copyfile(image.path, dst)
    logger.log(f"  Create: {dst}")
    return dst

def generate_png(images: List[ImageInfo], out_dir: str, logger: Logger) -> List[str]:
    logger.log("Favicon:")
    os.makedirs(out_dir, exist_ok=True)
    results = []
    for image in filter_images_by_sizes(images, REQUIRED_PNG_SIZES):
        dst = copy_image(image, out_dir, logger)
        if dst:
            results.append(dst)
    return results

def generate_favicon(images: List[ImageInfo], out_dir: str, logger: Optional[Logger] = None) -> List[str]:
    """favicon.ico first, then the touch/tile PNGs."""
    logger = logger or Logger("favicon")
    ico = generate_ico(images, out_dir, ICO_FILE_NAME, logger, sizes=REQUIRED_FAVICON_ICO_SIZES)
    return [ico] + generate_png(images, out_dir, logger)
