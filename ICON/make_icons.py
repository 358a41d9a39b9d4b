import argparse, os, tempfile
from typing import List, Optional

from favicon import generate_favicon, required_favicon_sizes
from generators import REQUIRED_ICNS_SIZES, REQUIRED_ICO_SIZES, generate_icns, generate_ico
from images import prepare_images
from logger import Logger

TYPES = ("ico", "icns", "favicon")

def parse_types(text: str) -> List[str]:
    types = [t.strip().lower() for t in text.split(",") if t.strip()]
    bad = [t for t in types if t not in TYPES]
    if bad or not types:
        raise ValueError(f"Unknown icon types {bad}; choose from {', '.join(TYPES)}")
    return types

def required_sizes(types: List[str]) -> List[int]:
    sizes = set()
    if "ico" in types:
        sizes.update(REQUIRED_ICO_SIZES)
    if "icns" in types:
        sizes.update(REQUIRED_ICNS_SIZES)
    if "favicon" in types:
        sizes.update(required_favicon_sizes())
    return sorted(sizes)

def make_icons(src: str, out_dir: str, types: List[str], name: str = "app",
               logger: Optional[Logger] = None) -> List[str]:
    """Resize 'src' to every size the requested outputs need, then write them."""
    logger = logger or Logger("make_icons")
    os.makedirs(out_dir, exist_ok=True)
    results = []
    with tempfile.TemporaryDirectory() as work:
        images = prepare_images(src, required_sizes(types), work)
        if "ico" in types:
            results.append(generate_ico(images, out_dir, name, logger.child("ico")))
        if "icns" in types:
            results.append(generate_icns(images, out_dir, name, logger.child("icns")))
        if "favicon" in types:
            results.extend(generate_favicon(images, out_dir, logger.child("favicon")))
    return results

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", required=True, help="path to source .png (square, 1024px recommended)")
    ap.add_argument("--output", required=True, help="output directory")
    ap.add_argument("--types", default=",".join(TYPES), help="comma separated: ico,icns,favicon")
    ap.add_argument("--name", default="app", help="base file name for .ico/.icns")
    ap.add_argument("--quiet", action="store_true", help="suppress progress output")
    args = ap.parse_args(argv)

    try:
        types = parse_types(args.types)
    except ValueError as e:
        ap.error(str(e))

    logger = Logger("make_icons", quiet=args.quiet)
    results = make_icons(args.input, args.output, types, name=args.name, logger=logger)
    logger.log(f"wrote {len(results)} files to {args.output}")
    return results

if __name__ == "__main__":
    main()
