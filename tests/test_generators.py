import os

import pytest

from favicon import (PNG_FILE_INFOS, REQUIRED_PNG_SIZES, copy_image, file_name_from_size,
                     generate_favicon, required_favicon_sizes)
from generators import (REQUIRED_ICNS_SIZES, REQUIRED_ICO_SIZES, generate_icns,
                        generate_ico, select_images)
from icns_container import read_icns
from ico_container import read_ico
from images import ImageInfo, filter_images_by_sizes, find_image, prepare_images
from logger import Logger

def test_required_favicon_sizes():
    assert required_favicon_sizes() == [16, 24, 32, 48, 57, 64, 72, 96, 120, 128, 144, 152, 195, 228]

def test_file_name_from_size():
    assert file_name_from_size(57) == "favicon-57.png"
    assert file_name_from_size(16) is None
    assert [s for _, s in PNG_FILE_INFOS] == REQUIRED_PNG_SIZES

def test_copy_image_unknown_size_is_ignored(tmp_path):
    quiet = Logger(quiet=True)
    assert copy_image(ImageInfo(size=17, path="nope.png"), str(tmp_path), quiet) == ""

def test_image_helpers(make_images):
    images = make_images([32, 16, 32, 48])
    assert [img.size for img in images] == [16, 32, 48]
    assert [img.size for img in filter_images_by_sizes(images, [48, 16])] == [16, 48]
    assert find_image(images, 32).size == 32
    assert find_image(images, 64) is None

def test_prepare_images_errors(tmp_path, source_png):
    with pytest.raises(FileNotFoundError):
        prepare_images(str(tmp_path / "missing.png"), [16], str(tmp_path))
    with pytest.raises(ValueError):
        prepare_images(source_png, [0], str(tmp_path))

def test_generate_ico_logs_missing(tmp_path, make_images, capsys):
    path = generate_ico(make_images([16, 32]), str(tmp_path / "out"), "app", Logger("ico"))
    assert os.path.basename(path) == "app.ico"
    assert [e["width"] for e in read_ico(path)] == [16, 32]
    out = capsys.readouterr().out
    assert "[ico] ICO: no 24px image, skipped" in out
    assert "[ico]   Create: " in out

def test_select_images_none(make_images):
    with pytest.raises(ValueError, match="No images for ICNS"):
        select_images(make_images([20]), [16, 32], "ICNS", Logger(quiet=True))

def test_generate_icns(tmp_path, make_images):
    path = generate_icns(make_images([16, 32, 128]), str(tmp_path), "app", Logger(quiet=True))
    assert set(read_icns(path)) == {"icp4", "icp5", "ic07", "ic11"}

def test_generate_favicon(tmp_path, make_images, capsys):
    images = make_images(required_favicon_sizes())
    out_dir = tmp_path / "site"
    results = generate_favicon(images, str(out_dir), Logger("favicon"))
    assert os.path.basename(results[0]) == "favicon.ico"
    assert sorted(os.path.basename(p) for p in results[1:]) == sorted(n for n, _ in PNG_FILE_INFOS)
    assert [e["width"] for e in read_ico(results[0])] == [16, 24, 32, 48, 64]
    out = capsys.readouterr().out
    # favicon.ico section is logged before the PNG section
    assert out.startswith("[favicon] ICO:")
    assert out.index("favicon.ico") < out.index("[favicon] Favicon:") < out.index("favicon-32.png")

def test_default_size_tables_are_immutable():
    assert isinstance(REQUIRED_ICO_SIZES, tuple)
    assert isinstance(REQUIRED_ICNS_SIZES, tuple)
    assert generate_ico.__defaults__[-1] is REQUIRED_ICO_SIZES
    assert generate_icns.__defaults__[-1] is REQUIRED_ICNS_SIZES
