import numpy as np
import pytest
from PIL import Image

from images import prepare_images

def make_rgba(size=64, seed=0):
    """Gradient with a flat band and a transparent corner, so both runs and literals occur."""
    rng = np.random.default_rng(seed)
    yy, xx = np.mgrid[:size, :size]
    img = np.zeros((size, size, 4), dtype=np.uint8)
    img[..., 0] = (xx * 255 // max(1, size - 1)).astype(np.uint8)
    img[..., 1] = 128
    img[..., 2] = rng.integers(0, 256, size=(size, size), dtype=np.uint8)
    img[..., 3] = 255
    img[: size // 4, : size // 4, 3] = 0
    return img

@pytest.fixture
def rgba():
    return make_rgba()

@pytest.fixture
def source_png(tmp_path):
    path = tmp_path / "source.png"
    Image.fromarray(make_rgba(64), "RGBA").save(path, format="PNG")
    return str(path)

@pytest.fixture
def make_images(tmp_path, source_png):
    def _make(sizes):
        return prepare_images(source_png, sizes, str(tmp_path / "work"))
    return _make
